"""
Custom exceptions for Progression.

Provides meaningful error messages and suggestions for misuse of the
task hierarchy.
"""
from typing import List, Optional


class ProgressionError(Exception):
    """Base exception for Progression errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or []


class InvalidArgumentError(ProgressionError, ValueError):
    """Malformed calculator or task parameters."""
    pass


class OutOfRangeError(ProgressionError, IndexError):
    """Step requested beyond what a calculator declares."""

    def __init__(self, step: int, total_steps: int):
        super().__init__(
            f"Step {step} is outside the range 0..{total_steps}",
            suggestions=[
                "Check the step count passed when the task was begun",
                "Use an unknown task if the number of steps is not known",
            ]
        )
        self.step = step
        self.total_steps = total_steps


class IllegalStateError(ProgressionError, RuntimeError):
    """Operation not allowed in the task's current state."""
    pass


class TaskEndedError(IllegalStateError):
    """Task has already ended."""

    def __init__(self, task_key: Optional[str] = None):
        label = f" '{task_key}'" if task_key else ""
        super().__init__(
            f"Progress task{label} has already ended",
            suggestions=[
                "Do not advance a task after calling end()",
            ]
        )


class TaskNestingError(IllegalStateError):
    """Task ended out of order."""

    def __init__(self, task_key: Optional[str] = None, top_key: Optional[str] = None):
        label = f" '{task_key}'" if task_key else ""
        message = f"Progress task{label} is not the current task and cannot be ended"
        if top_key:
            message += f" (current task: '{top_key}')"
        super().__init__(
            message,
            suggestions=[
                "End nested tasks before the task that began them",
                "Use 'with' blocks so tasks end in reverse order",
            ]
        )


class UnsupportedOperationError(ProgressionError):
    """Operation not supported by a progress sequence."""

    def __init__(self, operation: str):
        super().__init__(
            f"Unsupported operation: {operation}",
            suggestions=[
                "A progress step counter cannot be rewound",
                "Wrap the source again to track a new pass",
            ]
        )
        self.operation = operation
