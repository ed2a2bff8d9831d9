"""
Progress tasks.

A task owns a calculator and a step counter. Nested tasks fill the span
of their parent's next step, so every ancestor's progress moves as the
innermost task advances.
"""
from typing import Any, List, Optional, TYPE_CHECKING

from ..core.config import get_config
from ..core.exceptions import TaskEndedError
from ..core.types import (
    CallbackRegistration,
    ProgressCallback,
    ProgressChangedInfo,
    TaskState,
)
from ..logging import get_logger
from .calculators import ProgressCalculator

if TYPE_CHECKING:
    from .stack import ProgressStack

logger = get_logger("progress.task")


class ProgressTask:
    """
    One tracked unit of progress-bearing work.

    Created by ProgressStack.begin_task() (or the begin_*_task helpers),
    advanced by the code doing the work and finished with end(). Usable
    as a context manager so it ends on every exit path.
    """

    def __init__(
        self,
        stack: "ProgressStack",
        calculator: ProgressCalculator,
        parent: Optional["ProgressTask"] = None,
        weight_in_parent: float = 1.0,
    ):
        self.stack = stack
        self.calculator = calculator
        self.parent = parent
        self.depth = 0 if parent is None else parent.depth + 1
        self.weight_in_parent = weight_in_parent

        self.current_step = 0
        self.local_fraction = calculator.compute_fraction(0)
        self.state = TaskState.ACTIVE

        self.task_key: Optional[str] = None
        self.task_arg: Any = None

        self._callbacks: List[CallbackRegistration] = []
        # Share of the current step already filled by ended subtasks
        self._completed_children = 0.0

    @property
    def is_ended(self) -> bool:
        return self.state is TaskState.ENDED

    @property
    def progress(self) -> float:
        """Aggregate fraction including active nested tasks."""
        if self.is_ended:
            return 1.0
        return self.stack.aggregate_fraction(self)

    @property
    def percent(self) -> float:
        return self.progress * 100

    def advance_step(self) -> "ProgressTask":
        """
        Mark one more step as completed and notify callbacks.

        Raises:
            TaskEndedError: the task has already ended
            OutOfRangeError: the calculator declares fewer steps
        """
        if self.is_ended:
            raise TaskEndedError(self.task_key)

        next_step = self.current_step + 1
        fraction = self.calculator.compute_fraction(next_step)

        self.current_step = next_step
        self.local_fraction = fraction
        self._completed_children = 0.0

        self._notify()
        return self

    def end(self):
        """
        End the task: progress becomes 1.0 and it is removed from the stack.

        Calling end() again is a no-op.

        Raises:
            TaskNestingError: a task begun after this one is still active
        """
        if self.is_ended:
            return

        self.stack.pop(self)
        self.local_fraction = 1.0
        self.state = TaskState.ENDED
        if self.parent is not None:
            self.parent._complete_child(self.weight_in_parent)

        logger.debug(
            f"Task ended after {self.current_step} steps: {self.task_key}",
            extra={"task_key": self.task_key, "depth": self.depth, "step": self.current_step},
        )

        try:
            self._notify()
        finally:
            self._callbacks.clear()

    def set_callback(
        self,
        callback: ProgressCallback,
        max_depth: Optional[int] = None,
    ) -> "ProgressTask":
        """
        Register a callback fired when this task or a nested task changes.

        Args:
            callback: Receives a ProgressChangedInfo
            max_depth: Deepest nested level (relative to this task) allowed
                to trigger the callback; negative means Auto (unlimited).
                Uses the configured default if None.
        """
        if max_depth is None:
            max_depth = get_config().progress.default_max_depth
        self._callbacks.append(CallbackRegistration(callback, max_depth))
        return self

    def set_max_depth(self, max_depth: int) -> "ProgressTask":
        """Change the depth limit of every callback registered on this task."""
        for registration in self._callbacks:
            registration.max_depth = max_depth
        return self

    def set_task_key(self, task_key: Optional[str], task_arg: Any = None) -> "ProgressTask":
        """Describe the task (or its current phase). Does not affect progress."""
        self.task_key = task_key
        self.task_arg = task_arg
        return self

    def combine(self, nested: float) -> float:
        """
        Progress of this task given the weighted progress of its active subtask.

        Args:
            nested: Active subtask's progress times its weight in this task
        """
        if self.is_ended:
            return 1.0
        share = min(1.0, self._completed_children + nested)
        if share <= 0.0:
            return self.local_fraction

        upper = self.calculator.next_fraction(self.current_step)
        if upper is None or upper <= self.local_fraction:
            return self.local_fraction
        if share >= 1.0:
            return upper
        # Capped at the next step's value so advancing never moves progress back
        return min(upper, self.local_fraction + (upper - self.local_fraction) * share)

    def _complete_child(self, weight: float):
        self._completed_children = min(1.0, self._completed_children + weight)

    def _notify(self):
        """Fire callbacks on this task and its ancestors within their depth limits."""
        owner: Optional[ProgressTask] = self
        keys: List[Optional[str]] = []
        while owner is not None:
            keys.insert(0, owner.task_key)
            relative_depth = self.depth - owner.depth
            registrations = [r for r in owner._callbacks if r.accepts(relative_depth)]
            if registrations:
                info = ProgressChangedInfo(
                    progress=owner.progress,
                    task_key=self.task_key,
                    task_arg=self.task_arg,
                    depth=relative_depth,
                    task_keys=tuple(keys),
                )
                for registration in registrations:
                    registration.callback(info)
            owner = owner.parent

    def __enter__(self) -> "ProgressTask":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end()

    def __repr__(self) -> str:
        return (
            f"ProgressTask(key={self.task_key!r}, step={self.current_step}, "
            f"progress={self.progress:.2f}, state={self.state.value})"
        )

    def __str__(self) -> str:
        label = self.task_key or "task"
        return f"{label}: {self.percent:.0f}%"
