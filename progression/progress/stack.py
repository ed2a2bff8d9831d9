"""
Task stack for one thread of control.

The stack holds the chain of active tasks, most recently begun last.
Tasks begun while another is active become its children, and must end
before it (strict LIFO nesting).
"""
import threading
from typing import List, Optional, Sequence, Tuple, Union

from ..core.exceptions import InvalidArgumentError, TaskNestingError
from ..logging import get_logger
from .calculators import (
    CustomCalculator,
    FixedCalculator,
    ProgressCalculator,
    StepFunction,
    UnknownCalculator,
    WeightedCalculator,
)
from .task import ProgressTask

logger = get_logger("progress.stack")


class ProgressStack:
    """
    Ordered chain of active tasks.

    Not thread-safe: each thread owns its own stack (see get_stack()).
    """

    def __init__(self):
        self._tasks: List[ProgressTask] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task: ProgressTask) -> bool:
        return any(t is task for t in self._tasks)

    @property
    def tasks(self) -> Tuple[ProgressTask, ...]:
        """Active tasks, root first."""
        return tuple(self._tasks)

    def current_task(self) -> Optional[ProgressTask]:
        """The most recently begun active task, or None."""
        return self._tasks[-1] if self._tasks else None

    def begin_task(
        self,
        calculator: ProgressCalculator,
        weight_in_parent: float = 1.0,
    ) -> ProgressTask:
        """
        Begin a task nested under the current task.

        Args:
            calculator: Strategy for the new task's progress
            weight_in_parent: Share (0.0 - 1.0) of the parent's current step
                this task represents

        Returns:
            The new, active task
        """
        if not isinstance(calculator, ProgressCalculator):
            raise InvalidArgumentError(f"Expected a ProgressCalculator, got {calculator!r}")
        if not (0.0 <= weight_in_parent <= 1.0):
            raise InvalidArgumentError(
                f"weight_in_parent must be between 0.0 and 1.0: {weight_in_parent}"
            )

        parent = self.current_task()
        task = ProgressTask(self, calculator, parent=parent, weight_in_parent=weight_in_parent)
        self._tasks.append(task)

        logger.debug(
            f"Task begun at depth {task.depth} with {calculator!r}",
            extra={"depth": task.depth},
        )
        return task

    def begin_fixed_task(self, total_steps: int, weight_in_parent: float = 1.0) -> ProgressTask:
        return self.begin_task(FixedCalculator(total_steps), weight_in_parent)

    def begin_weighted_task(
        self,
        weights: Sequence[float],
        weight_in_parent: float = 1.0,
    ) -> ProgressTask:
        return self.begin_task(WeightedCalculator(weights), weight_in_parent)

    def begin_unknown_task(
        self,
        estimated_count: int,
        estimated_weight: float,
        weight_in_parent: float = 1.0,
    ) -> ProgressTask:
        return self.begin_task(UnknownCalculator(estimated_count, estimated_weight), weight_in_parent)

    def begin_custom_task(
        self,
        calculator: Union[ProgressCalculator, StepFunction],
        weight_in_parent: float = 1.0,
    ) -> ProgressTask:
        return self.begin_task(CustomCalculator(calculator), weight_in_parent)

    def pop(self, task: ProgressTask):
        """
        Remove `task`, which must be the current task.

        Raises:
            TaskNestingError: `task` is not on top of the stack
        """
        top = self.current_task()
        if top is not task:
            logger.warning(
                f"Attempt to end task '{task.task_key}' out of order",
                extra={"task_key": task.task_key, "depth": task.depth},
            )
            raise TaskNestingError(task.task_key, top.task_key if top else None)
        self._tasks.pop()

    def aggregate_fraction(self, task: ProgressTask) -> float:
        """
        Progress of `task` including every active task nested below it.

        Folds from the innermost task outwards: each task adds its
        subtask's weighted progress to the span of its current step.
        """
        index = self._index_of(task)
        if index is None:
            return task.combine(0.0)

        nested = 0.0
        fraction = 0.0
        for inner in reversed(self._tasks[index:]):
            fraction = inner.combine(nested)
            nested = inner.weight_in_parent * fraction
        return fraction

    def status_text(self, separator: str = " > ") -> str:
        """Keys of the active tasks joined into one status line."""
        keys = [t.task_key for t in self._tasks if t.task_key]
        if not keys:
            return "Working..."
        return separator.join(keys)

    def _index_of(self, task: ProgressTask) -> Optional[int]:
        for index, candidate in enumerate(self._tasks):
            if candidate is task:
                return index
        return None

    def __repr__(self) -> str:
        return f"ProgressStack(depth={len(self._tasks)})"


# One default stack per thread
_local = threading.local()


def get_stack() -> ProgressStack:
    """Get the current thread's default task stack."""
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = ProgressStack()
        _local.stack = stack
    return stack


def set_stack(stack: Optional[ProgressStack]):
    """Replace the current thread's default task stack (None creates a fresh one on next use)."""
    _local.stack = stack
