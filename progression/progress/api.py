"""
Entry points for beginning tasks.

Each begin_* function starts a task on the given stack, or on the
current thread's default stack, nested under whatever task is active.

    with begin_fixed_task(len(files)) as task:
        task.set_task_key("Copying")
        for path in files:
            copy(path)
            task.advance_step()
"""
from typing import Optional, Sequence, Union

from .calculators import ProgressCalculator, StepFunction
from .stack import ProgressStack, get_stack
from .task import ProgressTask


def _resolve(stack: Optional[ProgressStack]) -> ProgressStack:
    return stack if stack is not None else get_stack()


def begin_fixed_task(
    total_steps: int,
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressTask:
    """Begin a task with a known number of equal steps."""
    return _resolve(stack).begin_fixed_task(total_steps, weight_in_parent)


def begin_weighted_task(
    weights: Sequence[float],
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressTask:
    """Begin a task whose steps carry explicit weights."""
    return _resolve(stack).begin_weighted_task(weights, weight_in_parent)


def begin_unknown_task(
    estimated_count: int,
    estimated_weight: float,
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressTask:
    """
    Begin a task with an unknown number of steps.

    Args:
        estimated_count: Rough estimate of the number of steps
        estimated_weight: Progress reported once estimated_count steps are
            done, strictly between 0.0 and 1.0
    """
    return _resolve(stack).begin_unknown_task(estimated_count, estimated_weight, weight_in_parent)


def begin_custom_task(
    calculator: Union[ProgressCalculator, StepFunction],
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressTask:
    """Begin a task driven by a custom calculator or step -> fraction callable."""
    return _resolve(stack).begin_custom_task(calculator, weight_in_parent)


def current_task(stack: Optional[ProgressStack] = None) -> Optional[ProgressTask]:
    """The innermost active task, or None."""
    return _resolve(stack).current_task()
