"""Progress calculation and task hierarchy."""
from .calculators import (
    ProgressCalculator,
    FixedCalculator,
    WeightedCalculator,
    UnknownCalculator,
    CustomCalculator,
)
from .task import ProgressTask
from .stack import ProgressStack, get_stack, set_stack
from .api import (
    begin_fixed_task,
    begin_weighted_task,
    begin_unknown_task,
    begin_custom_task,
    current_task,
)

__all__ = [
    "ProgressCalculator", "FixedCalculator", "WeightedCalculator",
    "UnknownCalculator", "CustomCalculator",
    "ProgressTask", "ProgressStack", "get_stack", "set_stack",
    "begin_fixed_task", "begin_weighted_task", "begin_unknown_task",
    "begin_custom_task", "current_task",
]
