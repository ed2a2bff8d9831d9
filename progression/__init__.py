"""
Progression - Nested Progress Tracking

Reports a single completion fraction (0.0 - 1.0) for long-running,
possibly nested, multi-step operations.
"""

__version__ = "1.0.0"

from .core.config import Config, get_config, set_config
from .core.exceptions import (
    ProgressionError,
    InvalidArgumentError,
    OutOfRangeError,
    IllegalStateError,
    TaskEndedError,
    TaskNestingError,
    UnsupportedOperationError,
)
from .core.types import AUTO_DEPTH, TaskState, ProgressChangedInfo
from .progress import (
    ProgressCalculator,
    FixedCalculator,
    WeightedCalculator,
    UnknownCalculator,
    CustomCalculator,
    ProgressTask,
    ProgressStack,
    get_stack,
    set_stack,
    begin_fixed_task,
    begin_weighted_task,
    begin_unknown_task,
    begin_custom_task,
    current_task,
)
from .sequence import (
    ProgressIterator,
    with_progress,
    with_progress_weighted,
    with_progress_unknown,
    with_progress_custom,
)

__all__ = [
    "__version__",
    "Config", "get_config", "set_config",
    "ProgressionError", "InvalidArgumentError", "OutOfRangeError",
    "IllegalStateError", "TaskEndedError", "TaskNestingError",
    "UnsupportedOperationError",
    "AUTO_DEPTH", "TaskState", "ProgressChangedInfo",
    "ProgressCalculator", "FixedCalculator", "WeightedCalculator",
    "UnknownCalculator", "CustomCalculator",
    "ProgressTask", "ProgressStack", "get_stack", "set_stack",
    "begin_fixed_task", "begin_weighted_task", "begin_unknown_task",
    "begin_custom_task", "current_task",
    "ProgressIterator", "with_progress", "with_progress_weighted",
    "with_progress_unknown", "with_progress_custom",
]
