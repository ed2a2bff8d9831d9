"""Core configuration, types and exceptions."""
from .config import Config, get_config, set_config
from .types import AUTO_DEPTH, TaskState, ProgressChangedInfo, ProgressCallback
from .exceptions import (
    ProgressionError,
    InvalidArgumentError,
    OutOfRangeError,
    IllegalStateError,
    TaskEndedError,
    TaskNestingError,
    UnsupportedOperationError,
)

__all__ = [
    "Config", "get_config", "set_config",
    "AUTO_DEPTH", "TaskState", "ProgressChangedInfo", "ProgressCallback",
    "ProgressionError", "InvalidArgumentError", "OutOfRangeError",
    "IllegalStateError", "TaskEndedError", "TaskNestingError",
    "UnsupportedOperationError",
]
