"""
Type definitions for Progression.

Enums, constants and the payload delivered to progress callbacks.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Tuple


# Negative max depth means every nested level may notify.
AUTO_DEPTH = -1


class TaskState(str, Enum):
    """Task lifecycle states."""
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class ProgressChangedInfo:
    """Progress snapshot passed to a callback."""
    progress: float                  # Aggregate fraction of the registering task
    task_key: Optional[str] = None   # Key of the task that advanced or ended
    task_arg: Any = None
    depth: int = 0                   # Depth of that task below the registering task
    task_keys: Tuple[Optional[str], ...] = field(default_factory=tuple)

    @property
    def percent(self) -> float:
        """Progress as percentage (0 - 100)."""
        return self.progress * 100

    @property
    def description(self) -> str:
        """Task keys joined into a single status line."""
        return " > ".join(key for key in self.task_keys if key)


ProgressCallback = Callable[[ProgressChangedInfo], None]


@dataclass
class CallbackRegistration:
    """A callback and the deepest nested level allowed to trigger it."""
    callback: ProgressCallback
    max_depth: int = AUTO_DEPTH

    def accepts(self, relative_depth: int) -> bool:
        """Whether a change `relative_depth` levels down should fire."""
        if self.max_depth < 0:
            return True
        return relative_depth <= self.max_depth
