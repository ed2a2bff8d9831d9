"""Iteration helpers that drive progress tasks."""
from .adapter import (
    ProgressIterator,
    with_progress,
    with_progress_weighted,
    with_progress_unknown,
    with_progress_custom,
)

__all__ = [
    "ProgressIterator",
    "with_progress", "with_progress_weighted",
    "with_progress_unknown", "with_progress_custom",
]
