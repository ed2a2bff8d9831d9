"""Console reporters for progress callbacks."""
from .reporter import ProgressReporter, SimpleReporter, create_reporter

__all__ = ["ProgressReporter", "SimpleReporter", "create_reporter"]
