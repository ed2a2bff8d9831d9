"""
Progress tracking while a sequence is iterated.

Wraps any iterable so that consuming it advances a progress task and
exhausting it ends the task:

    with with_progress(files).set_task_key("Copying") as items:
        for path in items:
            copy(path)

Each element counts as completed once the next one is requested, so
tasks begun while handling an element fill that element's share.
Leaving a `for` loop early (break, return or an exception) drops the
loop's generator, which ends the task; a `with` block makes the same
guarantee explicit.
"""
from collections.abc import Sized
from typing import Any, Generic, Iterable, Iterator, Optional, Sequence, TypeVar, Union

from ..core.config import get_config
from ..core.exceptions import InvalidArgumentError, UnsupportedOperationError
from ..core.types import ProgressCallback
from ..logging import get_logger
from ..progress.calculators import ProgressCalculator, StepFunction
from ..progress.stack import ProgressStack, get_stack
from ..progress.task import ProgressTask

logger = get_logger("sequence.adapter")

T = TypeVar("T")


class ProgressIterator(Generic[T]):
    """
    Iterates a source while advancing a progress task.

    Configuration methods forward to the task and return the iterator so
    they can be chained at the call site. Iterating hands out a generator
    that closes the iterator when it is finished or discarded.
    """

    def __init__(self, source: Iterable[T], task: ProgressTask):
        self.source = source
        self.task = task
        self._iterator: Optional[Iterator[T]] = None
        self._pending = False   # an element was handed out and not yet counted
        self._source_closed = False
        self._closed = False

    def __iter__(self) -> Iterator[T]:
        if self._iterator is not None:
            raise UnsupportedOperationError("iterating a progress sequence more than once")
        self._iterator = iter(self.source)
        return self._drive()

    def _drive(self) -> Iterator[T]:
        """Yield elements; closing or dropping the generator ends the task."""
        try:
            while True:
                try:
                    item = next(self)
                except StopIteration:
                    return
                yield item
        finally:
            self.close()

    def __next__(self) -> T:
        if self._closed:
            raise StopIteration
        if self._iterator is None:
            self._iterator = iter(self.source)

        try:
            item = next(self._iterator)
        except StopIteration:
            self._complete_pending()
            self.close()
            raise

        self._complete_pending()
        self._pending = True
        return item

    def _complete_pending(self):
        if self._pending:
            self._pending = False
            self.task.advance_step()

    def close(self):
        """End the task, even if the source was not exhausted. Safe to call repeatedly."""
        if self._closed:
            return
        if self._pending:
            logger.debug(
                f"Sequence closed early after {self.task.current_step} steps",
                extra={"task_key": self.task.task_key, "step": self.task.current_step},
            )
        if not self._source_closed:
            self._source_closed = True
            close_source = getattr(self._iterator, "close", None)
            if close_source is not None:
                close_source()
        self.task.end()
        self._closed = True

    def reset(self):
        """Restarting is not supported: a task's step counter cannot be rewound."""
        raise UnsupportedOperationError("reset")

    def __enter__(self) -> "ProgressIterator[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Chainable configuration

    def set_callback(
        self,
        callback: ProgressCallback,
        max_depth: Optional[int] = None,
    ) -> "ProgressIterator[T]":
        self.task.set_callback(callback, max_depth)
        return self

    def set_task_key(self, task_key: Optional[str], task_arg: Any = None) -> "ProgressIterator[T]":
        self.task.set_task_key(task_key, task_arg)
        return self

    def set_max_depth(self, max_depth: int) -> "ProgressIterator[T]":
        self.task.set_max_depth(max_depth)
        return self

    def __str__(self) -> str:
        return str(self.task)

    def __repr__(self) -> str:
        return f"ProgressIterator({self.task!r})"


def _resolve(stack: Optional[ProgressStack]) -> ProgressStack:
    return stack if stack is not None else get_stack()


def with_progress(
    source: Iterable[T],
    count: Optional[int] = None,
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressIterator[T]:
    """
    Track progress over a source with a known number of elements.

    Args:
        source: Elements to iterate
        count: Number of elements; len(source) if None
    """
    if count is None:
        if not isinstance(source, Sized):
            raise InvalidArgumentError(
                "count is required when the source has no length",
                suggestions=["Use with_progress_unknown() for sequences of unknown length"],
            )
        count = len(source)
    return ProgressIterator(source, _resolve(stack).begin_fixed_task(count, weight_in_parent))


def with_progress_weighted(
    source: Iterable[T],
    weights: Sequence[float],
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressIterator[T]:
    """
    Track progress with one weight per element, e.g. the file sizes of a copy.
    """
    return ProgressIterator(source, _resolve(stack).begin_weighted_task(weights, weight_in_parent))


def with_progress_unknown(
    source: Iterable[T],
    estimated_count: int,
    estimated_weight: Optional[float] = None,
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressIterator[T]:
    """
    Track progress over a source of unknown length.

    Progress approaches 1.0 without reaching it until the source is
    exhausted. A source with a length is tracked as a fixed task instead.

    Args:
        estimated_count: Rough estimate of the number of elements
        estimated_weight: Progress after estimated_count elements, strictly
            between 0.0 and 1.0; configured default if None
    """
    stack = _resolve(stack)
    if isinstance(source, Sized):
        return ProgressIterator(source, stack.begin_fixed_task(len(source), weight_in_parent))

    if estimated_weight is None:
        estimated_weight = get_config().progress.default_estimated_weight
    return ProgressIterator(
        source,
        stack.begin_unknown_task(estimated_count, estimated_weight, weight_in_parent),
    )


def with_progress_custom(
    source: Iterable[T],
    calculator: Union[ProgressCalculator, StepFunction],
    weight_in_parent: float = 1.0,
    stack: Optional[ProgressStack] = None,
) -> ProgressIterator[T]:
    """Track progress using a custom calculator."""
    return ProgressIterator(source, _resolve(stack).begin_custom_task(calculator, weight_in_parent))
