"""
Progress calculators.

A calculator turns the number of completed steps of one task into a
fraction complete (0.0 - 1.0). Four strategies share the same contract:

- FixedCalculator: a known number of equal steps
- WeightedCalculator: one explicit weight per step
- UnknownCalculator: an unknown number of steps, approaching 1.0
- CustomCalculator: any caller-supplied strategy
"""
import math
from abc import ABC, abstractmethod
from itertools import accumulate
from numbers import Real
from typing import Callable, List, Optional, Sequence, Union

from ..core.exceptions import InvalidArgumentError, OutOfRangeError


# Largest float below 1.0
_ALMOST_ONE = math.nextafter(1.0, 0.0)


class ProgressCalculator(ABC):
    """Strategy computing the local fraction of a single task."""

    @abstractmethod
    def compute_fraction(self, step: int) -> float:
        """
        Fraction complete after `step` completed steps.

        Raises:
            OutOfRangeError: step is negative or beyond the declared total
        """

    def next_fraction(self, step: int) -> Optional[float]:
        """Fraction once the step after `step` completes, or None if there is none."""
        try:
            return self.compute_fraction(step + 1)
        except OutOfRangeError:
            return None


class FixedCalculator(ProgressCalculator):
    """A known number of equally sized steps."""

    def __init__(self, total_steps: int):
        if isinstance(total_steps, bool) or not isinstance(total_steps, int):
            raise InvalidArgumentError(f"total_steps must be an integer, got {total_steps!r}")
        if total_steps < 0:
            raise InvalidArgumentError(
                f"total_steps cannot be negative: {total_steps}",
                suggestions=["Pass the number of items that will be processed"],
            )
        self.total_steps = total_steps

    def compute_fraction(self, step: int) -> float:
        if step < 0 or step > self.total_steps:
            raise OutOfRangeError(step, self.total_steps)
        if self.total_steps == 0:
            return 0.0
        return step / self.total_steps

    def __repr__(self) -> str:
        return f"FixedCalculator(total_steps={self.total_steps})"


class WeightedCalculator(ProgressCalculator):
    """
    Steps of unequal size, e.g. the file sizes of a copy operation.

    A task with weights [2, 3, 5] is 20% complete after the first step
    and 50% after the second.
    """

    def __init__(self, weights: Sequence[float]):
        weights = list(weights)
        if not weights:
            raise InvalidArgumentError(
                "weights cannot be empty",
                suggestions=["Pass one weight per expected step"],
            )
        for weight in weights:
            if isinstance(weight, bool) or not isinstance(weight, Real) or not math.isfinite(weight):
                raise InvalidArgumentError(f"weights must be finite numbers, got {weight!r}")
            if weight < 0:
                raise InvalidArgumentError(f"weights cannot be negative: {weight}")

        self.weights = tuple(float(w) for w in weights)
        self._cumulative: List[float] = [0.0] + list(accumulate(self.weights))
        self.total_weight = self._cumulative[-1]

    @property
    def total_steps(self) -> int:
        return len(self.weights)

    def compute_fraction(self, step: int) -> float:
        if step < 0 or step > self.total_steps:
            raise OutOfRangeError(step, self.total_steps)
        if step == self.total_steps:
            return 1.0
        if self.total_weight == 0:
            # All steps weightless: fall back to equal steps
            return step / self.total_steps
        return self._cumulative[step] / self.total_weight

    def __repr__(self) -> str:
        return f"WeightedCalculator(weights={list(self.weights)})"


class UnknownCalculator(ProgressCalculator):
    """
    An unknown number of steps.

    Progress reaches `estimated_weight` after `estimated_count` steps and
    keeps approaching 1.0 without ever reaching it. With an estimated
    count of 100 and a weight of 0.75, progress is 75% after 100 steps.
    """

    def __init__(self, estimated_count: int, estimated_weight: float):
        if isinstance(estimated_count, bool) or not isinstance(estimated_count, int):
            raise InvalidArgumentError(
                f"estimated_count must be an integer, got {estimated_count!r}"
            )
        if estimated_count <= 0:
            raise InvalidArgumentError(
                f"estimated_count must be positive: {estimated_count}",
                suggestions=["Pass a rough estimate of the number of steps"],
            )
        if not (0.0 < estimated_weight < 1.0):
            raise InvalidArgumentError(
                f"estimated_weight must be between 0.0 and 1.0 (exclusive): {estimated_weight}",
                suggestions=["0.0 never moves and 1.0 saturates immediately; try 0.5 - 0.9"],
            )
        self.estimated_count = estimated_count
        self.estimated_weight = float(estimated_weight)

    def compute_fraction(self, step: int) -> float:
        if step < 0:
            raise OutOfRangeError(step, self.estimated_count)
        if step == 0:
            return 0.0
        remaining = (1.0 - self.estimated_weight) ** (step / self.estimated_count)
        return min(1.0 - remaining, _ALMOST_ONE)

    def __repr__(self) -> str:
        return (
            f"UnknownCalculator(estimated_count={self.estimated_count}, "
            f"estimated_weight={self.estimated_weight})"
        )


StepFunction = Callable[[int], float]


class CustomCalculator(ProgressCalculator):
    """
    Delegates to a caller-supplied strategy.

    The strategy is another ProgressCalculator or a plain callable taking
    the step count. Results are clamped into [0, 1]; monotonicity is the
    strategy's responsibility.
    """

    def __init__(self, strategy: Union[ProgressCalculator, StepFunction]):
        if isinstance(strategy, ProgressCalculator):
            self._compute = strategy.compute_fraction
        elif callable(strategy):
            self._compute = strategy
        else:
            raise InvalidArgumentError(
                f"custom calculator must be a ProgressCalculator or callable, got {strategy!r}"
            )
        self.strategy = strategy

    def compute_fraction(self, step: int) -> float:
        return min(1.0, max(0.0, float(self._compute(step))))

    def __repr__(self) -> str:
        return f"CustomCalculator({self.strategy!r})"
