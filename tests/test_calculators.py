"""Tests for progress calculators."""

from __future__ import annotations

import pytest

from progression.core.exceptions import InvalidArgumentError, OutOfRangeError
from progression.progress.calculators import (
    CustomCalculator,
    FixedCalculator,
    UnknownCalculator,
    WeightedCalculator,
)


class TestFixedCalculator:
    def test_fraction_is_exact_ratio(self) -> None:
        calc = FixedCalculator(7)
        for step in range(8):
            assert calc.compute_fraction(step) == step / 7

    def test_bounds(self) -> None:
        calc = FixedCalculator(3)
        assert calc.compute_fraction(0) == 0.0
        assert calc.compute_fraction(3) == 1.0

    def test_zero_steps(self) -> None:
        calc = FixedCalculator(0)
        assert calc.compute_fraction(0) == 0.0
        with pytest.raises(OutOfRangeError):
            calc.compute_fraction(1)

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            FixedCalculator(-1)

    def test_non_integer_total_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            FixedCalculator(2.5)

    def test_step_beyond_total(self) -> None:
        with pytest.raises(OutOfRangeError) as exc_info:
            FixedCalculator(2).compute_fraction(3)
        assert exc_info.value.step == 3
        assert exc_info.value.total_steps == 2

    def test_next_fraction(self) -> None:
        calc = FixedCalculator(4)
        assert calc.next_fraction(0) == 0.25
        assert calc.next_fraction(4) is None


class TestWeightedCalculator:
    def test_weights_two_three_five(self) -> None:
        calc = WeightedCalculator([2, 3, 5])
        assert calc.compute_fraction(0) == 0.0
        assert calc.compute_fraction(1) == 0.2
        assert calc.compute_fraction(2) == 0.5
        assert calc.compute_fraction(3) == 1.0

    def test_total_steps(self) -> None:
        assert WeightedCalculator([1.5, 2.5]).total_steps == 2

    def test_empty_weights_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            WeightedCalculator([])

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            WeightedCalculator([1, -2, 3])

    def test_non_finite_weight_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            WeightedCalculator([1, float("nan")])

    def test_step_beyond_weights(self) -> None:
        with pytest.raises(OutOfRangeError):
            WeightedCalculator([1, 1]).compute_fraction(3)

    def test_all_zero_weights_fall_back_to_equal_steps(self) -> None:
        calc = WeightedCalculator([0, 0, 0, 0])
        assert calc.compute_fraction(1) == 0.25
        assert calc.compute_fraction(4) == 1.0

    def test_next_fraction(self) -> None:
        calc = WeightedCalculator([2, 3, 5])
        assert calc.next_fraction(1) == 0.5
        assert calc.next_fraction(3) is None


class TestUnknownCalculator:
    def test_shape(self) -> None:
        calc = UnknownCalculator(100, 0.75)
        assert calc.compute_fraction(0) == 0.0
        assert calc.compute_fraction(100) == pytest.approx(0.75)
        assert calc.compute_fraction(1000) < 1.0

    def test_strictly_increasing(self) -> None:
        calc = UnknownCalculator(100, 0.75)
        values = [calc.compute_fraction(step) for step in range(0, 1001, 10)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_never_reaches_one(self) -> None:
        calc = UnknownCalculator(1, 0.99)
        assert calc.compute_fraction(10_000) < 1.0

    @pytest.mark.parametrize("weight", [0.0, 1.0, -0.5, 1.5])
    def test_weight_outside_open_interval_rejected(self, weight: float) -> None:
        with pytest.raises(InvalidArgumentError):
            UnknownCalculator(10, weight)

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_rejected(self, count: int) -> None:
        with pytest.raises(InvalidArgumentError):
            UnknownCalculator(count, 0.5)

    def test_negative_step(self) -> None:
        with pytest.raises(OutOfRangeError):
            UnknownCalculator(10, 0.5).compute_fraction(-1)

    def test_next_fraction_always_exists(self) -> None:
        calc = UnknownCalculator(10, 0.5)
        assert calc.next_fraction(0) > 0.0
        assert calc.next_fraction(50) > calc.compute_fraction(50)


class TestCustomCalculator:
    def test_wraps_callable(self) -> None:
        calc = CustomCalculator(lambda step: step / 4)
        assert calc.compute_fraction(1) == 0.25

    def test_wraps_calculator(self) -> None:
        calc = CustomCalculator(FixedCalculator(2))
        assert calc.compute_fraction(1) == 0.5
        with pytest.raises(OutOfRangeError):
            calc.compute_fraction(3)

    def test_clamps_into_unit_interval(self) -> None:
        assert CustomCalculator(lambda step: 2.0).compute_fraction(1) == 1.0
        assert CustomCalculator(lambda step: -1.0).compute_fraction(1) == 0.0

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(InvalidArgumentError):
            CustomCalculator(42)
