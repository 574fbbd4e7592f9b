"""Tests for the per-sample assertions."""

from __future__ import annotations

import sys
from datetime import datetime
from decimal import Decimal

import pytest

from vindicator.core.exceptions import ConvergenceError, ErrorCode, IndicatorAssertionError
from vindicator.core.indicators import Indicator, SimpleMovingAverage
from vindicator.core.models import Sample
from vindicator.core.verification import (
    ConvergenceAssertion,
    assert_default_state,
    assert_delta_decreases,
    assert_selected_within,
    assert_within,
)


class _Fixed(Indicator):
    """Indicator whose output is whatever it was last fed."""

    @property
    def is_ready(self) -> bool:
        return True

    def compute_next_value(self, input: Sample) -> Decimal:
        return input.value


def _at(value: str | float) -> _Fixed:
    indicator = _Fixed("fixed")
    indicator.update(Sample(time=datetime(2024, 3, 1, 16), value=Decimal(str(value))))
    return indicator


def _check_deltas(assertion: ConvergenceAssertion, deltas: list[float]) -> None:
    for delta in deltas:
        assertion(_at(0), delta)


class TestAssertWithin:
    def test_passes_within_epsilon(self) -> None:
        assert_within(1e-3)(_at("10.0005"), 10.0)

    def test_fails_beyond_epsilon_with_timestamp(self) -> None:
        with pytest.raises(IndicatorAssertionError) as exc_info:
            assert_within(1e-3)(_at("10.01"), 10.0)

        error = exc_info.value
        assert "Failed at 2024-03-01T16:00:00" in error.message
        assert error.expected == 10.0
        assert error.actual == pytest.approx(10.01)
        assert error.indicator_name == "fixed"
        assert error.error_code == ErrorCode.ASSERTION_FAILED.value

    def test_failure_is_an_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            assert_within(0.5)(_at(3), 1.0)


class TestAssertSelectedWithin:
    def test_compares_selected_value(self) -> None:
        indicator = _at(5)
        assertion = assert_selected_within(lambda i: float(i.current.value) * 2, 1e-6)

        assertion(indicator, 10.0)
        with pytest.raises(IndicatorAssertionError):
            assertion(indicator, 5.0)


class TestConvergenceAssertion:
    def test_starts_at_largest_float(self) -> None:
        assertion = assert_delta_decreases(0.01)

        assert isinstance(assertion, ConvergenceAssertion)
        assert assertion.previous_delta == sys.float_info.max

    def test_first_call_always_passes(self) -> None:
        assertion = assert_delta_decreases(0.0001)

        assertion(_at(0), 1e300)

        assert assertion.previous_delta == 1e300

    def test_non_increasing_deltas_never_fail(self) -> None:
        assertion = assert_delta_decreases(0.001)

        _check_deltas(assertion, [5.0, 4.0, 4.0, 2.5, 0.1, 0.0, 0.0])

        assert assertion.calls == 7

    def test_increase_within_epsilon_passes(self) -> None:
        assertion = assert_delta_decreases(0.01)

        _check_deltas(assertion, [0.5, 0.3, 0.305])

        assert assertion.previous_delta == pytest.approx(0.305)

    def test_increase_of_exactly_epsilon_passes(self) -> None:
        assertion = assert_delta_decreases(0.25)

        _check_deltas(assertion, [1.0, 0.5, 0.75])

        assert assertion.calls == 3

    def test_decimal_literal_increase_of_epsilon_fails_in_floats(self) -> None:
        # 0.31 - 0.3 is 0.010000000000000009 in binary floating point
        assertion = assert_delta_decreases(0.01)
        _check_deltas(assertion, [0.5, 0.3])

        with pytest.raises(ConvergenceError):
            assertion(_at(0), 0.31)

        assert assertion.previous_delta == pytest.approx(0.3)

    def test_fails_exactly_at_the_increasing_pair(self) -> None:
        assertion = assert_delta_decreases(0.01)
        _check_deltas(assertion, [0.5, 0.3])

        with pytest.raises(ConvergenceError) as exc_info:
            assertion(_at(0), 0.32)

        error = exc_info.value
        assert error.message == "The delta increased!"
        assert error.previous_delta == pytest.approx(0.3)
        assert error.current_delta == pytest.approx(0.32)
        assert error.error_code == ErrorCode.CONVERGENCE_VIOLATION.value
        assert assertion.previous_delta == pytest.approx(0.3)
        assert assertion.calls == 2

    def test_delta_is_absolute(self) -> None:
        assertion = assert_delta_decreases(0.01)

        assertion(_at(10), 10.5)
        assertion(_at(10), 9.6)

        with pytest.raises(ConvergenceError):
            assertion(_at(10), 9.0)

    def test_each_builder_call_has_its_own_state(self) -> None:
        first = assert_delta_decreases(0.01)
        second = assert_delta_decreases(0.01)

        first(_at(0), 0.001)

        second(_at(0), 5.0)
        assert first.previous_delta == pytest.approx(0.001)


class TestAssertDefaultState:
    def test_passes_for_fresh_indicator(self) -> None:
        assert_default_state(SimpleMovingAverage(3))

    def test_reports_every_deviation(self) -> None:
        with pytest.raises(AssertionError) as exc_info:
            assert_default_state(_at(7))

        message = str(exc_info.value)
        assert "current value is 7" in message
        assert "1 samples" in message
        assert "is ready" in message
