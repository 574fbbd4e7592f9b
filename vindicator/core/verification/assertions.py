"""
Per-sample assertions used by the replay driver.

An assertion is any callable ``(indicator, expected) -> None`` that raises
:class:`~vindicator.core.exceptions.IndicatorAssertionError` (an
``AssertionError``) on mismatch, so test runners report failures natively.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from vindicator.core.exceptions import ConvergenceError, IndicatorAssertionError
from vindicator.core.indicators.base import IndicatorBase

TIndicator = TypeVar("TIndicator", bound=IndicatorBase[Any])

Assertion = Callable[[IndicatorBase[Any], float], None]


def assert_within(epsilon: float) -> Assertion:
    """Assert ``current.value`` is within ``epsilon`` of the expected value."""

    def _assertion(indicator: IndicatorBase[Any], expected: float) -> None:
        actual = float(indicator.current.value)
        if abs(actual - expected) > epsilon:
            raise IndicatorAssertionError(
                f"Failed at {indicator.current.time.isoformat()}: "
                f"expected {expected} but was {actual} (epsilon {epsilon})",
                expected=expected,
                actual=actual,
                indicator_name=indicator.name,
            )

    return _assertion


def assert_selected_within(selector: Callable[[TIndicator], float], epsilon: float) -> Assertion:
    """Assert ``selector(indicator)`` is within ``epsilon`` of the expected value."""

    def _assertion(indicator: TIndicator, expected: float) -> None:
        actual = float(selector(indicator))
        if abs(actual - expected) > epsilon:
            raise IndicatorAssertionError(
                f"Failed at {indicator.current.time.isoformat()}: "
                f"expected {expected} but selected value was {actual} (epsilon {epsilon})",
                expected=expected,
                actual=actual,
                indicator_name=indicator.name,
            )

    return _assertion


class ConvergenceAssertion:
    """
    Stateful assertion requiring the error to keep shrinking.

    Indicators with unbounded memory (exponential smoothing) never match a
    reference computed from a different starting point exactly, but their
    error must not grow: each call fails when
    ``current_delta - previous_delta > epsilon``.

    The previous delta starts at the largest float, so the first call always
    passes.
    """

    def __init__(self, epsilon: float) -> None:
        self.epsilon = epsilon
        self.previous_delta = sys.float_info.max
        self.calls = 0

    def __call__(self, indicator: IndicatorBase[Any], expected: float) -> None:
        actual = float(indicator.current.value)
        current_delta = abs(actual - expected)
        if current_delta - self.previous_delta > self.epsilon:
            raise ConvergenceError(
                "The delta increased!",
                expected=expected,
                actual=actual,
                previous_delta=self.previous_delta,
                current_delta=current_delta,
                epsilon=self.epsilon,
                indicator_name=indicator.name,
            )
        self.previous_delta = current_delta
        self.calls += 1


def assert_delta_decreases(epsilon: float) -> ConvergenceAssertion:
    """Build a fresh :class:`ConvergenceAssertion`."""
    return ConvergenceAssertion(epsilon)


def assert_default_state(indicator: IndicatorBase[Any]) -> None:
    """Assert the indicator has no samples, is not ready and holds the sentinel value."""
    problems: list[str] = []
    if indicator.current.value != 0:
        problems.append(f"current value is {indicator.current.value}")
    if indicator.current.time != datetime.min:
        problems.append(f"current time is {indicator.current.time.isoformat()}")
    if indicator.samples != 0:
        problems.append(f"{indicator.samples} samples")
    if indicator.is_ready:
        problems.append("is ready")
    if problems:
        raise AssertionError(f"{indicator.name} is not in its default state: {', '.join(problems)}")
