"""Moving averages."""

from __future__ import annotations

from collections import deque
from decimal import Decimal

from vindicator.core.indicators.base import Indicator
from vindicator.core.indicators.window import WindowIndicator
from vindicator.core.models import Sample


class SimpleMovingAverage(WindowIndicator):
    """Arithmetic mean of the last ``period`` values."""

    def __init__(self, period: int, name: str | None = None) -> None:
        super().__init__(name or f"SMA{period}", period)

    def compute_window_value(self, window: deque[Decimal], input: Sample) -> Decimal:
        # while warming, average whatever is available
        return sum(window, Decimal(0)) / len(window)


class ExponentialMovingAverage(Indicator):
    """
    Exponentially smoothed average.

    The first output equals the first input; afterwards
    ``value = input * k + previous * (1 - k)`` with ``k = 2 / (period + 1)``.
    The indicator never forgets old inputs, so it only converges towards
    reference values produced from a different starting point.
    """

    def __init__(self, period: int, name: str | None = None) -> None:
        if period < 1:
            raise ValueError(f"period must be at least 1, got {period}")
        super().__init__(name or f"EMA{period}")
        self._period = period
        self._k = Decimal(2) / Decimal(period + 1)

    @property
    def period(self) -> int:
        return self._period

    @property
    def is_ready(self) -> bool:
        return self.samples >= self._period

    def compute_next_value(self, input: Sample) -> Decimal:
        if self.samples == 1:
            return input.value
        return input.value * self._k + self.current.value * (Decimal(1) - self._k)
