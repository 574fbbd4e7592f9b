"""Average true range."""

from __future__ import annotations

from decimal import Decimal

from vindicator.core.indicators.base import BarIndicator
from vindicator.core.models import Bar


class AverageTrueRange(BarIndicator):
    """
    True range smoothed with Wilder's method.

    The first bar's true range is ``high - low``. Later bars also consider the
    gap to the previous close. Smoothing is a running mean for the first
    ``period`` bars and ``(previous * (period - 1) + tr) / period`` afterwards.
    """

    def __init__(self, period: int, name: str | None = None) -> None:
        if period < 1:
            raise ValueError(f"period must be at least 1, got {period}")
        super().__init__(name or f"ATR{period}")
        self._period = period
        self._previous: Bar | None = None
        self._true_range = Decimal(0)

    @property
    def period(self) -> int:
        return self._period

    @property
    def is_ready(self) -> bool:
        return self.samples >= self._period

    @property
    def true_range(self) -> Decimal:
        """True range of the most recent bar."""
        return self._true_range

    def compute_next_value(self, input: Bar) -> Decimal:
        true_range = input.high - input.low
        if self._previous is not None:
            previous_close = self._previous.close
            true_range = max(
                true_range,
                abs(input.high - previous_close),
                abs(input.low - previous_close),
            )
        self._previous = input
        self._true_range = true_range

        if self.samples == 1:
            return true_range
        if self.samples <= self._period:
            return (self.current.value * (self.samples - 1) + true_range) / self.samples
        return (self.current.value * (self._period - 1) + true_range) / self._period

    def reset(self) -> None:
        super().reset()
        self._previous = None
        self._true_range = Decimal(0)
