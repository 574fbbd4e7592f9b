"""Indicators computed over a bounded rolling window."""

from __future__ import annotations

from abc import abstractmethod
from collections import deque
from decimal import Decimal

from vindicator.core.indicators.base import Indicator
from vindicator.core.models import Sample


class WindowIndicator(Indicator):
    """Keeps the last ``period`` values; ready once ``period`` samples were seen."""

    def __init__(self, name: str, period: int) -> None:
        if period < 1:
            raise ValueError(f"period must be at least 1, got {period}")
        super().__init__(name)
        self._period = period
        self._window: deque[Decimal] = deque(maxlen=period)

    @property
    def period(self) -> int:
        return self._period

    @property
    def is_ready(self) -> bool:
        return self.samples >= self._period

    @property
    def window(self) -> tuple[Decimal, ...]:
        """Window contents, oldest first."""
        return tuple(self._window)

    def compute_next_value(self, input: Sample) -> Decimal:
        self._window.append(input.value)
        return self.compute_window_value(self._window, input)

    @abstractmethod
    def compute_window_value(self, window: deque[Decimal], input: Sample) -> Decimal:
        """Compute the output from the window, which already holds ``input``."""

    def reset(self) -> None:
        super().reset()
        self._window.clear()
