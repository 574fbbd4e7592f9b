"""
Indicator state machine contract.

Every indicator consumes an ordered stream of inputs one at a time and exposes
its latest output through ``current``. An indicator starts out *warming*
(``is_ready`` is false) and switches to *ready* once it has seen enough
history; only :meth:`IndicatorBase.reset` takes it back to the warming state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import Decimal
from typing import Generic, TypeVar

from vindicator.core.models import Bar, Sample

TInput = TypeVar("TInput", Sample, Bar)

BarSelector = Callable[[Bar], Decimal]


def select_close(bar: Bar) -> Decimal:
    return bar.close


class IndicatorBase(ABC, Generic[TInput]):
    """
    Base class for streaming indicators.

    Subclasses implement :meth:`compute_next_value` and :attr:`is_ready`; the
    base class owns sample counting and the ``current`` output.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._samples = 0
        self._current = Sample.default()

    @property
    def name(self) -> str:
        return self._name

    @property
    def samples(self) -> int:
        """Number of updates accepted since construction or the last reset."""
        return self._samples

    @property
    def current(self) -> Sample:
        """Latest output; the default sentinel before the first update."""
        return self._current

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True once enough history has been seen to produce valid output."""

    def update(self, input: TInput) -> bool:
        """
        Feed one input to the indicator.

        Time ordering is the caller's responsibility and is not validated.
        ``samples`` already counts ``input`` while :meth:`compute_next_value`
        runs; if it raises, the count is restored and ``current`` is unchanged.

        Args:
            input: The next observation

        Returns:
            bool: ``is_ready`` after the update
        """
        self._samples += 1
        try:
            value = self.compute_next_value(input)
        except Exception:
            self._samples -= 1
            raise
        self._current = Sample(time=input.time, value=value)
        return self.is_ready

    def reset(self) -> None:
        """Return to the just-constructed state."""
        self._samples = 0
        self._current = Sample.default()

    @abstractmethod
    def compute_next_value(self, input: TInput) -> Decimal:
        """Compute the output for ``input``; ``samples`` already counts it."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, samples={self._samples}, ready={self.is_ready})"


class Indicator(IndicatorBase[Sample]):
    """Indicator consuming single-valued samples."""

    def update_bar(self, bar: Bar, selector: BarSelector | None = None) -> bool:
        """Update with the value ``selector`` picks from ``bar`` (the close by default)."""
        selector = selector or select_close
        return self.update(Sample(time=bar.time, value=selector(bar)))


class BarIndicator(IndicatorBase[Bar]):
    """Indicator consuming full OHLCV bars."""
