"""vindicator - streaming indicator contract and golden-file verification.

Replay recorded reference datasets through streaming technical indicators and
check their output sample by sample.

Examples:
    >>> from vindicator import SimpleMovingAverage, verify_indicator
    >>> sma = SimpleMovingAverage(14)
    >>> summary = verify_indicator(sma, "SMA14", filename="spy_with_indicators.txt")
    >>> summary.asserted > 0
    True
"""

from vindicator.core.data import ReferenceDataset, generate_samples, read_bars
from vindicator.core.exceptions import (
    ConvergenceError,
    DataFormatError,
    HeaderResolutionError,
    IndicatorAssertionError,
    VindicatorError,
)
from vindicator.core.indicators import (
    AverageTrueRange,
    BarIndicator,
    ExponentialMovingAverage,
    Indicator,
    IndicatorBase,
    SimpleMovingAverage,
    WindowIndicator,
)
from vindicator.core.models import Bar, Sample
from vindicator.core.verification import (
    ConvergenceAssertion,
    ReplaySummary,
    assert_default_state,
    assert_delta_decreases,
    assert_within,
    replay,
    verify_indicator,
)

__version__ = "0.1.0"

__all__ = [
    "AverageTrueRange",
    "Bar",
    "BarIndicator",
    "ConvergenceAssertion",
    "ConvergenceError",
    "DataFormatError",
    "ExponentialMovingAverage",
    "HeaderResolutionError",
    "Indicator",
    "IndicatorAssertionError",
    "IndicatorBase",
    "ReferenceDataset",
    "ReplaySummary",
    "Sample",
    "SimpleMovingAverage",
    "VindicatorError",
    "WindowIndicator",
    "assert_default_state",
    "assert_delta_decreases",
    "assert_within",
    "generate_samples",
    "read_bars",
    "replay",
    "verify_indicator",
]
