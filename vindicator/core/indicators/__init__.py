"""Indicator contract and reference implementations."""

from vindicator.core.indicators.base import BarIndicator, Indicator, IndicatorBase, select_close
from vindicator.core.indicators.catalog import (
    IndicatorFactory,
    available_indicators,
    create_indicator,
    register_default_indicators,
)
from vindicator.core.indicators.moving_average import ExponentialMovingAverage, SimpleMovingAverage
from vindicator.core.indicators.true_range import AverageTrueRange
from vindicator.core.indicators.window import WindowIndicator

__all__ = [
    "IndicatorBase",
    "Indicator",
    "BarIndicator",
    "WindowIndicator",
    "SimpleMovingAverage",
    "ExponentialMovingAverage",
    "AverageTrueRange",
    "IndicatorFactory",
    "available_indicators",
    "create_indicator",
    "register_default_indicators",
    "select_close",
]
