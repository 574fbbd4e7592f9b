"""Exception handling module."""

from vindicator.core.exceptions.base import (
    ComponentResolutionError,
    ConfigurationError,
    ConvergenceError,
    DataFormatError,
    HeaderResolutionError,
    IndicatorAssertionError,
    VindicatorError,
)
from vindicator.core.exceptions.codes import ErrorCode

__all__ = [
    "VindicatorError",
    "ConfigurationError",
    "DataFormatError",
    "HeaderResolutionError",
    "IndicatorAssertionError",
    "ConvergenceError",
    "ComponentResolutionError",
    "ErrorCode",
]
