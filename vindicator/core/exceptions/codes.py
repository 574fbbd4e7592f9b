"""Standardised error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by every :class:`VindicatorError`."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # reference data
    DATA_FORMAT_ERROR = "DATA_FORMAT_ERROR"
    HEADER_RESOLUTION_ERROR = "HEADER_RESOLUTION_ERROR"

    # verification
    ASSERTION_FAILED = "ASSERTION_FAILED"
    CONVERGENCE_VIOLATION = "CONVERGENCE_VIOLATION"

    # registry
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    COMPONENT_AMBIGUOUS = "COMPONENT_AMBIGUOUS"
