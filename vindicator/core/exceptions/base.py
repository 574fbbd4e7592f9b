"""Core exception classes."""

from __future__ import annotations

from typing import Any

from vindicator.core.exceptions.codes import ErrorCode


class VindicatorError(Exception):
    """Base exception for every vindicator failure."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.GENERAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable error message
            error_code: Standardised error code
            details: Extra structured details
        """
        super().__init__(message)
        self.message = message
        self.code = error_code
        self.error_code = error_code.value
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }


class ConfigurationError(VindicatorError):
    """Invalid configuration values."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if config_key:
            super_details["config_key"] = config_key
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, super_details)
        self.config_key = config_key


class DataFormatError(VindicatorError):
    """A reference dataset row could not be parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        line_number: int | None = None,
        column: int | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        for key, item in (("path", path), ("line_number", line_number), ("column", column), ("value", value)):
            if item is not None:
                super_details[key] = item
        super().__init__(message, ErrorCode.DATA_FORMAT_ERROR, super_details)
        self.path = path
        self.line_number = line_number
        self.column = column
        self.value = value


class HeaderResolutionError(VindicatorError):
    """A required column is missing from a reference dataset header."""

    def __init__(
        self,
        message: str,
        header: str,
        missing: list[str],
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["header"] = header
        super_details["missing"] = list(missing)
        if path is not None:
            super_details["path"] = path
        super().__init__(message, ErrorCode.HEADER_RESOLUTION_ERROR, super_details)
        self.header = header
        self.missing = list(missing)
        self.path = path


class IndicatorAssertionError(VindicatorError, AssertionError):
    """An indicator output did not match the reference expectation."""

    def __init__(
        self,
        message: str,
        expected: float,
        actual: float,
        indicator_name: str | None = None,
        error_code: ErrorCode = ErrorCode.ASSERTION_FAILED,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.update({"expected": expected, "actual": actual})
        if indicator_name is not None:
            super_details["indicator"] = indicator_name
        super().__init__(message, error_code, super_details)
        self.expected = expected
        self.actual = actual
        self.indicator_name = indicator_name


class ConvergenceError(IndicatorAssertionError):
    """The error against the reference grew by more than the permitted epsilon."""

    def __init__(
        self,
        message: str,
        expected: float,
        actual: float,
        previous_delta: float,
        current_delta: float,
        epsilon: float,
        indicator_name: str | None = None,
    ):
        super().__init__(
            message,
            expected,
            actual,
            indicator_name=indicator_name,
            error_code=ErrorCode.CONVERGENCE_VIOLATION,
            details={
                "previous_delta": previous_delta,
                "current_delta": current_delta,
                "epsilon": epsilon,
            },
        )
        self.previous_delta = previous_delta
        self.current_delta = current_delta
        self.epsilon = epsilon


class ComponentResolutionError(VindicatorError):
    """The registry found zero or several components for a lookup."""

    def __init__(
        self,
        message: str,
        capability: str,
        matches: int,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.update({"capability": capability, "matches": matches})
        code = ErrorCode.COMPONENT_NOT_FOUND if matches == 0 else ErrorCode.COMPONENT_AMBIGUOUS
        super().__init__(message, code, super_details)
        self.capability = capability
        self.matches = matches
