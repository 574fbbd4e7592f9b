"""Cell parsers shared by the reference dataset readers."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal, InvalidOperation

from vindicator.core.exceptions import DataFormatError

DATE_FORMATS = (
    "%Y-%m-%d",  # 2024-01-01
    "%Y%m%d",  # 20240101
    "%Y%m%d %H:%M",  # 20240101 09:31
    "%Y%m%d %H:%M:%S",  # 20240101 09:31:00
    "%Y-%m-%d %H:%M:%S",  # 2024-01-01 09:31:00
    "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T09:31:00
    "%Y/%m/%d",  # 2024/01/01
    "%m/%d/%Y",  # 1/2/2024
    "%m/%d/%Y %H:%M:%S",  # 1/2/2024 09:31:00
)


def parse_date(text: str) -> datetime:
    """
    Parse a timestamp cell.

    Raises:
        DataFormatError: When none of the supported formats match
    """
    value = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    raise DataFormatError(
        f"Unable to parse date: {text!r}",
        value=text,
        details={"supported_formats": list(DATE_FORMATS)},
    )


def parse_decimal(text: str) -> Decimal:
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise DataFormatError(f"Unable to parse decimal: {text!r}", value=text) from exc
    if not value.is_finite():
        raise DataFormatError(f"Non-finite decimal: {text!r}", value=text)
    return value


def parse_float(text: str) -> float:
    try:
        value = float(text.strip())
    except ValueError as exc:
        raise DataFormatError(f"Unable to parse number: {text!r}", value=text) from exc
    if not math.isfinite(value):
        raise DataFormatError(f"Non-finite number: {text!r}", value=text)
    return value


def parse_volume(text: str) -> int:
    """Volumes may be written in float notation (``1.5E+08``); the fraction is truncated."""
    number = parse_float(text)
    try:
        return int(number)
    except (OverflowError, ValueError) as exc:
        raise DataFormatError(f"Unable to parse volume: {text!r}", value=text) from exc
