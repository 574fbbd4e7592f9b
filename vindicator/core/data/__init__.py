"""Sample sources: synthetic streams and reference datasets."""

from vindicator.core.data.parsing import parse_date, parse_decimal, parse_float, parse_volume
from vindicator.core.data.reader import (
    ColumnLayout,
    ReferenceDataset,
    ReferenceRow,
    read_bars,
    resolve_columns,
    resolve_data_path,
)
from vindicator.core.data.streams import generate_samples

__all__ = [
    "ColumnLayout",
    "ReferenceDataset",
    "ReferenceRow",
    "generate_samples",
    "parse_date",
    "parse_decimal",
    "parse_float",
    "parse_volume",
    "read_bars",
    "resolve_columns",
    "resolve_data_path",
]
