"""
Reference dataset readers.

Reference datasets are comma delimited text files with a header line. Two
read modes exist:

* :func:`read_bars` ignores the header and maps columns 0..5 positionally to
  time/open/high/low/close/volume.
* :class:`ReferenceDataset` locates the ``Close`` column and a target column
  by header name and yields :class:`ReferenceRow` objects for replay.

Both are generators: the file is opened when iteration starts and closed when
the generator is exhausted or closed, so files of any size are read in
bounded memory.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from vindicator.core.config import HarnessConfig, get_config
from vindicator.core.data.parsing import parse_date, parse_decimal, parse_float, parse_volume
from vindicator.core.exceptions import DataFormatError, HeaderResolutionError
from vindicator.core.models import Bar, Sample

CLOSE_COLUMN = "Close"
VOLUME_COLUMN = "Volume"
BAR_COLUMNS = 6

T = TypeVar("T")


def resolve_data_path(filename: str | Path, config: HarnessConfig | None = None) -> Path:
    """Resolve relative dataset names against the configured data directory."""
    path = Path(filename)
    if path.is_absolute():
        return path
    harness = config or get_config().harness
    return Path(harness.data_dir) / path


def read_lines(path: str | Path) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs without line terminators, skipping blank lines."""
    with open(path, encoding="utf-8-sig") as file:
        for line_number, line in enumerate(file, start=1):
            stripped = line.rstrip("\r\n")
            if stripped.strip():
                yield line_number, stripped


def _parse_cell(
    parser: Callable[[str], T],
    cells: tuple[str, ...] | list[str],
    index: int,
    path: str,
    line_number: int,
) -> T:
    if index >= len(cells):
        raise DataFormatError(
            f"Line {line_number} has {len(cells)} columns, column {index} is required",
            path=path,
            line_number=line_number,
            column=index,
        )
    try:
        return parser(cells[index])
    except DataFormatError as exc:
        raise DataFormatError(
            f"{exc.message} at line {line_number}, column {index}",
            path=path,
            line_number=line_number,
            column=index,
            value=cells[index],
        ) from exc


def read_bars(path: str | Path, *, config: HarnessConfig | None = None) -> Iterator[Bar]:
    """
    Lazily read OHLCV bars from a reference file.

    The first line is skipped unconditionally; columns are positional.

    Raises:
        DataFormatError: When a row has fewer than six columns or a malformed cell
    """
    resolved = resolve_data_path(path, config)
    delimiter = (config or get_config().harness).delimiter
    source = str(resolved)

    lines = read_lines(resolved)
    try:
        next(lines, None)
        for line_number, line in lines:
            cells = line.split(delimiter)
            if len(cells) < BAR_COLUMNS:
                raise DataFormatError(
                    f"Line {line_number} has {len(cells)} columns, expected at least {BAR_COLUMNS}",
                    path=source,
                    line_number=line_number,
                )
            yield Bar(
                time=_parse_cell(parse_date, cells, 0, source, line_number),
                open=_parse_cell(parse_decimal, cells, 1, source, line_number),
                high=_parse_cell(parse_decimal, cells, 2, source, line_number),
                low=_parse_cell(parse_decimal, cells, 3, source, line_number),
                close=_parse_cell(parse_decimal, cells, 4, source, line_number),
                volume=_parse_cell(parse_volume, cells, 5, source, line_number),
            )
    finally:
        lines.close()


@dataclass(frozen=True)
class ColumnLayout:
    """Zero-based column indices resolved from a header line."""

    target_column: str
    close_index: int
    target_index: int
    volume_index: int | None = None


def resolve_columns(
    header: str,
    target_column: str,
    *,
    delimiter: str = ",",
    path: str | None = None,
) -> ColumnLayout:
    """
    Locate ``Close`` and ``target_column`` in a header line.

    Names are compared exactly (case-sensitive) after trimming whitespace; the
    first matching column wins.

    Raises:
        HeaderResolutionError: When either column is missing
    """
    names = [cell.strip() for cell in header.split(delimiter)]

    def index_of(name: str) -> int | None:
        return names.index(name) if name in names else None

    close_index = index_of(CLOSE_COLUMN)
    target_index = index_of(target_column.strip())
    if close_index is None or target_index is None:
        missing = [
            name
            for name, index in ((CLOSE_COLUMN, close_index), (target_column, target_index))
            if index is None
        ]
        raise HeaderResolutionError(
            f"Didn't find one of '{CLOSE_COLUMN}' or '{target_column}' in the header: {header}",
            header=header,
            missing=missing,
            path=path,
        )

    return ColumnLayout(
        target_column=target_column,
        close_index=close_index,
        target_index=target_index,
        volume_index=index_of(VOLUME_COLUMN),
    )


@dataclass(frozen=True)
class ReferenceRow:
    """One data line of a reference dataset together with its resolved layout."""

    path: str
    line_number: int
    cells: tuple[str, ...]
    layout: ColumnLayout

    @property
    def target_cell(self) -> str:
        """The trimmed target cell; a row too short to hold it is a format error."""
        return self._parse(str.strip, self.layout.target_index)

    @property
    def has_expectation(self) -> bool:
        """False when the target cell is present but blank, i.e. nothing to assert for this row."""
        return self.target_cell != ""

    def expected_value(self) -> float:
        return _parse_cell(parse_float, self.cells, self.layout.target_index, self.path, self.line_number)

    def to_sample(self) -> Sample:
        """The row's date (column 0) and close as an indicator input."""
        return Sample(
            time=self._parse(parse_date, 0),
            value=self._parse(parse_decimal, self.layout.close_index),
        )

    def to_bar(self) -> Bar:
        """The row's positional OHLC columns, plus volume when the header names one."""
        volume = 0
        if self.layout.volume_index is not None:
            volume = self._parse(parse_volume, self.layout.volume_index)
        return Bar(
            time=self._parse(parse_date, 0),
            open=self._parse(parse_decimal, 1),
            high=self._parse(parse_decimal, 2),
            low=self._parse(parse_decimal, 3),
            close=self._parse(parse_decimal, 4),
            volume=volume,
        )

    def _parse(self, parser: Callable[[str], T], index: int) -> T:
        return _parse_cell(parser, self.cells, index, self.path, self.line_number)


class ReferenceDataset:
    """A column-matched reference file for one target column."""

    def __init__(self, path: str | Path, target_column: str, *, delimiter: str = ",") -> None:
        self._path = Path(path)
        self._target_column = target_column
        self._delimiter = delimiter

    @property
    def path(self) -> Path:
        return self._path

    @property
    def target_column(self) -> str:
        return self._target_column

    def layout(self) -> ColumnLayout:
        """Resolve the header without reading any data rows."""
        lines = read_lines(self._path)
        try:
            return self._resolve(next(lines, None))
        finally:
            lines.close()

    def rows(self) -> Iterator[ReferenceRow]:
        """
        Lazily yield data rows.

        The header is resolved once, when iteration starts, before any row is
        produced.
        """
        lines = read_lines(self._path)
        try:
            layout = self._resolve(next(lines, None))
            source = str(self._path)
            for line_number, line in lines:
                yield ReferenceRow(
                    path=source,
                    line_number=line_number,
                    cells=tuple(line.split(self._delimiter)),
                    layout=layout,
                )
        finally:
            lines.close()

    def __iter__(self) -> Iterator[ReferenceRow]:
        return self.rows()

    def _resolve(self, first: tuple[int, str] | None) -> ColumnLayout:
        header = first[1] if first is not None else ""
        return resolve_columns(header, self._target_column, delimiter=self._delimiter, path=str(self._path))

    def __repr__(self) -> str:
        return f"ReferenceDataset(path={str(self._path)!r}, target_column={self._target_column!r})"
