"""Tests for the reference dataset readers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from vindicator.core.config import HarnessConfig
from vindicator.core.data import (
    ReferenceDataset,
    parse_date,
    parse_float,
    parse_volume,
    read_bars,
    resolve_columns,
    resolve_data_path,
)
from vindicator.core.exceptions import DataFormatError, ErrorCode, HeaderResolutionError
from vindicator.core.models import Bar

DATA_DIR = Path(__file__).parents[2] / "data"


class TestReadBars:
    """Positional OHLCV reads."""

    def test_reads_bundled_dataset(self, harness_config: HarnessConfig) -> None:
        bars = list(read_bars("spy_with_indicators.txt", config=harness_config))

        assert len(bars) == 6
        assert bars[0] == Bar(
            time=datetime(2020, 1, 2),
            open=Decimal(10),
            high=Decimal("10.5"),
            low=Decimal("9.5"),
            close=Decimal(10),
            volume=1_000_000,
        )
        assert bars[2].volume == 1_500_000

    def test_header_is_skipped_whatever_it_says(self, write_dataset) -> None:
        path = write_dataset(
            "20240102,1,2,0.5,1.5,100",
            "20240103,1.5,2.5,1,2,200",
        )

        bars = list(read_bars(path))

        assert [bar.time for bar in bars] == [datetime(2024, 1, 3)]

    def test_too_few_columns_is_fatal(self, write_dataset) -> None:
        path = write_dataset(
            "Date,Open,High,Low,Close,Volume",
            "2024-01-02,1,2,0.5,1.5,100",
            "2024-01-03,1,2,0.5",
        )
        bars = read_bars(path)

        assert next(bars).close == Decimal("1.5")
        with pytest.raises(DataFormatError) as exc_info:
            next(bars)

        assert exc_info.value.line_number == 3
        assert exc_info.value.error_code == ErrorCode.DATA_FORMAT_ERROR.value

    def test_malformed_number_is_fatal(self, write_dataset) -> None:
        path = write_dataset(
            "Date,Open,High,Low,Close,Volume",
            "2024-01-02,1,two,0.5,1.5,100",
        )

        with pytest.raises(DataFormatError) as exc_info:
            list(read_bars(path))

        assert exc_info.value.column == 2
        assert exc_info.value.value == "two"
        assert exc_info.value.path == str(path)

    def test_malformed_date_is_fatal(self, write_dataset) -> None:
        path = write_dataset(
            "Date,Open,High,Low,Close,Volume",
            "yesterday,1,2,0.5,1.5,100",
        )

        with pytest.raises(DataFormatError):
            list(read_bars(path))


class TestResolveColumns:
    def test_resolves_close_and_target(self) -> None:
        layout = resolve_columns("Date,Open,High,Low,Close,SMA", "SMA")

        assert layout.close_index == 4
        assert layout.target_index == 5
        assert layout.volume_index is None

    def test_names_are_trimmed(self) -> None:
        layout = resolve_columns(" Date , Close ,  Volume , EMA 14 ", "EMA 14")

        assert (layout.close_index, layout.volume_index, layout.target_index) == (1, 2, 3)

    def test_match_is_case_sensitive(self) -> None:
        with pytest.raises(HeaderResolutionError) as exc_info:
            resolve_columns("Date,Close,sma", "SMA")

        assert exc_info.value.missing == ["SMA"]

    def test_missing_close(self) -> None:
        header = "Date,Open,High,Low,Last,SMA"

        with pytest.raises(HeaderResolutionError) as exc_info:
            resolve_columns(header, "SMA")

        error = exc_info.value
        assert error.missing == ["Close"]
        assert error.message == f"Didn't find one of 'Close' or 'SMA' in the header: {header}"
        assert error.error_code == ErrorCode.HEADER_RESOLUTION_ERROR.value

    def test_both_missing(self) -> None:
        with pytest.raises(HeaderResolutionError) as exc_info:
            resolve_columns("Date,Open", "SMA")

        assert exc_info.value.missing == ["Close", "SMA"]

    def test_first_duplicate_wins(self) -> None:
        layout = resolve_columns("Date,Close,SMA,SMA", "SMA")
        assert layout.target_index == 2


class TestReferenceDataset:
    def test_layout_is_resolved_identically_on_every_read(self) -> None:
        dataset = ReferenceDataset(DATA_DIR / "spy_with_indicators.txt", "EMA3")

        first = [(row.layout, row.has_expectation) for row in dataset.rows()]
        second = [(row.layout, row.has_expectation) for row in dataset.rows()]

        assert first == second
        assert dataset.layout() == first[0][0]
        assert dataset.layout().target_index == 7
        assert [flag for _, flag in first] == [False, False, True, True, True, True]

    def test_rows_expose_sample_bar_and_expectation(self) -> None:
        dataset = ReferenceDataset(DATA_DIR / "spy_with_indicators.txt", "ATR3")
        row = list(dataset)[3]

        assert row.line_number == 5
        assert row.expected_value() == pytest.approx(1.416667)
        assert row.to_sample().value == Decimal(13)
        assert row.to_sample().time == datetime(2020, 1, 7)
        bar = row.to_bar()
        assert (bar.high, bar.low, bar.volume) == (Decimal("13.25"), Decimal("12.25"), 900_000)

    def test_header_error_raised_before_any_row(self, write_dataset) -> None:
        path = write_dataset("Date,Open,High,Low,SMA", "2020-01-01,10,11,9,")
        rows = ReferenceDataset(path, "SMA").rows()

        with pytest.raises(HeaderResolutionError) as exc_info:
            next(rows)

        assert exc_info.value.path == str(path)

    def test_empty_file_fails_header_resolution(self, write_dataset) -> None:
        path = write_dataset("")

        with pytest.raises(HeaderResolutionError):
            ReferenceDataset(path, "SMA").layout()

    def test_blank_target_cell_means_no_expectation(self, write_dataset) -> None:
        path = write_dataset("Date,Close,SMA", "2020-01-01,10.5,   ", "2020-01-02,11,10.75")

        rows = list(ReferenceDataset(path, "SMA").rows())

        assert [row.has_expectation for row in rows] == [False, True]

    def test_short_row_without_target_cell_is_a_format_error(self, write_dataset) -> None:
        path = write_dataset("Date,Close,SMA", "2020-01-01,10.5")

        (row,) = ReferenceDataset(path, "SMA").rows()

        with pytest.raises(DataFormatError) as exc_info:
            row.has_expectation

        assert exc_info.value.line_number == 2
        assert exc_info.value.column == 2

    def test_abandoned_read_stops_iteration(self) -> None:
        rows = ReferenceDataset(DATA_DIR / "spy_with_indicators.txt", "SMA3").rows()
        next(rows)
        rows.close()

        with pytest.raises(StopIteration):
            next(rows)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2020-01-02", datetime(2020, 1, 2)),
        ("20200102", datetime(2020, 1, 2)),
        ("20200102 09:31", datetime(2020, 1, 2, 9, 31)),
        ("2020-01-02 09:31:15", datetime(2020, 1, 2, 9, 31, 15)),
        ("2020-01-02T09:31:15", datetime(2020, 1, 2, 9, 31, 15)),
        ("2020/01/02", datetime(2020, 1, 2)),
        ("1/2/2020", datetime(2020, 1, 2)),
        (" 2020-01-02 ", datetime(2020, 1, 2)),
    ],
)
def test_parse_date_formats(text: str, expected: datetime) -> None:
    assert parse_date(text) == expected


def test_resolve_data_path(harness_config: HarnessConfig, tmp_path: Path) -> None:
    assert resolve_data_path("spy.txt", harness_config) == DATA_DIR / "spy.txt"
    absolute = tmp_path / "elsewhere.txt"
    assert resolve_data_path(absolute, harness_config) == absolute


@pytest.mark.parametrize("text", ["nan", "NaN", "inf", "-Infinity"])
def test_parse_float_rejects_non_finite_numbers(text: str) -> None:
    with pytest.raises(DataFormatError) as exc_info:
        parse_float(text)

    assert exc_info.value.value == text


def test_parse_volume_accepts_scientific_notation() -> None:
    assert parse_volume("1.5E+06") == 1_500_000
    with pytest.raises(DataFormatError):
        parse_volume("inf")


def test_non_finite_expectation_is_a_format_error(write_dataset) -> None:
    path = write_dataset("Date,Close,SMA", "2020-01-01,10.5,nan")

    (row,) = ReferenceDataset(path, "SMA").rows()

    assert row.has_expectation
    with pytest.raises(DataFormatError) as exc_info:
        row.expected_value()

    assert exc_info.value.line_number == 2
