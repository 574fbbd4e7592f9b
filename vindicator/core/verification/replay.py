"""
Replay-and-verify driver.

Feeds every row of a reference dataset to an indicator, in file order, and
hands each assertable row to a caller supplied assertion. What makes a row
assertable (indicator ready, target cell present) is decided here; what is
checked is entirely up to the assertion.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from vindicator.core.config import HarnessConfig, get_config
from vindicator.core.data.reader import ReferenceDataset, ReferenceRow, resolve_data_path
from vindicator.core.indicators.base import BarIndicator, Indicator, IndicatorBase
from vindicator.core.logging import get_logger, log_context
from vindicator.core.verification.assertions import Assertion, assert_selected_within, assert_within

logger = get_logger(__name__)


@dataclass
class ReplaySummary:
    """Counts collected while replaying one dataset."""

    indicator: str
    dataset: str
    target_column: str
    rows: int = 0
    asserted: int = 0
    skipped_not_ready: int = 0
    skipped_empty: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _input_builder(indicator: IndicatorBase[Any]) -> Callable[[ReferenceRow], Any]:
    if isinstance(indicator, BarIndicator):
        return ReferenceRow.to_bar
    if isinstance(indicator, Indicator):
        return ReferenceRow.to_sample
    raise TypeError(f"Unsupported indicator type: {type(indicator).__name__}")


def replay(indicator: IndicatorBase[Any], dataset: ReferenceDataset, assertion: Assertion) -> ReplaySummary:
    """
    Replay ``dataset`` through ``indicator``.

    Args:
        indicator: Indicator under test; sample indicators receive the row's
            close, bar indicators the row's OHLC columns
        dataset: Reference dataset naming the target column
        assertion: Called as ``assertion(indicator, expected)`` for every row
            where the indicator is ready and the target cell is not empty

    Returns:
        ReplaySummary: Row, assertion and skip counts

    Raises:
        HeaderResolutionError: Before any update, when the header lacks a column
        DataFormatError: When a row cannot be parsed
    """
    build_input = _input_builder(indicator)
    summary = ReplaySummary(
        indicator=indicator.name,
        dataset=str(dataset.path),
        target_column=dataset.target_column,
    )

    with log_context(indicator=indicator.name, dataset=summary.dataset, target_column=dataset.target_column):
        logger.debug(f"Replaying {summary.dataset} through {indicator.name}")

        for row in dataset.rows():
            summary.rows += 1
            indicator.update(build_input(row))

            if not indicator.is_ready:
                summary.skipped_not_ready += 1
                continue
            if not row.has_expectation:
                summary.skipped_empty += 1
                continue

            assertion(indicator, row.expected_value())
            summary.asserted += 1

        logger.bind(**summary.to_dict()).debug(
            f"Replay finished: {summary.rows} rows, {summary.asserted} assertions"
        )

    return summary


def verify_indicator(
    indicator: IndicatorBase[Any],
    target_column: str,
    *,
    filename: str | Path | None = None,
    epsilon: float | None = None,
    selector: Callable[[Any], float] | None = None,
    assertion: Assertion | None = None,
    config: HarnessConfig | None = None,
) -> ReplaySummary:
    """
    Compare ``indicator`` against the ``target_column`` of a reference file.

    Args:
        indicator: Indicator under test
        target_column: Header name of the column holding expected values
        filename: Dataset file, relative names resolve against the data
            directory; defaults to the configured default dataset
        epsilon: Maximum allowed difference, defaults to the configured epsilon
        selector: Compare ``selector(indicator)`` instead of ``current.value``
        assertion: Custom assertion replacing the epsilon comparison
        config: Harness configuration, defaults to the global one

    Returns:
        ReplaySummary: Row, assertion and skip counts
    """
    if selector is not None and assertion is not None:
        raise ValueError("selector and assertion are mutually exclusive")

    harness = config or get_config().harness
    path = resolve_data_path(filename or harness.default_dataset, harness)
    tolerance = harness.epsilon if epsilon is None else epsilon

    if assertion is None:
        if selector is not None:
            assertion = assert_selected_within(selector, tolerance)
        else:
            assertion = assert_within(tolerance)

    dataset = ReferenceDataset(path, target_column, delimiter=harness.delimiter)
    return replay(indicator, dataset, assertion)
