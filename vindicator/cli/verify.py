"""Verification commands for the vindicator CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from vindicator.core.config import get_config
from vindicator.core.data.reader import ReferenceDataset, resolve_data_path
from vindicator.core.exceptions import (
    ComponentResolutionError,
    DataFormatError,
    HeaderResolutionError,
    IndicatorAssertionError,
)
from vindicator.core.indicators.catalog import available_indicators, create_indicator, register_default_indicators
from vindicator.core.verification import assert_delta_decreases, assert_within, verify_indicator

from .constants import ASSERTION_EXIT_CODE, DATA_EXIT_CODE, LOOKUP_EXIT_CODE
from .utils import emit_error, emit_rows, fail

SUMMARY_COLUMNS = [
    "indicator",
    "dataset",
    "target_column",
    "rows",
    "asserted",
    "skipped_not_ready",
    "skipped_empty",
]


def register(app: typer.Typer) -> None:
    """Register the verification commands on the provided application."""

    app.command("verify")(verify_command)
    app.command("inspect")(inspect_command)


def verify_command(
    ctx: typer.Context,
    indicator: str = typer.Option(..., "--indicator", "-i", help="Registered indicator name (sma, ema, atr)."),
    period: int = typer.Option(..., "--period", "-p", min=1, help="Indicator period."),
    file: Path = typer.Option(..., "--file", help="Reference dataset, relative to the data directory."),
    column: str = typer.Option(..., "--column", "-c", help="Header name of the expected-value column."),
    epsilon: float | None = typer.Option(None, "--epsilon", "-e", help="Allowed difference per sample."),
    converge: bool = typer.Option(
        False,
        "--converge",
        help="Only require the error to keep decreasing (for smoothing indicators).",
    ),
) -> None:
    """Replay a reference dataset through an indicator and check every ready sample."""

    harness = get_config().harness
    registry = register_default_indicators()
    try:
        target = create_indicator(indicator, period, registry)
    except ComponentResolutionError as error:
        emit_error(
            f"Unknown indicator '{indicator}'",
            error.error_code,
            details={"available": available_indicators(registry)},
        )
        raise typer.Exit(code=LOOKUP_EXIT_CODE) from error

    tolerance = harness.epsilon if epsilon is None else epsilon
    assertion = assert_delta_decreases(tolerance) if converge else assert_within(tolerance)
    path = resolve_data_path(file, harness)

    try:
        summary = verify_indicator(target, column, filename=file, assertion=assertion, config=harness)
    except IndicatorAssertionError as error:
        raise fail(error, ASSERTION_EXIT_CODE) from error
    except (HeaderResolutionError, DataFormatError) as error:
        raise fail(error, DATA_EXIT_CODE) from error
    except OSError as error:
        emit_error(f"Unable to read '{path}': {error}", "DATASET_READ_ERROR")
        raise typer.Exit(code=DATA_EXIT_CODE) from error

    emit_rows(ctx, [summary.to_dict()], SUMMARY_COLUMNS)


def inspect_command(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", help="Reference dataset, relative to the data directory."),
    column: str = typer.Option(..., "--column", "-c", help="Header name of the expected-value column."),
) -> None:
    """Show how the header of a reference dataset resolves."""

    harness = get_config().harness
    path = resolve_data_path(file, harness)
    try:
        layout = ReferenceDataset(path, column, delimiter=harness.delimiter).layout()
    except HeaderResolutionError as error:
        raise fail(error, DATA_EXIT_CODE) from error
    except OSError as error:
        emit_error(f"Unable to read '{path}': {error}", "DATASET_READ_ERROR")
        raise typer.Exit(code=DATA_EXIT_CODE) from error

    rows = [
        {"role": "close", "column": "Close", "index": layout.close_index},
        {"role": "target", "column": layout.target_column, "index": layout.target_index},
        {"role": "volume", "column": "Volume", "index": layout.volume_index},
    ]
    emit_rows(ctx, rows, ["role", "column", "index"])
