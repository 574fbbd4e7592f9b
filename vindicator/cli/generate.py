"""Synthetic stream command for the vindicator CLI."""

from __future__ import annotations

import typer

from vindicator.core.data.streams import generate_samples

from .utils import emit_rows


def register(app: typer.Typer) -> None:
    """Register the generate command on the provided application."""

    app.command("generate")(generate_command)


def generate_command(
    ctx: typer.Context,
    count: int = typer.Option(10, "--count", "-n", min=0, help="Number of samples to produce."),
) -> None:
    """Print a deterministic synthetic stream (value = index, one second apart)."""

    rows = [
        {"time": sample.time.isoformat(), "value": str(sample.value)}
        for sample in generate_samples(count)
    ]
    emit_rows(ctx, rows, ["time", "value"])
