"""Output and error reporting shared by CLI commands."""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import typer

from vindicator.core.exceptions import VindicatorError

from .constants import VALIDATION_EXIT_CODE
from .formatters import Row, get_renderer


def emit_rows(ctx: typer.Context, rows: Sequence[Row], columns: Sequence[str]) -> None:
    """Render ``rows`` in the format chosen on the command line, to stdout or ``--output``."""
    options = ctx.find_root().obj or {}
    render = get_renderer(options.get("format", "table"))
    no_color = bool(options.get("no_color", False))
    output_path: Path | None = options.get("output_path")

    if output_path is None:
        render(rows, columns, sys.stdout, no_color=no_color)
        return

    try:
        with open(output_path, "w", encoding="utf-8") as stream:
            render(rows, columns, stream, no_color=no_color)
    except OSError as exc:
        emit_error(f"Unable to open '{output_path}': {exc}", "OUTPUT_WRITE_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""
    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = dict(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def fail(error: VindicatorError, exit_code: int) -> typer.Exit:
    """Report ``error`` on stderr and return the ``typer.Exit`` to raise."""
    emit_error(error.message, error.error_code, details=error.details)
    return typer.Exit(code=exit_code)


__all__ = ["emit_error", "emit_rows", "fail"]
