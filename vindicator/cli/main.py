"""Main entry point for the vindicator command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from vindicator.core.config import get_config

from .formatters import get_renderer
from .generate import register as register_generate_command
from .verify import register as register_verify_commands


def create_app() -> typer.Typer:
    """Create a Typer application instance for vindicator."""

    app = typer.Typer(add_completion=False, help="Indicator golden-file verification")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Structured log level (written to stderr); defaults to the configured level.",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        try:
            get_renderer(format)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        try:
            get_config().logging.apply(level=log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

        ctx.obj = {"format": format.strip().lower(), "output_path": output, "no_color": no_color}

    register_verify_commands(app)
    register_generate_command(app)
    return app


app = create_app()
