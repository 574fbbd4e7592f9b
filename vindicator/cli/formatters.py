"""Table and JSON-lines rendering for command output."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from typing import TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

Row = Mapping[str, object]
Renderer = Callable[..., None]


def render_table(rows: Sequence[Row], columns: Sequence[str], stream: TextIO, *, no_color: bool = False) -> None:
    """Print ``rows`` as a rich table; missing cells show as ``-``."""
    console = Console(file=stream, no_color=no_color, color_system=None if no_color else "auto")
    if not rows:
        console.print("No rows.")
        return

    table = Table(*columns, box=SIMPLE, header_style="" if no_color else "bold")
    for row in rows:
        table.add_row(*("-" if row.get(column) is None else str(row.get(column)) for column in columns))
    console.print(table)


def render_jsonl(rows: Sequence[Row], columns: Sequence[str], stream: TextIO, *, no_color: bool = False) -> None:
    """Write one JSON object per row, restricted to ``columns``."""
    for row in rows:
        stream.write(json.dumps({column: row.get(column) for column in columns}, ensure_ascii=False, default=str))
        stream.write("\n")
    stream.flush()


RENDERERS: dict[str, Renderer] = {"table": render_table, "jsonl": render_jsonl}


def get_renderer(name: str) -> Renderer:
    try:
        return RENDERERS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(RENDERERS)}.") from None
