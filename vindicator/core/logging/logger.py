"""
JSON-lines logging on loguru.

Every record carries a ``trace_id`` and, when known, the ``indicator`` and
``error_code`` it concerns. Anything else bound to the record or set through
:func:`log_context` lands under ``context``.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any
from uuid import uuid4

from loguru import logger

from vindicator.core.logging.config import LogConfig

if TYPE_CHECKING:
    from loguru import Logger, Message, Record

TOP_LEVEL_FIELDS = ("trace_id", "error_code", "indicator")

_trace_id: ContextVar[str | None] = ContextVar("vindicator_trace_id", default=None)
_context: ContextVar[dict[str, Any]] = ContextVar("vindicator_log_context", default={})


def _enrich(record: Record) -> None:
    """Fill trace id and ambient context into a record; explicit binds win."""
    extra = record["extra"]
    if not extra.get("trace_id"):
        trace_id = _trace_id.get()
        if trace_id is None:
            trace_id = uuid4().hex
            _trace_id.set(trace_id)
        extra["trace_id"] = trace_id

    for key, value in _context.get().items():
        if extra.get(key) is None:
            extra[key] = value
    for key in TOP_LEVEL_FIELDS:
        extra.setdefault(key, None)


def _render(record: Record) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in TOP_LEVEL_FIELDS})

    context = {key: value for key, value in extra.items() if key not in TOP_LEVEL_FIELDS}
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])

    return json.dumps(payload, default=lambda value: value.isoformat() if isinstance(value, datetime) else str(value))


def _stream_sink(stream: IO[str]) -> Callable[[Message], None]:
    def write(message: Message) -> None:
        stream.write(_render(message.record) + "\n")
        stream.flush()

    return write


def _file_sink(path: str) -> Callable[[Message], None]:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    def write(message: Message) -> None:
        with target.open("a", encoding="utf-8") as file:
            file.write(_render(message.record) + "\n")

    return write


def configure_logging(level: str = "INFO", **options: Any) -> None:
    """
    Replace every loguru handler with JSON sinks built from ``LogConfig`` options.

    Raises:
        ValueError: When ``level`` is not a loguru level name
    """
    config = LogConfig(level=level.upper(), **options)

    handlers: list[dict[str, Any]] = []
    if config.console_output:
        handlers.append({"sink": _stream_sink(config.console_stream or sys.stderr), "level": config.level})
    if config.file_output and config.file_path:
        handlers.append({"sink": _file_sink(config.file_path), "level": config.level})

    logger.configure(handlers=handlers, patcher=_enrich, extra=dict(config.extra))


def get_logger(name: str | None = None) -> Logger:
    """The shared logger, bound to ``logger_name`` when a name is given."""
    return logger.bind(logger_name=name) if name else logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """
    Scope a trace id and extra fields to every record logged inside the block.

    Yields:
        str: The active trace id, ``trace_id`` or a fresh one
    """
    active = trace_id or uuid4().hex
    trace_token = _trace_id.set(active)
    context_token = _context.set({**_context.get(), **extra})
    try:
        yield active
    finally:
        _context.reset(context_token)
        _trace_id.reset(trace_token)


configure_logging()


__all__ = ["configure_logging", "get_logger", "log_context", "logger"]
