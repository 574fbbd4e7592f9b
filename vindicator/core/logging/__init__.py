"""Structured JSON logging."""

from vindicator.core.logging.config import LogConfig
from vindicator.core.logging.logger import configure_logging, get_logger, log_context, logger

__all__ = [
    "LogConfig",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
]
