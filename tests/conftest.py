"""Pytest configuration for the vindicator test suite."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from vindicator.core.config import HarnessConfig, set_config
from vindicator.core.logging import configure_logging

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _isolated_runtime() -> Iterator[None]:
    """Keep global configuration and log sinks from leaking between tests."""

    configure_logging("WARNING", console_stream=io.StringIO())
    yield
    set_config(None)
    configure_logging("WARNING", console_stream=io.StringIO())


@pytest.fixture
def harness_config() -> HarnessConfig:
    """Harness configuration pointing at the bundled reference data."""

    return HarnessConfig(data_dir=str(DATA_DIR))


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Write a reference dataset from lines and return its path."""

    def _write(*lines: str, name: str = "reference.txt") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
