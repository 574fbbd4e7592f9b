"""Deterministic synthetic sample streams for tests that need no files."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, time, timedelta
from decimal import Decimal

from vindicator.core.models import Sample

ValueProducer = Callable[[int], Decimal | int]


def generate_samples(count: int, value_producer: ValueProducer | None = None) -> Iterator[Sample]:
    """
    Lazily yield ``count`` samples.

    Times start at midnight today and advance one second per sample. Values
    are the zero-based index unless ``value_producer`` maps the index to a value.

    Args:
        count: Number of samples to produce
        value_producer: Optional ``index -> value`` function

    Returns:
        A fresh generator; call again to restart from scratch
    """
    if count < 0:
        raise ValueError(f"count cannot be negative, got {count}")
    return _generate(count, value_producer)


def _generate(count: int, value_producer: ValueProducer | None) -> Iterator[Sample]:
    reference = datetime.combine(datetime.today().date(), time.min)
    for index in range(count):
        value = value_producer(index) if value_producer is not None else index
        yield Sample(time=reference + timedelta(seconds=index), value=Decimal(value))
