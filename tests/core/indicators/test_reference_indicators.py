"""Value tests for the bundled reference indicators."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from vindicator.core.data import generate_samples
from vindicator.core.indicators import AverageTrueRange, ExponentialMovingAverage, SimpleMovingAverage
from vindicator.core.models import Bar


def _values(indicator, samples) -> list[Decimal]:
    outputs = []
    for sample in samples:
        indicator.update(sample)
        outputs.append(indicator.current.value)
    return outputs


def test_sma_averages_available_values_while_warming() -> None:
    sma = SimpleMovingAverage(3)

    outputs = _values(sma, generate_samples(6, lambda i: 10 + i))

    assert outputs == [
        Decimal(10),
        Decimal("10.5"),
        Decimal(11),
        Decimal(12),
        Decimal(13),
        Decimal(14),
    ]
    assert sma.window == (Decimal(13), Decimal(14), Decimal(15))


def test_sma_default_name_and_period() -> None:
    sma = SimpleMovingAverage(14)
    assert sma.name == "SMA14"
    assert sma.period == 14
    assert SimpleMovingAverage(14, name="fast").name == "fast"


@pytest.mark.parametrize("factory", [SimpleMovingAverage, ExponentialMovingAverage, AverageTrueRange])
def test_period_must_be_positive(factory) -> None:
    with pytest.raises(ValueError):
        factory(0)


def test_ema_starts_at_first_input_and_smooths() -> None:
    ema = ExponentialMovingAverage(3)

    outputs = _values(ema, generate_samples(6, lambda i: 10 + i))

    assert outputs == [
        Decimal(10),
        Decimal("10.5"),
        Decimal("11.25"),
        Decimal("12.125"),
        Decimal("13.0625"),
        Decimal("14.03125"),
    ]
    assert ema.is_ready


def test_ema_of_constant_stream_is_constant() -> None:
    ema = ExponentialMovingAverage(10)

    outputs = _values(ema, generate_samples(25, lambda i: 42))

    assert set(outputs) == {Decimal(42)}


def test_atr_uses_previous_close_for_gaps() -> None:
    start = datetime(2020, 1, 2)
    rows = [
        ("10", "10.5", "9.5", "10"),
        ("10", "11.5", "10", "11"),
        ("11", "12.5", "10.5", "12"),
        ("12", "13.25", "12.25", "13"),
    ]
    bars = [
        Bar(time=start + timedelta(days=i), open=o, high=h, low=lo, close=c)
        for i, (o, h, lo, c) in enumerate(rows)
    ]
    atr = AverageTrueRange(3)

    outputs = []
    true_ranges = []
    for bar in bars:
        atr.update(bar)
        outputs.append(atr.current.value)
        true_ranges.append(atr.true_range)

    assert true_ranges == [Decimal("1.0"), Decimal("1.5"), Decimal("2.0"), Decimal("1.25")]
    assert outputs[:3] == [Decimal("1.0"), Decimal("1.25"), Decimal("1.5")]
    assert float(outputs[3]) == pytest.approx(17 / 12)
