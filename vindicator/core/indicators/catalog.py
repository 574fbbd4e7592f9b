"""Named indicator factories resolved through the component registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from vindicator.core.indicators.base import IndicatorBase
from vindicator.core.indicators.moving_average import ExponentialMovingAverage, SimpleMovingAverage
from vindicator.core.indicators.true_range import AverageTrueRange
from vindicator.core.registry import ComponentRegistry, get_global_registry

InputKind = Literal["sample", "bar"]


@dataclass(frozen=True)
class IndicatorFactory:
    """Builds indicators of one kind from a period."""

    name: str
    input_kind: InputKind
    builder: Callable[[int], IndicatorBase[Any]]
    description: str = ""

    def create(self, period: int) -> IndicatorBase[Any]:
        return self.builder(period)


DEFAULT_FACTORIES: tuple[IndicatorFactory, ...] = (
    IndicatorFactory("sma", "sample", SimpleMovingAverage, "Simple moving average of the close"),
    IndicatorFactory("ema", "sample", ExponentialMovingAverage, "Exponential moving average of the close"),
    IndicatorFactory("atr", "bar", AverageTrueRange, "Average true range, Wilder smoothing"),
)


def register_default_indicators(registry: ComponentRegistry | None = None) -> ComponentRegistry:
    """Register the built-in indicator factories and return the registry."""
    registry = registry or get_global_registry()
    registered = {factory.name for factory in registry.resolve_all(IndicatorFactory)}
    for factory in DEFAULT_FACTORIES:
        if factory.name not in registered:
            registry.register(IndicatorFactory, lambda factory=factory: factory)
    return registry


def available_indicators(registry: ComponentRegistry | None = None) -> list[str]:
    registry = registry or get_global_registry()
    return sorted(factory.name for factory in registry.resolve_all(IndicatorFactory))


def create_indicator(name: str, period: int, registry: ComponentRegistry | None = None) -> IndicatorBase[Any]:
    """
    Build the indicator registered under ``name``.

    Raises:
        ComponentResolutionError: When no (or more than one) factory has that name
    """
    registry = registry or get_global_registry()
    normalized = name.strip().lower()
    factory = registry.single(IndicatorFactory, lambda candidate: candidate.name == normalized)
    return factory.create(period)
