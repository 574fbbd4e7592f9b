"""
Component registry.

Maps a capability type to the factories registered for it and resolves
components by predicate. Factories are instantiated on first resolution and
the instances are cached, so every lookup for a capability sees the same
objects.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from vindicator.core.exceptions import ComponentResolutionError, ConfigurationError
from vindicator.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Factory = Callable[[], Any]


class ComponentRegistry:
    """
    Registry of components keyed by capability type.

    Unlike a scanning service locator, nothing is discovered implicitly:
    a component is only visible once a factory for it has been registered.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._factories: dict[type, list[Factory]] = {}
        self._instances: dict[type, dict[int, Any]] = {}

    def register(self, capability: type[T], factory: Callable[[], T]) -> None:
        """
        Register a factory producing a ``capability`` implementation.

        Args:
            capability: The capability type the component provides
            factory: Zero-argument callable building the component

        Raises:
            ConfigurationError: When the factory is not callable
        """
        if not callable(factory):
            raise ConfigurationError(
                "Component factory must be callable",
                config_key="factory",
                details={"capability": capability.__name__},
            )

        factories = self._factories.setdefault(capability, [])
        if factory in factories:
            logger.warning(f"Factory already registered for {capability.__name__}: {factory!r}")
            return

        factories.append(factory)
        logger.debug(f"Registered component factory for {capability.__name__}")

    def unregister(self, capability: type, factory: Factory) -> bool:
        """
        Remove a previously registered factory.

        Returns:
            bool: True if the factory was removed, False if it was unknown
        """
        factories = self._factories.get(capability, [])
        if factory not in factories:
            return False

        factories.remove(factory)
        self._instances.get(capability, {}).pop(id(factory), None)
        logger.debug(f"Unregistered component factory for {capability.__name__}")
        return True

    def resolve_all(self, capability: type[T]) -> list[T]:
        """
        Return every component registered for ``capability``, in registration order.
        """
        cache = self._instances.setdefault(capability, {})
        components: list[T] = []
        for factory in self._factories.get(capability, []):
            key = id(factory)
            if key not in cache:
                cache[key] = factory()
            components.append(cache[key])
        return components

    def single(self, capability: type[T], predicate: Callable[[T], bool] | None = None) -> T:
        """
        Resolve exactly one component matching ``predicate``.

        Args:
            capability: The capability type to look up
            predicate: Optional filter over the resolved components

        Returns:
            The single matching component

        Raises:
            ComponentResolutionError: When zero or more than one component matches
        """
        candidates = self.resolve_all(capability)
        if predicate is not None:
            candidates = [component for component in candidates if predicate(component)]

        if len(candidates) != 1:
            outcome = "No component" if not candidates else f"{len(candidates)} components"
            raise ComponentResolutionError(
                f"{outcome} matched the lookup for {capability.__name__}",
                capability=capability.__name__,
                matches=len(candidates),
            )
        return candidates[0]

    def clear(self) -> None:
        """Remove every registration."""
        self._factories.clear()
        self._instances.clear()


_global_registry: ComponentRegistry | None = None


def get_global_registry() -> ComponentRegistry:
    """
    Get the process-wide registry instance.

    Returns:
        Global ComponentRegistry instance
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = ComponentRegistry()
    return _global_registry


def register_component(capability: type[T], factory: Callable[[], T]) -> None:
    """Register a factory with the global registry."""
    get_global_registry().register(capability, factory)


def single(capability: type[T], predicate: Callable[[T], bool] | None = None) -> T:
    """Resolve one component from the global registry."""
    return get_global_registry().single(capability, predicate)
