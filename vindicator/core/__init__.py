"""vindicator core: indicator contract, reference data and verification."""

from vindicator.core.config import ConfigManager, HarnessConfig, VindicatorConfig
from vindicator.core.models import Bar, Sample

__all__ = [
    "Bar",
    "ConfigManager",
    "HarnessConfig",
    "Sample",
    "VindicatorConfig",
]
