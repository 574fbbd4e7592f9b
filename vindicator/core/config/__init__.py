"""Configuration management module."""

from vindicator.core.config.settings import (
    ConfigManager,
    HarnessConfig,
    LoggingConfig,
    VindicatorConfig,
    get_config,
    load_config_from_env,
    set_config,
)

__all__ = [
    "ConfigManager",
    "HarnessConfig",
    "LoggingConfig",
    "VindicatorConfig",
    "get_config",
    "load_config_from_env",
    "set_config",
]
