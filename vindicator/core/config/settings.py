"""Configuration management for the verification harness."""

from __future__ import annotations

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from vindicator.core.exceptions import ConfigurationError
from vindicator.core.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".vindicator" / "config.toml"


@dataclass
class HarnessConfig:
    """Replay harness configuration."""

    data_dir: str = "TestData"
    default_dataset: str = "spy_with_indicators.txt"
    epsilon: float = 1e-3
    delimiter: str = ","

    def __post_init__(self) -> None:
        self.data_dir = str(self.data_dir)
        if self.epsilon <= 0:
            raise ConfigurationError(
                f"epsilon must be positive, got {self.epsilon}",
                config_key="harness.epsilon",
            )
        if not self.delimiter:
            raise ConfigurationError("delimiter cannot be empty", config_key="harness.delimiter")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None

    def apply(self, level: str | None = None) -> None:
        """Configure structured logging from these settings; ``level`` overrides ``self.level``.

        Records always go to stderr, and are appended to ``file`` as well when it is set.
        """
        configure_logging(level or self.level, file_output=self.file is not None, file_path=self.file)


@dataclass
class VindicatorConfig:
    """Top level configuration."""

    harness: HarnessConfig = field(default_factory=HarnessConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> VindicatorConfig:
        """Build a configuration from a nested dictionary."""
        return cls(
            harness=HarnessConfig(**config_dict.get("harness", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "harness": asdict(self.harness),
            "logging": asdict(self.logging),
        }


def _deep_update(target: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict):
            target[key] = _deep_update(target.get(key, {}), value)
        else:
            target[key] = value
    return target


class ConfigManager:
    """Loads and updates the harness configuration."""

    def __init__(self, config_path: Path | None = None):
        """Initialise the manager.

        Args:
            config_path: TOML file to load, defaults to ``~/.vindicator/config.toml``
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.config = self._load_config()

    def _load_config(self) -> VindicatorConfig:
        if not self.config_path.exists():
            return VindicatorConfig.from_dict(load_config_from_env())

        try:
            with open(self.config_path, "rb") as f:
                config_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            config_dict = {}

        return VindicatorConfig.from_dict(_deep_update(config_dict, load_config_from_env()))

    def get_config(self) -> VindicatorConfig:
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Deep-merge ``updates`` into the current configuration."""
        config_dict = _deep_update(self.config.to_dict(), updates)
        self.config = VindicatorConfig.from_dict(config_dict)


def load_config_from_env() -> dict[str, Any]:
    """Read configuration overrides from ``VINDICATOR_*`` environment variables."""
    config: dict[str, Any] = {}

    harness_config: dict[str, Any] = {}
    data_dir = os.getenv("VINDICATOR_DATA_DIR")
    if data_dir:
        harness_config["data_dir"] = data_dir
    default_dataset = os.getenv("VINDICATOR_DEFAULT_DATASET")
    if default_dataset:
        harness_config["default_dataset"] = default_dataset
    epsilon = os.getenv("VINDICATOR_EPSILON")
    if epsilon is not None:
        try:
            harness_config["epsilon"] = float(epsilon)
        except ValueError as exc:
            raise ConfigurationError(
                f"VINDICATOR_EPSILON is not a number: {epsilon!r}",
                config_key="harness.epsilon",
            ) from exc

    if harness_config:
        config["harness"] = harness_config

    logging_config: dict[str, Any] = {}
    level = os.getenv("VINDICATOR_LOGGING_LEVEL")
    if level is not None:
        logging_config["level"] = level
    log_file = os.getenv("VINDICATOR_LOGGING_FILE")
    if log_file is not None:
        logging_config["file"] = log_file

    if logging_config:
        config["logging"] = logging_config

    return config


_config: VindicatorConfig | None = None


def get_config() -> VindicatorConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = ConfigManager().get_config()
    return _config


def set_config(config: VindicatorConfig | None) -> None:
    """Replace the process-wide configuration; ``None`` forces a reload."""
    global _config
    _config = config
