"""Configuration module for the LM Studio client.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class UtilsConfig:
    """Companion executable configuration."""

    cache_dir: str = "~/.cache/lm-studio/.internal/utils"


@dataclass
class ClientConfig:
    """Main client configuration."""

    client_identifier: str | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    utils: UtilsConfig = field(default_factory=UtilsConfig)


class ConfigLoader(Protocol):
    """Protocol for configuration loading."""

    def load(self, path: Path) -> ClientConfig:
        """Load configuration from file path."""
        ...

    def load_profile(self, profile: str) -> ClientConfig:
        """Load configuration by profile name (dev, prod, test)."""
        ...

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        ...


# Public API
__all__ = [
    "ClientConfig",
    "ConfigLoader",
    "LoggingConfig",
    "UtilsConfig",
]
