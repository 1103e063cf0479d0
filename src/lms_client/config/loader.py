"""Client profile loading.

Profile files are YAML documents rooted at an ``lms_client`` key. A profile
may name another file in ``extends``; that file is loaded first and the
profile's sections are layered on top of it.
"""

from pathlib import Path
from typing import Any

import yaml

from . import ClientConfig, LoggingConfig, UtilsConfig
from .profiles import get_profile_path

EXTENDS_KEY = "extends"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Layer override on top of base without mutating either.

    Sections present in both are merged key by key; any other value in
    override replaces the one in base.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml_with_inheritance(path: Path, _seen: frozenset[Path] = frozenset()) -> dict[str, Any]:
    """Read a profile file and resolve its ``extends`` chain.

    Args:
        path: Profile file to read.

    Returns:
        The merged document, without the ``extends`` key.

    Raises:
        FileNotFoundError: If the file or a file it extends is missing.
        ValueError: If the ``extends`` chain loops back on itself.
    """
    resolved = path.resolve()
    if resolved in _seen:
        raise ValueError(f"Config inheritance cycle through {path}")
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    document = yaml.safe_load(path.read_text()) or {}
    parent_name = document.pop(EXTENDS_KEY, None)
    if parent_name is None:
        return document
    parent = load_yaml_with_inheritance(path.parent / parent_name, _seen | {resolved})
    return deep_merge(parent, document)


def dict_to_config(data: dict[str, Any]) -> ClientConfig:
    """Convert raw dict to typed ClientConfig dataclass."""
    client_data = data.get("lms_client", {}) or {}

    # An empty section parses as None
    def safe_get(key: str) -> dict[str, Any]:
        value = client_data.get(key, {})
        return value if value is not None else {}

    return ClientConfig(
        client_identifier=client_data.get("client_identifier"),
        logging=LoggingConfig(**safe_get("logging")),
        utils=UtilsConfig(**safe_get("utils")),
    )


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing config files.
                        Defaults to 'config' relative to project root.
        """
        if config_dir is None:
            config_dir = get_profile_path().parent
        self._config_dir = config_dir

    def load(self, path: Path) -> ClientConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed ClientConfig
        """
        raw_config = load_yaml_with_inheritance(path)
        return dict_to_config(raw_config)

    def load_profile(self, profile: str) -> ClientConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (e.g., 'dev', 'prod')

        Returns:
            Parsed ClientConfig for the profile
        """
        config_path = self._config_dir / f"{profile}.yaml"
        return self.load(config_path)

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> ClientConfig:
    """Load client configuration.

    Args:
        path: Direct path to config file (takes precedence)
        profile: Profile name ('dev', 'prod', 'test') if path not given
        config_dir: Directory holding profile files

    Returns:
        Parsed ClientConfig

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader = YAMLConfigLoader(config_dir)

    if path is not None:
        return loader.load(Path(path))
    elif profile is not None:
        return loader.load_profile(profile)
    else:
        return loader.load_profile("dev")


__all__ = [
    "YAMLConfigLoader",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
