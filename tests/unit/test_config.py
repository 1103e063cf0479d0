"""Unit tests for configuration loading and profile management."""

import os
import tempfile
from pathlib import Path
from unittest import mock

import pytest
import yaml

from lms_client.config import ClientConfig
from lms_client.config.loader import (
    YAMLConfigLoader,
    deep_merge,
    dict_to_config,
    load_config,
    load_yaml_with_inheritance,
)
from lms_client.config.profiles import (
    PROFILE_ENV_VAR,
    Profile,
    detect_profile,
    get_profile_path,
)

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_simple_merge(self) -> None:
        """Test merging flat dictionaries."""
        result = deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self) -> None:
        """Test merging nested dictionaries."""
        base = {"outer": {"a": 1, "b": 2}}
        override = {"outer": {"b": 3, "c": 4}}
        assert deep_merge(base, override) == {"outer": {"a": 1, "b": 3, "c": 4}}

    def test_override_replaces_non_dict(self) -> None:
        """Test that non-dict values are replaced."""
        assert deep_merge({"a": {"nested": 1}}, {"a": "replaced"}) == {"a": "replaced"}

    def test_base_not_mutated(self) -> None:
        base = {"outer": {"a": 1}}
        deep_merge(base, {"outer": {"a": 2}})
        assert base == {"outer": {"a": 1}}


class TestYAMLLoading:
    """Tests for YAML config loading."""

    def test_load_with_inheritance(self) -> None:
        """Test loading YAML with extends keyword."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base_path = Path(tmpdir) / "base.yaml"
            with open(base_path, "w") as f:
                yaml.dump(
                    {
                        "lms_client": {
                            "logging": {"level": "INFO", "datefmt": "%H:%M"},
                            "utils": {"cache_dir": "/opt/lms/utils"},
                        }
                    },
                    f,
                )

            child_path = Path(tmpdir) / "child.yaml"
            with open(child_path, "w") as f:
                yaml.dump(
                    {
                        "extends": "base.yaml",
                        "lms_client": {"logging": {"level": "DEBUG"}},
                    },
                    f,
                )

            result = load_yaml_with_inheritance(child_path)
            # Child overrides level
            assert result["lms_client"]["logging"]["level"] == "DEBUG"
            # Base values preserved
            assert result["lms_client"]["logging"]["datefmt"] == "%H:%M"
            assert result["lms_client"]["utils"]["cache_dir"] == "/opt/lms/utils"
            assert "extends" not in result

    def test_inheritance_cycle(self, tmp_path: Path) -> None:
        """Test that profiles extending each other are rejected."""
        (tmp_path / "a.yaml").write_text("extends: b.yaml\n")
        (tmp_path / "b.yaml").write_text("extends: a.yaml\n")

        with pytest.raises(ValueError, match="inheritance cycle"):
            load_yaml_with_inheritance(tmp_path / "a.yaml")

    def test_missing_parent(self, tmp_path: Path) -> None:
        """Test that extending a missing file raises FileNotFoundError."""
        (tmp_path / "child.yaml").write_text("extends: gone.yaml\n")

        with pytest.raises(FileNotFoundError):
            load_yaml_with_inheritance(tmp_path / "child.yaml")

    def test_file_not_found(self) -> None:
        """Test FileNotFoundError for missing config."""
        with pytest.raises(FileNotFoundError):
            load_yaml_with_inheritance(Path("/nonexistent/config.yaml"))


class TestDictToConfig:
    """Tests for converting dict to ClientConfig."""

    def test_empty_dict(self) -> None:
        """Test conversion of empty dict uses defaults."""
        config = dict_to_config({})
        assert config.client_identifier is None
        assert config.logging.level == "INFO"
        assert config.utils.cache_dir == "~/.cache/lm-studio/.internal/utils"

    def test_empty_sections(self) -> None:
        """Test that empty YAML sections fall back to defaults."""
        config = dict_to_config({"lms_client": {"logging": None, "utils": None}})
        assert config.logging.level == "INFO"

    def test_partial_override(self) -> None:
        """Test partial config override."""
        config = dict_to_config({"lms_client": {"logging": {"level": "WARNING"}}})
        assert config.logging.level == "WARNING"
        assert config.logging.datefmt == "%Y-%m-%d %H:%M:%S"  # Default preserved


class TestYAMLConfigLoader:
    """Tests for YAMLConfigLoader class."""

    def test_load_dev_profile(self) -> None:
        """Test loading dev profile from the project config directory."""
        config = YAMLConfigLoader(CONFIG_DIR).load_profile("dev")

        assert isinstance(config, ClientConfig)
        assert config.logging.level == "DEBUG"

    def test_load_prod_profile(self) -> None:
        """Test loading prod profile from the project config directory."""
        config = YAMLConfigLoader(CONFIG_DIR).load_profile("prod")

        assert config.logging.level == "WARNING"
        assert config.utils.cache_dir == "~/.cache/lm-studio/.internal/utils"

    def test_load_test_profile(self) -> None:
        """Test loading test profile from the project config directory."""
        config = YAMLConfigLoader(CONFIG_DIR).load_profile("test")

        assert config.client_identifier == "test-client"

    def test_get_config_dir(self) -> None:
        """Test get_config_dir returns correct path."""
        custom_dir = Path("/custom/config")
        assert YAMLConfigLoader(custom_dir).get_config_dir() == custom_dir


class TestLoadConfigFunction:
    """Tests for convenience load_config function."""

    def test_load_by_profile(self) -> None:
        """Test loading config by profile name from the default directory."""
        config = load_config(profile="test")
        assert isinstance(config, ClientConfig)
        assert config.client_identifier == "test-client"

    def test_load_by_path(self, tmp_path: Path) -> None:
        """Test loading config from an explicit file."""
        path = tmp_path / "custom.yaml"
        path.write_text("lms_client:\n  client_identifier: my-app\n")

        config = load_config(path=path)

        assert config.client_identifier == "my-app"


class TestProfileDetection:
    """Tests for profile detection."""

    def test_detect_profile_from_env(self) -> None:
        """Test profile detection from environment variable."""
        with mock.patch.dict(os.environ, {PROFILE_ENV_VAR: "prod"}):
            assert detect_profile() == Profile.PROD

        with mock.patch.dict(os.environ, {PROFILE_ENV_VAR: "TEST"}):
            assert detect_profile() == Profile.TEST

    def test_detect_profile_default_dev(self) -> None:
        """Test that unset or unknown values fall back to dev."""
        with mock.patch.dict(os.environ, {}, clear=True):
            assert detect_profile() == Profile.DEV

        with mock.patch.dict(os.environ, {PROFILE_ENV_VAR: "staging"}):
            assert detect_profile() == Profile.DEV

    def test_get_profile_path(self) -> None:
        """Test profile path resolution."""
        path = get_profile_path(Profile.PROD, Path("/etc/lms"))
        assert path == Path("/etc/lms/prod.yaml")

    def test_default_profile_path_points_at_project_config(self) -> None:
        assert get_profile_path(Profile.DEV).resolve() == (CONFIG_DIR / "dev.yaml").resolve()
