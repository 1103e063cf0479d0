"""Unit tests for the command line entry point."""

import stat
import sys
from pathlib import Path

import pytest

from lms_client.__main__ import main, parse_args


def write_config(tmp_path: Path, cache_dir: Path) -> Path:
    path = tmp_path / "client.yaml"
    path.write_text(f"lms_client:\n  utils:\n    cache_dir: {cache_dir}\n")
    return path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.config is None
        assert args.profile is None
        assert args.dry_run is False
        assert args.command is None

    def test_check_binary_command(self) -> None:
        args = parse_args(["--profile", "prod", "check-binary", "lms-tool"])
        assert args.profile == "prod"
        assert args.command == "check-binary"
        assert args.name == "lms-tool"

    def test_invalid_profile(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--profile", "staging"])


class TestMain:
    """Tests for main()."""

    def test_dry_run(self) -> None:
        """Test that a dry run loads the profile and exits cleanly."""
        assert main(["--profile", "test", "--dry-run"]) == 0

    def test_missing_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a missing config file is reported with exit code 1."""
        assert main(["--config", str(tmp_path / "nope.yaml"), "--dry-run"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_no_command(self) -> None:
        assert main(["--profile", "test"]) == 2

    def test_check_binary_missing(self, tmp_path: Path) -> None:
        """Test that a missing executable gives exit code 1."""
        config = write_config(tmp_path, tmp_path / "utils")
        assert main(["--config", str(config), "check-binary", "lms-tool"]) == 1

    @pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX executable name")
    def test_check_binary_present(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that an installed executable prints its path."""
        utils_dir = tmp_path / "utils"
        utils_dir.mkdir()
        tool = utils_dir / "lms-tool"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR)
        config = write_config(tmp_path, utils_dir)

        assert main(["--config", str(config), "check-binary", "lms-tool"]) == 0
        assert capsys.readouterr().out.strip() == str(tool)
