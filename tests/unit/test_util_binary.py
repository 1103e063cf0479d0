"""Unit tests for companion executables."""

import stat
import subprocess
import sys
from pathlib import Path
from unittest import mock

import pytest

from lms_client.common.errors import UtilBinaryExecError, UtilBinaryNotFoundError
from lms_client.utils.binary import DEFAULT_CACHE_DIR, UtilBinary

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses a shell script")


def write_script(directory: Path, name: str, body: str) -> Path:
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


class TestUtilBinaryPath:
    """Tests for executable path resolution."""

    def test_default_cache_dir(self) -> None:
        """Test that the default location is the LM Studio utils cache."""
        with mock.patch("lms_client.utils.binary.sys.platform", "linux"):
            binary = UtilBinary("lms-tool")

        assert binary.path == DEFAULT_CACHE_DIR / "lms-tool"
        assert binary.name == "lms-tool"

    def test_windows_extension(self, tmp_path: Path) -> None:
        """Test that Windows executables get the .exe suffix."""
        with mock.patch("lms_client.utils.binary.sys.platform", "win32"):
            binary = UtilBinary("lms-tool", cache_dir=tmp_path)

        assert binary.path == tmp_path / "lms-tool.exe"

    def test_check_missing(self, tmp_path: Path) -> None:
        """Test that a missing executable is reported."""
        binary = UtilBinary("missing-tool", cache_dir=tmp_path)

        with pytest.raises(UtilBinaryNotFoundError, match=r"Cannot locate required dependencies \(missing-tool\)"):
            binary.check()

    @posix_only
    def test_check_present(self, tmp_path: Path) -> None:
        write_script(tmp_path, "lms-tool", "exit 0")
        UtilBinary("lms-tool", cache_dir=tmp_path).check()


@posix_only
class TestUtilBinaryExec:
    """Tests for running executables."""

    def test_exec_success(self, tmp_path: Path) -> None:
        """Test that a zero exit code returns normally."""
        write_script(tmp_path, "ok-tool", "exit 0")
        UtilBinary("ok-tool", cache_dir=tmp_path).exec([])

    def test_exec_failure_code(self, tmp_path: Path) -> None:
        """Test that a non-zero exit code raises with the code attached."""
        write_script(tmp_path, "bad-tool", "exit 3")

        with pytest.raises(UtilBinaryExecError, match="bad-tool failed with code 3") as exc_info:
            UtilBinary("bad-tool", cache_dir=tmp_path).exec(["--flag"])

        assert exc_info.value.return_code == 3

    def test_spawn_passes_arguments(self, tmp_path: Path) -> None:
        """Test that spawn forwards arguments and Popen options."""
        write_script(tmp_path, "echo-tool", 'echo "$@"')

        process = UtilBinary("echo-tool", cache_dir=tmp_path).spawn(
            ["a", "b"], stdout=subprocess.PIPE, text=True
        )
        output, _ = process.communicate()

        assert output.strip() == "a b"
        assert process.returncode == 0
