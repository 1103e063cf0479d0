"""Companion executables shipped with LM Studio.

Locates helper binaries in the LM Studio cache directory and runs them.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Any

from ..common.errors import UtilBinaryExecError, UtilBinaryNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "lm-studio" / ".internal" / "utils"


class UtilBinary:
    """A platform-specific helper executable.

    Example:
        binary = UtilBinary("lms-tool")
        binary.check()
        binary.exec(["--version"])
    """

    def __init__(self, name: str, cache_dir: str | Path | None = None) -> None:
        """Initialize helper binary.

        Args:
            name: Executable name without extension.
            cache_dir: Directory holding the executables. Defaults to the
                LM Studio utils cache.
        """
        self._name = name
        base_dir = Path(cache_dir).expanduser() if cache_dir is not None else DEFAULT_CACHE_DIR
        file_name = f"{name}.exe" if sys.platform == "win32" else name
        self._path = base_dir / file_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        """Get the resolved executable path."""
        return self._path

    def check(self) -> None:
        """Make sure the executable exists.

        Raises:
            UtilBinaryNotFoundError: If the executable is missing.
        """
        if not self._path.is_file():
            raise UtilBinaryNotFoundError(
                f"Cannot locate required dependencies ({self._name}). "
                "Please make sure you have the latest version of LM Studio installed."
            )

    def spawn(self, args: list[str], **popen_kwargs: Any) -> subprocess.Popen:
        """Start the executable without waiting for it.

        Args:
            args: Command line arguments.
            **popen_kwargs: Passed to subprocess.Popen.

        Returns:
            The running process.
        """
        logger.debug(f"Spawning {self._path} {' '.join(args)}")
        return subprocess.Popen([str(self._path), *args], **popen_kwargs)

    def exec(self, args: list[str]) -> None:
        """Run the executable to completion, sharing this process's stdout/stderr.

        Args:
            args: Command line arguments.

        Raises:
            UtilBinaryExecError: If the process exits with a non-zero code.
        """
        # Inherits stdout/stderr from this process
        process = self.spawn(args)
        return_code = process.wait()
        if return_code != 0:
            raise UtilBinaryExecError(
                f"{self._name} failed with code {return_code}",
                return_code=return_code,
            )


__all__ = ["DEFAULT_CACHE_DIR", "UtilBinary"]
