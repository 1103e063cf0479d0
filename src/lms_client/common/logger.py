"""Logging helpers.

``SimpleLogger`` is the log sink handed to client components. It wraps a
stdlib logger and adds ``throw`` for usage errors that must be both logged
and raised.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from .errors import LMSUsageError

ROOT_LOGGER_NAME = "lms_client"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=fmt,
        datefmt=datefmt,
    )


class SimpleLogger:
    """Named log sink with an optional parent.

    Child loggers are nested under the parent's stdlib logger, so
    ``SimpleLogger("LLMModel", SimpleLogger("LMSClient"))`` writes to
    ``lms_client.LMSClient.LLMModel``.
    """

    def __init__(self, name: str, parent: SimpleLogger | None = None) -> None:
        """Initialize the logger.

        Args:
            name: Component name.
            parent: Optional parent sink.
        """
        self._name = name
        base = parent.logger.name if parent is not None else ROOT_LOGGER_NAME
        self._logger = logging.getLogger(f"{base}.{name}")

    @property
    def name(self) -> str:
        """Get the component name."""
        return self._name

    @property
    def logger(self) -> logging.Logger:
        """Get the underlying stdlib logger."""
        return self._logger

    def debug(self, message: str, *args: object) -> None:
        self._logger.debug(message, *args)

    def info(self, message: str, *args: object) -> None:
        self._logger.info(message, *args)

    def warning(self, message: str, *args: object) -> None:
        self._logger.warning(message, *args)

    def error(self, message: str, *args: object) -> None:
        self._logger.error(message, *args)

    def throw(
        self,
        message: str,
        error_cls: type[Exception] = LMSUsageError,
    ) -> NoReturn:
        """Log message at ERROR level and raise it.

        Args:
            message: Error message.
            error_cls: Exception type to raise.

        Raises:
            error_cls: Always.
        """
        self._logger.error(message)
        raise error_cls(message)


__all__ = ["SimpleLogger", "setup_logging"]
