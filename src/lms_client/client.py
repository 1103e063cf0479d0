"""Client facade for the LM Studio backend.

Binds a transport port to the LLM namespace and the client configuration.
"""

import logging

from .common.logger import SimpleLogger
from .config import ClientConfig
from .llm.namespace import LLMNamespace
from .llm.port import LLMPort
from .utils.binary import UtilBinary

logger = logging.getLogger(__name__)


class LMSClient:
    """Entry point for talking to a running LM Studio backend.

    Example:
        client = LMSClient(port)
        model = client.llm.get("my-model")
        result = await model.complete("2+2=")
    """

    def __init__(self, port: LLMPort, config: ClientConfig | None = None) -> None:
        """Initialize client.

        Args:
            port: Connection to the backend, supplied by the transport layer.
            config: Client configuration. Defaults are used if not provided.
        """
        self._config = config or ClientConfig()
        self._logger = SimpleLogger("LMSClient")
        self._llm = LLMNamespace(port, self._logger)
        if self._config.client_identifier:
            logger.debug(f"Client created: {self._config.client_identifier}")

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def llm(self) -> LLMNamespace:
        """Get the LLM namespace."""
        return self._llm

    def util_binary(self, name: str) -> UtilBinary:
        """Get a companion executable from the configured cache directory."""
        return UtilBinary(name, cache_dir=self._config.utils.cache_dir)


__all__ = ["LMSClient"]
