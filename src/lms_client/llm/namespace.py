"""LLM namespace: obtain handles to loaded models."""

from __future__ import annotations

from typing import Any

from ..common.errors import LMSError
from ..common.logger import SimpleLogger
from ..common.validation import validate_method_params_or_throw
from ..shared.llm import (
    LLMDescriptor,
    LLMInstanceReferenceSpecifier,
    LLMModelQuery,
    LLMModelQuerySpecifier,
)
from ..shared.load_config import LLMLoadModelConfig
from .model import LLMModel
from .port import LLMPort


class LLMNamespace:
    """Entry point for working with LLMs on the backend."""

    def __init__(self, port: LLMPort, parent_logger: SimpleLogger | None = None) -> None:
        """Initialize namespace.

        Args:
            port: Connection to the LLM backend.
            parent_logger: Optional parent log sink.
        """
        self._port = port
        self._logger = SimpleLogger("LLMNamespace", parent_logger)

    def get(self, identifier: str) -> LLMModel:
        """Get a handle to the model loaded under identifier.

        No backend call is made; the model does not need to be loaded yet.
        """
        (identifier,) = validate_method_params_or_throw(
            "LLMNamespace", "get", ["identifier"], [str], [identifier]
        )
        return LLMModel(
            self._port,
            LLMModelQuerySpecifier(query=LLMModelQuery(identifier=identifier)),
            self._logger,
        )

    async def load(
        self,
        path: str,
        *,
        identifier: str | None = None,
        config: LLMLoadModelConfig | dict[str, Any] | None = None,
    ) -> LLMModel:
        """Load a model and return a handle bound to the loaded instance.

        Args:
            path: Path of the model to load.
            identifier: Optional identifier to load the model under.
            config: Load configuration forwarded to the backend.

        Returns:
            LLMModel referring to the new instance.

        Raises:
            InvalidParameterError: If any argument is invalid.
            LMSError: If the backend answer lacks an instance reference.
        """
        path, identifier, parsed_config = validate_method_params_or_throw(
            "LLMNamespace",
            "load",
            ["path", "identifier", "config"],
            [str, str | None, LLMLoadModelConfig],
            [path, identifier, {} if config is None else config],
        )
        parameter: dict[str, Any] = {"path": path, "loadConfig": parsed_config.to_wire()}
        if identifier is not None:
            parameter["identifier"] = identifier

        self._logger.info("Loading model: %s", path)
        result = await self._port.call_rpc("loadModel", parameter)
        instance_reference = (result or {}).get("instanceReference")
        if not instance_reference:
            raise LMSError(f"Backend did not return an instance reference for {path}")
        descriptor = LLMDescriptor.model_validate(result)
        self._logger.info("Model loaded: %s", descriptor.identifier)
        return LLMModel(
            self._port,
            LLMInstanceReferenceSpecifier(instance_reference=instance_reference),
            self._logger,
        )

    async def unload(self, identifier: str) -> None:
        """Unload the model loaded under identifier."""
        await self.get(identifier).unload()

    async def list_loaded(self) -> list[LLMDescriptor]:
        """List the models currently loaded on the backend."""
        result = await self._port.call_rpc("listLoaded", {})
        return [LLMDescriptor.model_validate(entry) for entry in result or []]


__all__ = ["LLMNamespace"]
