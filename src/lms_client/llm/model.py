"""LLM model handle and prediction entry points.

``LLMModel.complete`` and ``LLMModel.respond`` validate their input, open one
"predict" channel per call and return an ``OngoingPrediction`` that is fed by
the channel.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ..common.errors import PredictionError
from ..common.events import BufferedEvent
from ..common.logger import SimpleLogger
from ..common.validation import validate_method_params_or_throw
from ..shared.base import WireModel
from ..shared.llm import (
    ChatMessage,
    LLMChatPredictionConfig,
    LLMCompletionPredictionConfig,
    LLMDescriptor,
    LLMModelSpecifier,
    LLMPredictionStats,
    LLMStructuredPredictionSetting,
    chat_history_adapter,
    model_specifier_adapter,
)
from .ongoing_prediction import OngoingPrediction
from .port import LLMPort


class LLMCompletionOpts(WireModel):
    """Options for ``LLMModel.complete``.

    Attributes:
        config: Overrides for the values set in the preset.
        structured: Structured output settings for the prediction.
    """

    config: LLMCompletionPredictionConfig | None = None
    structured: LLMStructuredPredictionSetting | None = None


class LLMChatResponseOpts(WireModel):
    """Options for ``LLMModel.respond``.

    Attributes:
        config: Overrides for the values set in the preset.
        structured: Structured output settings for the prediction.
    """

    config: LLMChatPredictionConfig | None = None
    structured: LLMStructuredPredictionSetting | None = None


class LLMModel:
    """Handle to a loaded model.

    The handle is tied to a specifier, not to a model instance. If the model
    is unloaded and another model is loaded under the same identifier, the
    same handle uses the new model.

    Don't construct this on your own. Use ``LLMNamespace.get`` or
    ``LLMNamespace.load`` instead.
    """

    def __init__(
        self,
        port: LLMPort,
        specifier: LLMModelSpecifier | dict[str, Any],
        parent_logger: SimpleLogger | None = None,
    ) -> None:
        """Initialize model handle.

        Args:
            port: Connection to the LLM backend.
            specifier: Which model this handle refers to.
            parent_logger: Optional parent log sink.
        """
        self._port = port
        self._specifier = model_specifier_adapter.validate_python(specifier)
        self._logger = SimpleLogger("LLMModel", parent_logger)
        self._loaded = True

    @property
    def specifier(self) -> LLMModelSpecifier:
        """Get the specifier this handle refers to."""
        return self._specifier

    @property
    def is_loaded(self) -> bool:
        """Return False once the model was unloaded through this handle."""
        return self._loaded

    def _predict(
        self,
        history: list[ChatMessage],
        config: dict[str, Any],
        structured: Any,
        cancel_event: BufferedEvent[None],
        on_fragment: Callable[[str], None],
        on_finished: Callable[[LLMPredictionStats, LLMDescriptor], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        creation_parameter: dict[str, Any] = {
            "modelSpecifier": self._specifier.to_wire(),
            "history": [message.to_wire() for message in history],
            "config": config,
        }
        if structured is not None:
            creation_parameter["structured"] = structured.to_wire()

        def handle_message(message: dict[str, Any]) -> None:
            message_type = message.get("type")
            if message_type == "fragment":
                fragment = message.get("fragment")
                if not isinstance(fragment, str):
                    on_error(
                        PredictionError(
                            f"Malformed fragment message from backend: {fragment!r} is not a string"
                        )
                    )
                    return
                on_fragment(fragment)
            elif message_type == "success":
                try:
                    stats = LLMPredictionStats.model_validate(message.get("stats") or {})
                    model_info = LLMDescriptor.model_validate(message.get("modelInfo"))
                except ValidationError as e:
                    error = PredictionError(f"Malformed success message from backend: {e}")
                    error.__cause__ = e
                    on_error(error)
                    return
                on_finished(stats, model_info)
            else:
                self._logger.warning("Ignoring unknown predict message type: %s", message_type)

        channel = self._port.create_channel("predict", creation_parameter, handle_message)
        self._logger.debug("Opened predict channel with %d history message(s)", len(history))
        cancel_event.subscribe_once(lambda _: channel.send({"type": "cancel"}))
        channel.on_error.subscribe_once(on_error)

    def _start_prediction(
        self,
        history: list[ChatMessage],
        config: dict[str, Any],
        structured: Any,
    ) -> OngoingPrediction:
        cancel_event, emit_cancel_event = BufferedEvent.create()
        prediction, push, finished, failed = OngoingPrediction.create(emit_cancel_event)
        self._predict(
            history,
            config,
            structured,
            cancel_event,
            push,
            finished,
            failed,
        )
        return prediction

    def complete(
        self,
        prompt: str,
        opts: LLMCompletionOpts | dict[str, Any] | None = None,
    ) -> OngoingPrediction:
        """Use the loaded model to predict text.

        The returned prediction can be awaited for the final result or
        iterated with ``async for`` to stream fragments.

        Args:
            prompt: The prompt to use for prediction.
            opts: Options for the prediction.

        Returns:
            OngoingPrediction fed by the backend.

        Raises:
            LMSUsageError: If the model was already unloaded.
            InvalidParameterError: If prompt or opts are invalid.
        """
        if not self._loaded:
            self._logger.throw("Cannot use `complete` because the model is already unloaded.")
        prompt, parsed_opts = validate_method_params_or_throw(
            "LLMModel",
            "complete",
            ["prompt", "opts"],
            [str, LLMCompletionOpts],
            [prompt, {} if opts is None else opts],
        )
        config = parsed_opts.config.to_wire() if parsed_opts.config is not None else {}
        return self._start_prediction(
            [ChatMessage(role="user", content=prompt)],
            {
                # Default to no stop strings so the preset's values are not used.
                "stopStrings": [],
                **config,
                # The prompt template does not apply to raw completions.
                "inputPrefix": "",
                "inputSuffix": "",
            },
            parsed_opts.structured,
        )

    def respond(
        self,
        history: list[ChatMessage] | list[dict[str, Any]],
        opts: LLMChatResponseOpts | dict[str, Any] | None = None,
    ) -> OngoingPrediction:
        """Use the loaded model to generate a response to a chat history.

        Args:
            history: Chat messages, oldest first.
            opts: Options for the prediction.

        Returns:
            OngoingPrediction fed by the backend.

        Raises:
            LMSUsageError: If the model was already unloaded.
            InvalidParameterError: If history or opts are invalid.
        """
        if not self._loaded:
            self._logger.throw("Cannot use `respond` because the model is already unloaded.")
        parsed_history, parsed_opts = validate_method_params_or_throw(
            "LLMModel",
            "respond",
            ["history", "opts"],
            [chat_history_adapter, LLMChatResponseOpts],
            [history, {} if opts is None else opts],
        )
        config = parsed_opts.config.to_wire() if parsed_opts.config is not None else {}
        return self._start_prediction(parsed_history, config, parsed_opts.structured)

    async def get_model_info(self) -> LLMDescriptor | None:
        """Get the model currently associated with this handle.

        As models are loaded and unloaded, the associated model may change at
        any moment.

        Returns:
            LLMDescriptor, or None if no model is associated.
        """
        info = await self._port.call_rpc(
            "getModelInfo",
            {"specifier": self._specifier.to_wire()},
        )
        if info is None:
            return None
        return LLMDescriptor.model_validate(info)

    async def unload(self) -> None:
        """Unload the model this handle refers to.

        Raises:
            LMSUsageError: If the model was already unloaded.
        """
        if not self._loaded:
            self._logger.throw("Cannot use `unload` because the model is already unloaded.")
        await self._port.call_rpc("unloadModel", {"specifier": self._specifier.to_wire()})
        self._loaded = False
        self._logger.info("Model unloaded")


__all__ = ["LLMChatResponseOpts", "LLMCompletionOpts", "LLMModel"]
