"""LLM prediction types shared with the backend.

Chat history, prediction configuration, structured output settings,
prediction statistics and model descriptors.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter

from .base import InboundWireModel, WireModel

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(WireModel):
    """A single message in a chat history."""

    role: ChatRole
    content: str


LLMChatHistory = Annotated[list[ChatMessage], Field(min_length=1)]

LLMContextOverflowPolicy = Literal["stopAtLimit", "truncateMiddle", "rollingWindow"]


class LLMCompletionPredictionConfig(WireModel):
    """Prediction settings accepted by ``LLMModel.complete``.

    Values given here override the ones set in the loaded preset.

    Attributes:
        max_predicted_tokens: Token limit, or False for no limit.
        temperature: Sampling temperature.
        stop_strings: Strings that stop generation when produced.
        context_overflow_policy: Behavior once the context length is exceeded.
        top_k_sampling: Top-K sampling cutoff.
        repeat_penalty: Penalty applied to repeated tokens.
        min_p_sampling: Min-P sampling cutoff.
        top_p_sampling: Top-P sampling cutoff.
        cpu_threads: Number of CPU threads to use.
    """

    max_predicted_tokens: Literal[False] | Annotated[int, Field(ge=1)] | None = None
    temperature: Annotated[float, Field(ge=0)] | None = None
    stop_strings: list[str] | None = None
    context_overflow_policy: LLMContextOverflowPolicy | None = None
    top_k_sampling: int | None = None
    repeat_penalty: float | Literal[False] | None = None
    min_p_sampling: Annotated[float, Field(ge=0, le=1)] | Literal[False] | None = None
    top_p_sampling: Annotated[float, Field(ge=0, le=1)] | Literal[False] | None = None
    cpu_threads: Annotated[int, Field(ge=1)] | None = None


class LLMChatPredictionConfig(LLMCompletionPredictionConfig):
    """Prediction settings accepted by ``LLMModel.respond``.

    Adds the prompt template fields that only make sense for chat histories.
    """

    input_prefix: str | None = None
    input_suffix: str | None = None


class LLMStructuredPredictionNone(WireModel):
    """Structured output disabled."""

    type: Literal["none"] = "none"


class LLMStructuredPredictionJSON(WireModel):
    """Constrain the output to JSON, optionally matching a JSON schema."""

    type: Literal["json"] = "json"
    json_schema: dict[str, Any] | None = None


LLMStructuredPredictionSetting = Annotated[
    LLMStructuredPredictionNone | LLMStructuredPredictionJSON,
    Field(discriminator="type"),
]


class LLMPredictionStats(InboundWireModel):
    """Statistics reported by the backend when a prediction finishes."""

    stop_reason: str | None = None
    tokens_per_second: float | None = None
    num_gpu_layers: int | None = None
    time_to_first_token_sec: float | None = None
    prompt_tokens_count: int | None = None
    predicted_tokens_count: int | None = None
    total_tokens_count: int | None = None


class LLMDescriptor(InboundWireModel):
    """Describes a loaded model instance."""

    identifier: str
    path: str


class LLMModelQuery(WireModel):
    """Requirements a model must satisfy."""

    identifier: str | None = None
    path: str | None = None


class LLMModelQuerySpecifier(WireModel):
    """Select whichever loaded model matches the query."""

    type: Literal["query"] = "query"
    query: LLMModelQuery


class LLMInstanceReferenceSpecifier(WireModel):
    """Select one specific loaded model instance."""

    type: Literal["instanceReference"] = "instanceReference"
    instance_reference: str


LLMModelSpecifier = Annotated[
    LLMModelQuerySpecifier | LLMInstanceReferenceSpecifier,
    Field(discriminator="type"),
]

chat_history_adapter: TypeAdapter[list[ChatMessage]] = TypeAdapter(LLMChatHistory)
model_specifier_adapter: TypeAdapter[Any] = TypeAdapter(LLMModelSpecifier)
structured_setting_adapter: TypeAdapter[Any] = TypeAdapter(LLMStructuredPredictionSetting)


__all__ = [
    "ChatMessage",
    "ChatRole",
    "LLMChatHistory",
    "LLMChatPredictionConfig",
    "LLMCompletionPredictionConfig",
    "LLMContextOverflowPolicy",
    "LLMDescriptor",
    "LLMInstanceReferenceSpecifier",
    "LLMModelQuery",
    "LLMModelQuerySpecifier",
    "LLMModelSpecifier",
    "LLMPredictionStats",
    "LLMStructuredPredictionJSON",
    "LLMStructuredPredictionNone",
    "LLMStructuredPredictionSetting",
    "chat_history_adapter",
    "model_specifier_adapter",
    "structured_setting_adapter",
]
