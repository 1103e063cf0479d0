"""Prompt preprocessor types.

Input handed to a preprocessing stage and the structured updates it emits
for the host to render.
"""

from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from .base import WireModel
from .llm import ChatMessage, ChatRole

StatusStepStatus = Literal["waiting", "loading", "done", "error", "canceled"]

# Statuses that are still in progress and get canceled when the controller ends.
OPEN_STATUSES: frozenset[str] = frozenset({"waiting", "loading"})


class StatusStepState(WireModel):
    """Display state of a status step."""

    status: StatusStepStatus
    text: str


class CitationSource(WireModel):
    """Where a cited piece of text comes from."""

    file_name: str
    absolute_file_path: str | None = None
    page_number: int | tuple[int, int] | None = None
    line_number: int | tuple[int, int] | None = None


class ProcessorInputMessage(WireModel):
    """The user message being preprocessed."""

    role: ChatRole = "user"
    text: str


class ProcessorInputContext(WireModel):
    """Conversation preceding the current user message."""

    history: list[ChatMessage] = Field(default_factory=list)


class AfterIdLocation(WireModel):
    """Insert the new block right after the block with the given id."""

    type: Literal["afterId"] = "afterId"
    id: str


class StatusCreateUpdate(WireModel):
    type: Literal["status.create"] = "status.create"
    id: str
    state: StatusStepState
    location: AfterIdLocation | None = None
    indentation: int | None = None


class StatusUpdateUpdate(WireModel):
    type: Literal["status.update"] = "status.update"
    id: str
    state: StatusStepState


class CitationBlockCreateUpdate(WireModel):
    type: Literal["citationBlock.create"] = "citationBlock.create"
    id: str
    cited_text: str
    source: CitationSource


class DebugInfoBlockCreateUpdate(WireModel):
    type: Literal["debugInfoBlock.create"] = "debugInfoBlock.create"
    id: str
    debug_info: str


PromptPreprocessorUpdate = Annotated[
    StatusCreateUpdate
    | StatusUpdateUpdate
    | CitationBlockCreateUpdate
    | DebugInfoBlockCreateUpdate,
    Field(discriminator="type"),
]

preprocessor_update_adapter: TypeAdapter[
    StatusCreateUpdate | StatusUpdateUpdate | CitationBlockCreateUpdate | DebugInfoBlockCreateUpdate
] = TypeAdapter(PromptPreprocessorUpdate)


__all__ = [
    "OPEN_STATUSES",
    "AfterIdLocation",
    "CitationBlockCreateUpdate",
    "CitationSource",
    "DebugInfoBlockCreateUpdate",
    "ProcessorInputContext",
    "ProcessorInputMessage",
    "PromptPreprocessorUpdate",
    "StatusCreateUpdate",
    "StatusStepState",
    "StatusStepStatus",
    "StatusUpdateUpdate",
    "preprocessor_update_adapter",
]
