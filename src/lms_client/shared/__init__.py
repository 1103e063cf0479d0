"""Types shared between the client and the backend."""

from .base import InboundWireModel, WireModel
from .llm import (
    ChatMessage,
    LLMChatHistory,
    LLMChatPredictionConfig,
    LLMCompletionPredictionConfig,
    LLMDescriptor,
    LLMInstanceReferenceSpecifier,
    LLMModelQuery,
    LLMModelQuerySpecifier,
    LLMModelSpecifier,
    LLMPredictionStats,
    LLMStructuredPredictionJSON,
    LLMStructuredPredictionNone,
    LLMStructuredPredictionSetting,
)
from .load_config import LLMLlamaAccelerationSetting, LLMLoadModelConfig
from .processor import (
    AfterIdLocation,
    CitationBlockCreateUpdate,
    CitationSource,
    DebugInfoBlockCreateUpdate,
    ProcessorInputContext,
    ProcessorInputMessage,
    PromptPreprocessorUpdate,
    StatusCreateUpdate,
    StatusStepState,
    StatusStepStatus,
    StatusUpdateUpdate,
)
from .retrieval import FileType, RetrievalFileHandle, RetrievalResult, RetrievalResultEntry

__all__ = [
    "AfterIdLocation",
    "ChatMessage",
    "CitationBlockCreateUpdate",
    "CitationSource",
    "DebugInfoBlockCreateUpdate",
    "FileType",
    "InboundWireModel",
    "LLMChatHistory",
    "LLMChatPredictionConfig",
    "LLMCompletionPredictionConfig",
    "LLMDescriptor",
    "LLMInstanceReferenceSpecifier",
    "LLMLlamaAccelerationSetting",
    "LLMLoadModelConfig",
    "LLMModelQuery",
    "LLMModelQuerySpecifier",
    "LLMModelSpecifier",
    "LLMPredictionStats",
    "LLMStructuredPredictionJSON",
    "LLMStructuredPredictionNone",
    "LLMStructuredPredictionSetting",
    "ProcessorInputContext",
    "ProcessorInputMessage",
    "PromptPreprocessorUpdate",
    "RetrievalFileHandle",
    "RetrievalResult",
    "RetrievalResultEntry",
    "StatusCreateUpdate",
    "StatusStepState",
    "StatusStepStatus",
    "StatusUpdateUpdate",
    "WireModel",
]
