"""LM Studio client - talk to a local model-inference backend.

The client provides:
- Model handles with streaming predictions (``complete``, ``respond``)
- Predictions that can be awaited or iterated fragment by fragment
- A controller for preprocessing stages to report structured progress

The wire transport is supplied by the caller as an ``LLMPort``.

Usage:
    client = LMSClient(port)
    async for fragment in client.llm.get("my-model").complete("2+2="):
        print(fragment, end="")
"""

__version__ = "0.1.0"

from .client import LMSClient
from .common.errors import (
    ControllerEndedError,
    InvalidParameterError,
    LMSError,
    LMSUsageError,
    PredictionCanceledError,
    PredictionError,
)
from .common.events import AbortController, AbortSignal, BufferedEvent
from .config import ClientConfig
from .config.loader import load_config
from .llm import (
    LLMModel,
    LLMNamespace,
    LLMPort,
    OngoingPrediction,
    PredictionResult,
    PredictionState,
)
from .llm.processor import PromptPreprocessController

__all__ = [
    "AbortController",
    "AbortSignal",
    "BufferedEvent",
    "ClientConfig",
    "ControllerEndedError",
    "InvalidParameterError",
    "LLMModel",
    "LLMNamespace",
    "LLMPort",
    "LMSClient",
    "LMSError",
    "LMSUsageError",
    "OngoingPrediction",
    "PredictionCanceledError",
    "PredictionError",
    "PredictionResult",
    "PredictionState",
    "PromptPreprocessController",
    "__version__",
    "load_config",
]
