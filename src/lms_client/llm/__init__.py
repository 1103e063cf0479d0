"""LLM module for the LM Studio client.

Provides model handles, streaming predictions and the transport contracts
they run on.
"""

from .mock import MockChannel, MockLLMPort
from .model import LLMChatResponseOpts, LLMCompletionOpts, LLMModel
from .namespace import LLMNamespace
from .ongoing_prediction import OngoingPrediction, PredictionState
from .port import Channel, LLMPort
from .prediction_result import PredictionResult

__all__ = [
    "Channel",
    "LLMChatResponseOpts",
    "LLMCompletionOpts",
    "LLMModel",
    "LLMNamespace",
    "LLMPort",
    "MockChannel",
    "MockLLMPort",
    "OngoingPrediction",
    "PredictionResult",
    "PredictionState",
]
