"""Final result of a prediction."""

from dataclasses import dataclass

from ..shared.llm import LLMDescriptor, LLMPredictionStats


@dataclass(frozen=True)
class PredictionResult:
    """Result of a successfully finished prediction.

    Attributes:
        content: All generated fragments concatenated in arrival order.
        stats: Statistics reported by the backend.
        model_info: Descriptor of the model that produced the prediction.
    """

    content: str
    stats: LLMPredictionStats
    model_info: LLMDescriptor


__all__ = ["PredictionResult"]
