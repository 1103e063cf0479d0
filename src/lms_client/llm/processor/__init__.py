"""Prompt preprocessing support.

Provides the controller a preprocessing stage uses to report progress for a
single request.
"""

from .controller import (
    PredictionProcessCitationBlockController,
    PredictionProcessDebugInfoBlockController,
    PredictionProcessStatusController,
    PredictionStepController,
    PromptCoPreprocessor,
    PromptPreprocessController,
)

__all__ = [
    "PredictionProcessCitationBlockController",
    "PredictionProcessDebugInfoBlockController",
    "PredictionProcessStatusController",
    "PredictionStepController",
    "PromptCoPreprocessor",
    "PromptPreprocessController",
]
