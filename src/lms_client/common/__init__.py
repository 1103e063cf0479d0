"""Common building blocks shared by the client modules.

Provides one-shot events, the error hierarchy, log sinks and parameter
validation.
"""

from .errors import (
    AbortedError,
    ControllerEndedError,
    EventAlreadyEmittedError,
    InvalidParameterError,
    LMSError,
    LMSUsageError,
    PredictionCanceledError,
    PredictionError,
    UtilBinaryExecError,
    UtilBinaryNotFoundError,
)
from .events import AbortController, AbortSignal, BufferedEvent
from .logger import SimpleLogger, setup_logging
from .validation import validate_method_param_or_throw, validate_method_params_or_throw

__all__ = [
    "AbortController",
    "AbortSignal",
    "AbortedError",
    "BufferedEvent",
    "ControllerEndedError",
    "EventAlreadyEmittedError",
    "InvalidParameterError",
    "LMSError",
    "LMSUsageError",
    "PredictionCanceledError",
    "PredictionError",
    "SimpleLogger",
    "UtilBinaryExecError",
    "UtilBinaryNotFoundError",
    "setup_logging",
    "validate_method_param_or_throw",
    "validate_method_params_or_throw",
]
