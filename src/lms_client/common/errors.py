"""Error types for the LM Studio client.

Custom exceptions raised by the client core.
"""


class LMSError(Exception):
    """Base exception for all client errors."""

    pass


class LMSUsageError(LMSError):
    """Raised when the client is used incorrectly (e.g. model already unloaded)."""

    pass


class InvalidParameterError(LMSError):
    """Raised when a method parameter fails schema validation."""

    def __init__(
        self,
        class_name: str,
        method_name: str,
        parameter_name: str,
        details: str,
    ) -> None:
        """Initialize validation error.

        Args:
            class_name: Name of the class owning the method.
            method_name: Name of the method that was called.
            parameter_name: Name of the offending parameter.
            details: Human readable validation details.
        """
        super().__init__(
            f"Invalid parameter(s) for {class_name}.{method_name}: "
            f"`{parameter_name}` is invalid.\n{details}"
        )
        self.class_name = class_name
        self.method_name = method_name
        self.parameter_name = parameter_name
        self.details = details


class PredictionError(LMSError):
    """Raised when a prediction fails on the backend or transport."""

    pass


class PredictionCanceledError(PredictionError):
    """Raised when a prediction terminated after cancellation was requested."""

    pass


class ControllerEndedError(LMSError):
    """Raised when an update is sent through a controller that has ended."""

    def __init__(self, message: str = "Prediction process has ended.") -> None:
        super().__init__(message)


class EventAlreadyEmittedError(LMSError):
    """Raised when a one-shot event is emitted a second time."""

    pass


class AbortedError(LMSError):
    """Raised by ``AbortSignal.throw_if_aborted`` once the signal has fired."""

    def __init__(self, reason: object = None) -> None:
        super().__init__("The operation was aborted." if reason is None else str(reason))
        self.reason = reason


class UtilBinaryNotFoundError(LMSError):
    """Raised when a companion executable cannot be located."""

    pass


class UtilBinaryExecError(LMSError):
    """Raised when a companion executable exits with a non-zero code."""

    def __init__(self, message: str, return_code: int | None = None) -> None:
        """Initialize execution error.

        Args:
            message: Error message.
            return_code: Process exit code if available.
        """
        super().__init__(message)
        self.return_code = return_code


__all__ = [
    "AbortedError",
    "ControllerEndedError",
    "EventAlreadyEmittedError",
    "InvalidParameterError",
    "LMSError",
    "LMSUsageError",
    "PredictionCanceledError",
    "PredictionError",
    "UtilBinaryExecError",
    "UtilBinaryNotFoundError",
]
