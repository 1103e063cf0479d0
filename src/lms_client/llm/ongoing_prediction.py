"""Ongoing prediction: a result that is both awaitable and streamable.

An ``OngoingPrediction`` keeps every fragment it receives. Awaiting it gives
the final ``PredictionResult``; iterating it with ``async for`` yields the
fragments, starting from the first one for every new iteration.

Example:
    prediction = model.complete("When will The Winds of Winter be released?")
    async for fragment in prediction:
        print(fragment, end="")
    result = await prediction
    print(result.stats)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Generator
from enum import Enum
from typing import Any

from ..common.errors import PredictionCanceledError
from ..shared.llm import LLMDescriptor, LLMPredictionStats
from .prediction_result import PredictionResult

logger = logging.getLogger(__name__)

PushFn = Callable[[str], None]
FinishedFn = Callable[[LLMPredictionStats, LLMDescriptor], None]
FailedFn = Callable[[BaseException], None]


class PredictionState(Enum):
    """Lifecycle of a prediction."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


class OngoingPrediction:
    """A prediction that is still producing fragments.

    Don't construct this on your own. It is returned by ``LLMModel.complete``
    and ``LLMModel.respond``.
    """

    def __init__(self, emit_cancel: Callable[[], None]) -> None:
        self._emit_cancel = emit_cancel
        self._fragments: list[str] = []
        self._state = PredictionState.PENDING
        self._result: PredictionResult | None = None
        self._error: BaseException | None = None
        self._cancel_requested = False
        # Replaced on every change; waiters hold the instance they saw.
        self._changed = asyncio.Event()

    @classmethod
    def create(
        cls,
        emit_cancel: Callable[[], None],
    ) -> tuple[OngoingPrediction, PushFn, FinishedFn, FailedFn]:
        """Create a prediction together with its mutators.

        The mutators are handed to the channel wiring only; they are not part
        of the public surface of the prediction.

        Args:
            emit_cancel: Called once when the caller requests cancellation.

        Returns:
            Tuple of (prediction, push, finished, failed).
        """
        prediction = cls(emit_cancel)
        return prediction, prediction._push, prediction._finished, prediction._failed

    @property
    def state(self) -> PredictionState:
        """Get the current lifecycle state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Return True once the prediction succeeded, failed or was canceled."""
        return self._state is not PredictionState.PENDING

    @property
    def cancel_requested(self) -> bool:
        """Return True if ``cancel()`` was called."""
        return self._cancel_requested

    @property
    def fragments(self) -> list[str]:
        """Get the fragments received so far, in arrival order."""
        return self._fragments.copy()

    @property
    def content(self) -> str:
        """Get the text generated so far."""
        return "".join(self._fragments)

    def cancel(self) -> None:
        """Ask the backend to stop generating.

        The prediction stays pending until the backend reports the outcome.
        Calling this more than once, or after the prediction ended, does
        nothing.
        """
        if self._cancel_requested or self.is_terminal:
            return
        self._cancel_requested = True
        self._emit_cancel()

    async def result(self) -> PredictionResult:
        """Wait for the prediction to finish.

        Returns:
            The final PredictionResult.

        Raises:
            PredictionCanceledError: If the prediction ended after cancellation.
            Exception: The error reported by the channel on failure.
        """
        while not self.is_terminal:
            await self._changed.wait()
        if self._error is not None:
            raise self._error.with_traceback(None)
        assert self._result is not None
        return self._result

    def __await__(self) -> Generator[Any, None, PredictionResult]:
        return self.result().__await__()

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        index = 0
        while True:
            changed = self._changed
            while index < len(self._fragments):
                yield self._fragments[index]
                index += 1
            if self._state is PredictionState.SUCCEEDED:
                return
            if self._error is not None:
                raise self._error.with_traceback(None)
            await changed.wait()

    def _notify(self) -> None:
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    def _push(self, fragment: str) -> None:
        if self.is_terminal:
            logger.warning(
                "Dropping fragment received after prediction became %s",
                self._state.value,
            )
            return
        self._fragments.append(fragment)
        self._notify()

    def _finished(self, stats: LLMPredictionStats, model_info: LLMDescriptor) -> None:
        if self.is_terminal:
            logger.warning("Ignoring finish for prediction that is already %s", self._state.value)
            return
        self._result = PredictionResult(
            content="".join(self._fragments),
            stats=stats,
            model_info=model_info,
        )
        self._state = PredictionState.SUCCEEDED
        logger.debug("Prediction succeeded with %d fragments", len(self._fragments))
        self._notify()

    def _failed(self, error: BaseException) -> None:
        if self.is_terminal:
            logger.warning("Ignoring failure for prediction that is already %s", self._state.value)
            return
        if self._cancel_requested:
            canceled = PredictionCanceledError("Prediction was canceled.")
            canceled.__cause__ = error
            self._error = canceled
            self._state = PredictionState.CANCELED
        else:
            self._error = error
            self._state = PredictionState.FAILED
        logger.debug("Prediction %s: %s", self._state.value, error)
        self._notify()


__all__ = ["OngoingPrediction", "PredictionState"]
