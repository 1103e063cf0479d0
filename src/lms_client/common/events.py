"""One-shot events and abort signals.

A ``BufferedEvent`` can be subscribed to before or after it fires; every
subscriber is called exactly once with the emitted payload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .errors import AbortedError, EventAlreadyEmittedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOT_EMITTED = object()


class BufferedEvent(Generic[T]):
    """Single-fire event that replays its payload to late subscribers.

    Example:
        event, emit = BufferedEvent.create()
        event.subscribe_once(lambda payload: print("first", payload))
        emit("done")
        event.subscribe_once(lambda payload: print("late", payload))  # runs now
    """

    def __init__(self) -> None:
        """Initialize an event that has not fired yet.

        Use ``BufferedEvent.create()`` to also obtain the emit function.
        """
        self._payload: Any = _NOT_EMITTED
        self._handlers: list[Callable[[T], None]] = []

    @classmethod
    def create(cls) -> tuple[BufferedEvent[T], Callable[..., None]]:
        """Create an event together with the function that fires it.

        Returns:
            Tuple of (event, emit).
        """
        event: BufferedEvent[T] = cls()
        return event, event._emit

    @property
    def emitted(self) -> bool:
        """Return True once the event has fired."""
        return self._payload is not _NOT_EMITTED

    def subscribe_once(self, handler: Callable[[T], None]) -> Callable[[], None]:
        """Register a handler to be called exactly once.

        If the event already fired, the handler is called immediately with the
        original payload.

        Args:
            handler: Callable receiving the payload.

        Returns:
            A function that removes the handler if it has not run yet.
        """
        if self.emitted:
            handler(self._payload)
            return lambda: None

        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def _emit(self, payload: T = None) -> None:  # type: ignore[assignment]
        if self.emitted:
            raise EventAlreadyEmittedError("BufferedEvent has already been emitted.")
        self._payload = payload
        handlers, self._handlers = self._handlers, []
        errors: list[Exception] = []
        for handler in handlers:
            try:
                handler(payload)
            except Exception as e:
                errors.append(e)
        if errors:
            for extra in errors[1:]:
                logger.error("Additional BufferedEvent handler error: %r", extra)
            raise errors[0]


class AbortSignal:
    """Read side of an ``AbortController``."""

    def __init__(self, event: BufferedEvent[object]) -> None:
        self._event = event
        self._reason: object = None

    @property
    def aborted(self) -> bool:
        """Return True once the owning controller aborted."""
        return self._event.emitted

    @property
    def reason(self) -> object:
        """Get the abort reason, or None if not aborted."""
        return self._reason

    def subscribe_once(self, handler: Callable[[object], None]) -> Callable[[], None]:
        """Call handler with the abort reason once the signal fires."""
        return self._event.subscribe_once(handler)

    def throw_if_aborted(self) -> None:
        """Raise AbortedError if the signal has fired."""
        if self.aborted:
            raise AbortedError(self._reason)


class AbortController:
    """Owner of an ``AbortSignal``; aborting is idempotent."""

    def __init__(self) -> None:
        event, self._emit = BufferedEvent.create()
        self._signal = AbortSignal(event)

    @property
    def signal(self) -> AbortSignal:
        """Get the signal handed to cooperating code."""
        return self._signal

    def abort(self, reason: object = None) -> None:
        """Fire the signal. Later calls are ignored.

        Args:
            reason: Optional reason made available as ``signal.reason``.
        """
        if self._signal.aborted:
            logger.debug("Abort requested again, ignoring")
            return
        self._signal._reason = reason
        self._emit(reason)


__all__ = ["AbortController", "AbortSignal", "BufferedEvent"]
