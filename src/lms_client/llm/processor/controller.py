"""Prompt preprocessor controller.

A preprocessing stage gets one ``PromptPreprocessController`` per request.
It reads the request context through the controller and reports progress as
status steps, citation blocks and debug blocks. Once the controller ends,
every step still in progress is marked canceled and further updates are
rejected.
"""

from __future__ import annotations

import itertools
import json
import logging
import traceback
import uuid
from collections.abc import Mapping
from typing import Any, Protocol

from ...common.errors import ControllerEndedError
from ...common.events import AbortSignal
from ...shared.processor import (
    OPEN_STATUSES,
    AfterIdLocation,
    CitationBlockCreateUpdate,
    CitationSource,
    DebugInfoBlockCreateUpdate,
    ProcessorInputContext,
    ProcessorInputMessage,
    PromptPreprocessorUpdate,
    StatusCreateUpdate,
    StatusStepState,
    StatusUpdateUpdate,
)

logger = logging.getLogger(__name__)


def stringify_any(message: Any) -> str:
    """Render a debug message argument as text."""
    if isinstance(message, str):
        return message
    if isinstance(message, BaseException):
        return "".join(traceback.format_exception(message)).rstrip()
    if isinstance(message, Mapping | list | tuple):
        try:
            return json.dumps(message, indent=2, default=str)
        except (TypeError, ValueError):
            return repr(message)
    return str(message)


def concatenate_debug_messages(*messages: Any) -> str:
    return " ".join(stringify_any(message) for message in messages)


class PromptCoPreprocessor(Protocol):
    """Host side receiving the updates of a preprocessing stage."""

    def handle_update(self, update: PromptPreprocessorUpdate) -> None:
        """Render or forward one update."""
        ...


class PredictionStepController:
    """Base class for every block created through a controller."""

    def __init__(self, controller: PromptPreprocessController, step_id: str) -> None:
        self._controller = controller
        self._id = step_id

    @property
    def id(self) -> str:
        """Get the block identifier."""
        return self._id

    def _ensure_ended(self) -> None:
        """Bring the block to a final display state. Called by the controller only."""
        raise NotImplementedError


class PromptPreprocessController:
    """Per-request facade handed to a preprocessing stage.

    Example:
        status = ctl.create_status({"status": "loading", "text": "Searching..."})
        sub = status.add_sub_status({"status": "loading", "text": "Reading a.txt"})
        sub.set_state({"status": "done", "text": "Read a.txt"})
        status.set_state({"status": "done", "text": "Found 1 file"})
        ctl.end()
    """

    def __init__(
        self,
        coprocessor: PromptCoPreprocessor,
        context: ProcessorInputContext,
        user_message: ProcessorInputMessage,
        abort_signal: AbortSignal,
    ) -> None:
        """Initialize controller.

        Args:
            coprocessor: Host receiving the updates.
            context: Conversation before the current user message.
            user_message: The message being preprocessed.
            abort_signal: Fires when the request is canceled. The controller
                ends itself when it does.
        """
        self._coprocessor = coprocessor
        self._context = context
        self._user_message = user_message
        self._abort_signal = abort_signal
        self._ended = False
        self._step_controllers: list[PredictionStepController] = []
        self._id_prefix = uuid.uuid4().hex[:12]
        self._id_counter = itertools.count(1)
        abort_signal.subscribe_once(self._handle_abort)

    @property
    def abort_signal(self) -> AbortSignal:
        """Get the request's abort signal for cooperative cancellation."""
        return self._abort_signal

    def get_context(self) -> ProcessorInputContext:
        """Get the previous context. Does not include the current user message."""
        return self._context

    def get_user_message(self) -> ProcessorInputMessage:
        """Get the current user message."""
        return self._user_message

    def has_ended(self) -> bool:
        return self._ended

    def send_update(self, update: PromptPreprocessorUpdate) -> None:
        """Forward an update to the host.

        Raises:
            ControllerEndedError: If the controller has ended.
        """
        if self._ended:
            raise ControllerEndedError()
        self._coprocessor.handle_update(update)

    def end(self) -> None:
        """End the controller.

        Every step still waiting or loading is marked canceled. Calling this
        again has no effect.
        """
        if self._ended:
            return
        for step_controller in self._step_controllers:
            step_controller._ensure_ended()
        self._ended = True
        logger.debug("Preprocess controller ended after %d step(s)", len(self._step_controllers))

    def _handle_abort(self, reason: object) -> None:
        logger.debug("Request aborted (%s), ending preprocess controller", reason)
        self.end()

    def _next_id(self) -> str:
        return f"{self._id_prefix}-{next(self._id_counter)}"

    def _register(self, step_controller: PredictionStepController) -> None:
        self._step_controllers.append(step_controller)

    def create_status(
        self,
        initial_state: StatusStepState | dict[str, Any],
    ) -> PredictionProcessStatusController:
        """Create a top-level status step.

        Args:
            initial_state: Status and text to show first.

        Returns:
            Controller for the new status step.
        """
        state = StatusStepState.model_validate(initial_state)
        step_id = self._next_id()
        self.send_update(StatusCreateUpdate(id=step_id, state=state))
        status_controller = PredictionProcessStatusController(self, state, step_id)
        self._register(status_controller)
        return status_controller

    def create_citation_block(
        self,
        cited_text: str,
        source: CitationSource | dict[str, Any],
    ) -> PredictionProcessCitationBlockController:
        """Create a block citing text from a source."""
        step_id = self._next_id()
        self.send_update(
            CitationBlockCreateUpdate(
                id=step_id,
                cited_text=cited_text,
                source=CitationSource.model_validate(source),
            )
        )
        citation_controller = PredictionProcessCitationBlockController(self, step_id)
        self._register(citation_controller)
        return citation_controller

    def create_debug_info_block(self, debug_info: str) -> PredictionProcessDebugInfoBlockController:
        """Create a block showing debug information."""
        step_id = self._next_id()
        self.send_update(DebugInfoBlockCreateUpdate(id=step_id, debug_info=debug_info))
        debug_controller = PredictionProcessDebugInfoBlockController(self, step_id)
        self._register(debug_controller)
        return debug_controller

    def debug(self, *messages: Any) -> None:
        """Create a debug block from any values, joined by spaces."""
        self.create_debug_info_block(concatenate_debug_messages(*messages))


class PredictionProcessStatusController(PredictionStepController):
    """Controller for one status step and its sub-steps."""

    def __init__(
        self,
        controller: PromptPreprocessController,
        initial_state: StatusStepState,
        step_id: str,
        indentation: int = 0,
        parent: PredictionProcessStatusController | None = None,
    ) -> None:
        super().__init__(controller, step_id)
        self._state = initial_state
        self._indentation = indentation
        self._parent = parent
        self._children: list[PredictionProcessStatusController] = []

    @property
    def state(self) -> StatusStepState:
        """Get the last state sent for this step."""
        return self._state

    @property
    def indentation(self) -> int:
        return self._indentation

    @property
    def parent(self) -> PredictionProcessStatusController | None:
        return self._parent

    @property
    def children(self) -> list[PredictionProcessStatusController]:
        """Get direct sub-steps in creation order."""
        return self._children.copy()

    def _ensure_ended(self) -> None:
        if self._state.status in OPEN_STATUSES:
            self.set_state(StatusStepState(status="canceled", text=self._state.text))

    def set_text(self, text: str) -> None:
        """Change the text, keeping the current status."""
        self._send_state(self._state.model_copy(update={"text": text}))

    def set_state(self, state: StatusStepState | dict[str, Any]) -> None:
        """Replace status and text."""
        self._send_state(StatusStepState.model_validate(state))

    def _send_state(self, state: StatusStepState) -> None:
        # Local state only changes once the host accepted the update.
        self._controller.send_update(StatusUpdateUpdate(id=self._id, state=state))
        self._state = state

    def _last_descendant_id(self) -> str:
        node = self
        while node._children:
            node = node._children[-1]
        return node._id

    def add_sub_status(
        self,
        initial_state: StatusStepState | dict[str, Any],
    ) -> PredictionProcessStatusController:
        """Create a sub-step one indentation level deeper.

        The sub-step is placed after the most recently added descendant of
        this step, so it shows below everything already nested here.
        """
        state = StatusStepState.model_validate(initial_state)
        step_id = self._controller._next_id()
        indentation = self._indentation + 1
        self._controller.send_update(
            StatusCreateUpdate(
                id=step_id,
                state=state,
                location=AfterIdLocation(id=self._last_descendant_id()),
                indentation=indentation,
            )
        )
        sub_status = PredictionProcessStatusController(
            self._controller,
            state,
            step_id,
            indentation,
            parent=self,
        )
        self._children.append(sub_status)
        self._controller._register(sub_status)
        return sub_status


class PredictionProcessCitationBlockController(PredictionStepController):
    """Controller for a citation block. Citations have no progress state."""

    def _ensure_ended(self) -> None:
        pass


class PredictionProcessDebugInfoBlockController(PredictionStepController):
    """Controller for a debug info block. Debug blocks have no progress state."""

    def _ensure_ended(self) -> None:
        pass


__all__ = [
    "PredictionProcessCitationBlockController",
    "PredictionProcessDebugInfoBlockController",
    "PredictionProcessStatusController",
    "PredictionStepController",
    "PromptCoPreprocessor",
    "PromptPreprocessController",
    "concatenate_debug_messages",
    "stringify_any",
]
