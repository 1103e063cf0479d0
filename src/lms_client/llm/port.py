"""Transport contracts consumed by the LLM client.

The wire transport is supplied by the caller. The client only needs channels
for long-running operations and one-shot RPC calls.
"""

from collections.abc import Callable
from typing import Any, Protocol

from ..common.events import BufferedEvent

ChannelMessageHandler = Callable[[dict[str, Any]], None]


class Channel(Protocol):
    """Scoped, bidirectional message stream for one operation.

    Messages are delivered to the handler given at creation, in the order the
    backend sent them, on the event loop thread.
    """

    @property
    def on_error(self) -> BufferedEvent[Exception]:
        """Event fired once if the channel fails."""
        ...

    def send(self, message: dict[str, Any]) -> None:
        """Send a message to the backend side of the channel."""
        ...


class LLMPort(Protocol):
    """Connection to the LLM backend."""

    def create_channel(
        self,
        endpoint: str,
        creation_parameter: dict[str, Any],
        on_message: ChannelMessageHandler,
    ) -> Channel:
        """Open a new channel for a long-running operation.

        Args:
            endpoint: Operation name (e.g. "predict").
            creation_parameter: Initial payload for the operation.
            on_message: Handler for inbound messages.

        Returns:
            The opened channel.
        """
        ...

    async def call_rpc(self, endpoint: str, parameter: dict[str, Any]) -> Any:
        """Call a non-streaming endpoint and return its result."""
        ...


__all__ = ["Channel", "ChannelMessageHandler", "LLMPort"]
