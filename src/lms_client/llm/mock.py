"""Mock LLM port for testing.

Provides an in-process port whose channels are driven by the test: messages
and errors are delivered explicitly, and everything the client sends is
recorded.
"""

from collections.abc import Callable
from typing import Any

from ..common.events import BufferedEvent
from .port import ChannelMessageHandler


class MockChannel:
    """Channel whose backend side is controlled by the test."""

    def __init__(
        self,
        endpoint: str,
        creation_parameter: dict[str, Any],
        on_message: ChannelMessageHandler,
    ) -> None:
        """Initialize mock channel.

        Args:
            endpoint: Operation name the channel was opened for.
            creation_parameter: Initial payload given by the client.
            on_message: Client handler for inbound messages.
        """
        self.endpoint = endpoint
        self.creation_parameter = creation_parameter
        self._on_message = on_message
        self._on_error, self._emit_error = BufferedEvent.create()
        self._sent: list[dict[str, Any]] = []

    @property
    def on_error(self) -> BufferedEvent[Exception]:
        return self._on_error

    @property
    def sent(self) -> list[dict[str, Any]]:
        """Get messages the client sent, in order."""
        return self._sent.copy()

    def send(self, message: dict[str, Any]) -> None:
        self._sent.append(message)

    def deliver(self, message: dict[str, Any]) -> None:
        """Deliver a message from the backend to the client."""
        self._on_message(message)

    def deliver_fragment(self, fragment: str) -> None:
        self.deliver({"type": "fragment", "fragment": fragment})

    def deliver_success(
        self,
        stats: dict[str, Any] | None = None,
        model_info: dict[str, Any] | None = None,
    ) -> None:
        self.deliver(
            {
                "type": "success",
                "stats": stats or {},
                "modelInfo": model_info or {"identifier": "mock-model", "path": "mock/model"},
            }
        )

    def fail(self, error: Exception) -> None:
        """Fail the channel with the given error."""
        self._emit_error(error)


class MockLLMPort:
    """Mock LLM port for testing.

    Records every channel opened and answers RPC calls from a table of
    preset results (values or callables receiving the parameter).
    """

    def __init__(self) -> None:
        """Initialize mock port."""
        self._channels: list[MockChannel] = []
        self._rpc_results: dict[str, Any] = {}
        self._rpc_calls: list[tuple[str, dict[str, Any]]] = []
        self._auto_respond: Callable[[MockChannel], None] | None = None

    def set_rpc_result(self, endpoint: str, result: Any) -> None:
        """Set the result returned for an RPC endpoint.

        Args:
            endpoint: RPC endpoint name
            result: Value to return, callable receiving the parameter, or an
                exception instance to raise
        """
        self._rpc_results[endpoint] = result

    def set_auto_respond(self, responder: Callable[[MockChannel], None] | None) -> None:
        """Run responder on every channel right after it is opened."""
        self._auto_respond = responder

    def create_channel(
        self,
        endpoint: str,
        creation_parameter: dict[str, Any],
        on_message: ChannelMessageHandler,
    ) -> MockChannel:
        channel = MockChannel(endpoint, creation_parameter, on_message)
        self._channels.append(channel)
        if self._auto_respond is not None:
            self._auto_respond(channel)
        return channel

    async def call_rpc(self, endpoint: str, parameter: dict[str, Any]) -> Any:
        self._rpc_calls.append((endpoint, parameter))
        if endpoint not in self._rpc_results:
            raise KeyError(f"No mock result for RPC endpoint: {endpoint}")
        result = self._rpc_results[endpoint]
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(parameter)
        return result

    @property
    def channels(self) -> list[MockChannel]:
        """Get channels opened so far."""
        return self._channels.copy()

    @property
    def last_channel(self) -> MockChannel:
        """Get the most recently opened channel."""
        return self._channels[-1]

    @property
    def rpc_calls(self) -> list[tuple[str, dict[str, Any]]]:
        """Get RPC calls made so far."""
        return self._rpc_calls.copy()


__all__ = ["MockChannel", "MockLLMPort"]
