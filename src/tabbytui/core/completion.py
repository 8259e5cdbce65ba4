"""One streaming chat-completion exchange.

The task never touches UI state. It reports progress exclusively through
Actions on the bus, each tagged with the generation of the submission that
started it, and it always ends with exactly one FinalizeAssistant.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .config import Route
from .errors import ApiError, TransportInterruptedError
from .models import ChatCompletionRequest, Message
from .provider import HttpProvider

if TYPE_CHECKING:
    from ..state.bus import ActionBus

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "
INTERRUPTED_SUFFIX = "\n\n[stream interrupted: {reason}]"


def build_request(session_id: str, messages: Sequence[Message]) -> ChatCompletionRequest:
    """Build the wire request, leaving out messages with empty content.

    Empty messages (such as the assistant placeholder of the pending
    exchange) are shown locally but never sent to the server.
    """
    return ChatCompletionRequest(
        id=session_id,
        messages=[msg for msg in messages if msg.content],
    )


def describe_failure(error: ApiError, partial: str) -> str:
    """Text that replaces the assistant message when the exchange fails.

    Partial output already shown is kept and the error is appended to it.
    """
    if isinstance(error, TransportInterruptedError):
        partial = error.partial or partial
    if partial:
        return partial + INTERRUPTED_SUFFIX.format(reason=error.describe())
    return ERROR_PREFIX + error.describe()


class StreamCompletionTask:
    """Drives one POST /chat/completions stream and emits Actions for it."""

    def __init__(
        self,
        provider: HttpProvider,
        bus: "ActionBus",
        generation: int,
        session_id: str,
        messages: Sequence[Message],
    ) -> None:
        """Initialize the task.

        Args:
            provider: Provider bound to the chat completions endpoint
            bus: Where StreamDelta / FinalizeAssistant actions are sent
            generation: Submission counter value this task belongs to
            session_id: Opaque session token sent as the request id
            messages: Snapshot of the session at submission time
        """
        self._provider = provider
        self._bus = bus
        self._generation = generation
        self._request = build_request(session_id, messages)
        self._delivered: list[str] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def request(self) -> ChatCompletionRequest:
        return self._request

    def _on_chunk(self, content: str) -> None:
        from ..state.actions import StreamDelta

        self._delivered.append(content)
        self._bus.send(StreamDelta(self._generation, content))

    async def run(self) -> None:
        """Run the exchange to completion. Never raises ApiError."""
        from ..state.actions import FinalizeAssistant

        logger.info(
            "Generation %d: sending %d message(s)",
            self._generation,
            len(self._request.messages),
        )
        try:
            text = await self._provider.post_stream(
                Route.CHAT_COMPLETIONS, self._request.to_wire(), self._on_chunk
            )
        except ApiError as e:
            logger.warning("Generation %d failed: %s", self._generation, e.describe())
            text = describe_failure(e, "".join(self._delivered))
            self._bus.send(FinalizeAssistant(self._generation, text, failed=True))
            return

        logger.info("Generation %d complete (%d chars)", self._generation, len(text))
        self._bus.send(FinalizeAssistant(self._generation, text))
