"""In-memory conversation model.

Only the reducer mutates a ChatSession. Background tasks work on immutable
snapshots taken at submission time.
"""

import logging
from uuid import uuid4

from ..core.models import ChatRole, Message

logger = logging.getLogger(__name__)


class ChatSession:
    """Ordered conversation with at most one pending assistant placeholder.

    All messages but the last are append-only. The last message is replaced
    in place while an exchange streams, and frozen once it is finalized.
    """

    def __init__(self, session_id: str | None = None) -> None:
        self._id = session_id or str(uuid4())
        self._messages: list[Message] = []
        self._pending = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def pending(self) -> bool:
        """True while the last message is an unfinalized assistant placeholder."""
        return self._pending

    def __len__(self) -> int:
        return len(self._messages)

    def snapshot(self) -> tuple[Message, ...]:
        """Immutable copy of the conversation for a background task."""
        return tuple(self._messages)

    def append_user(self, text: str) -> None:
        self._messages.append(Message(role=ChatRole.USER, content=text))

    def append_assistant_placeholder(self) -> None:
        self._messages.append(Message(role=ChatRole.ASSISTANT, content=""))
        self._pending = True

    def apply_delta(self, text: str) -> bool:
        """Append a streamed fragment to the pending assistant message.

        Returns False (and changes nothing) if no placeholder is pending.
        """
        if not self._has_placeholder():
            logger.warning("Dropping delta of %d chars: no pending assistant message", len(text))
            return False
        last = self._messages[-1]
        self._messages[-1] = Message(role=last.role, content=last.content + text)
        return True

    def finalize_last(self, text: str) -> bool:
        """Replace the pending assistant message with its final text.

        Returns False (and changes nothing) if no placeholder is pending.
        """
        if not self._has_placeholder():
            logger.warning("Ignoring finalize: no pending assistant message")
            return False
        self._messages[-1] = Message(role=ChatRole.ASSISTANT, content=text)
        self._pending = False
        return True

    def _has_placeholder(self) -> bool:
        return (
            self._pending
            and bool(self._messages)
            and self._messages[-1].role is ChatRole.ASSISTANT
        )
