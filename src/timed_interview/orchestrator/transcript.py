"""
Append-only interview transcript.
"""

import logging
from collections.abc import Callable, Iterator

from timed_interview.orchestrator.schemas import Message, MessageRole

logger = logging.getLogger(__name__)

MessageListener = Callable[[Message], None]


class MessageLog:
    """
    Time-ordered record of system and candidate messages.

    Messages are only ever appended; listeners are notified after each
    append so a front-end can render the transcript as it grows. A
    listener that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._listeners: list[MessageListener] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    @property
    def messages(self) -> list[Message]:
        """Get a copy of all messages."""
        return self._messages.copy()

    def subscribe(self, listener: MessageListener) -> None:
        """Register a callback invoked with every new message."""
        self._listeners.append(listener)

    def append(self, role: MessageRole, content: str) -> Message:
        """
        Append a message.

        Args:
            role: Author of the message.
            content: Message text.

        Returns:
            The created Message.
        """
        message = Message(role=role, content=content, sequence_number=len(self._messages))
        self._messages.append(message)
        for listener in self._listeners:
            try:
                listener(message)
            except Exception:
                logger.exception(f"Transcript listener failed on message {message.sequence_number}")
        return message

    def system(self, content: str) -> Message:
        return self.append(MessageRole.SYSTEM, content)

    def candidate(self, content: str) -> Message:
        return self.append(MessageRole.CANDIDATE, content)
