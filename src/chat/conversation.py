"""Ordered conversation log shared by the stream reader, the evaluation
reporter and the UI.

Only two mutations exist: ``append`` and ``update_by_id``. Insertion order is
display order; nothing is ever reordered, merged or removed, except by
``clear`` when the user starts a new chat.
"""

import logging
from collections.abc import Callable, Iterator

from src.models.schemas import Author, Evaluation, Message, MessageId

logger = logging.getLogger(__name__)


class ConversationError(ValueError):
    """Raised when a mutation would break a conversation invariant."""


class ConversationState:
    """Append-only list of messages with in-place updates by id."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._listeners: list[Callable[[], None]] = []

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every mutation."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener()

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the log in insertion order."""
        return [m.model_copy() for m in self._messages]

    def get(self, message_id: MessageId) -> Message | None:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    def append(self, message: Message) -> Message:
        """Add a message to the end of the log.

        Raises:
            ConversationError: If the id is already used.
        """
        if self.get(message.id) is not None:
            raise ConversationError(f"Duplicate message id: {message.id}")
        self._messages.append(message)
        self._changed()
        return message

    def update_by_id(
        self,
        message_id: MessageId,
        *,
        text: str | None = None,
        new_id: MessageId | None = None,
        evaluation: Evaluation | None = None,
    ) -> Message:
        """Apply a partial update to one message.

        Args:
            message_id: Current id of the message.
            text: Replacement text (bot messages only).
            new_id: Server-assigned id replacing the client id.
            evaluation: Positive or negative verdict (bot messages only,
                once).

        Returns:
            The updated message.

        Raises:
            ConversationError: If the message is missing or the update is not
                allowed for it.
        """
        index = self._index_of(message_id)
        message = self._messages[index]

        if message.author is Author.USER:
            raise ConversationError(f"User message {message_id} is immutable")

        changes: dict[str, object] = {}
        if text is not None:
            changes["text"] = text
        if new_id is not None and new_id != message.id:
            if self.get(new_id) is not None:
                raise ConversationError(f"Duplicate message id: {new_id}")
            changes["id"] = new_id
        if evaluation is not None:
            if evaluation is Evaluation.NONE:
                raise ConversationError("Evaluation cannot be reset to none")
            if message.evaluation is not Evaluation.NONE:
                raise ConversationError(f"Message {message_id} is already evaluated")
            changes["evaluation"] = evaluation

        updated = message.model_copy(update=changes)
        self._messages[index] = updated
        self._changed()
        return updated

    def reset_evaluation(self, message_id: MessageId) -> Message:
        """Return a message's evaluation to none.

        Only used when feedback rollback on failure is configured.
        """
        index = self._index_of(message_id)
        updated = self._messages[index].model_copy(update={"evaluation": Evaluation.NONE})
        self._messages[index] = updated
        self._changed()
        return updated

    def clear(self) -> None:
        self._messages.clear()
        self._changed()

    def _index_of(self, message_id: MessageId) -> int:
        for index, message in enumerate(self._messages):
            if message.id == message_id:
                return index
        raise ConversationError(f"Unknown message id: {message_id}")
