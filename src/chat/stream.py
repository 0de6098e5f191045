"""Streamed answer assembly.

Consumes the incrementally delivered body of ``POST /chat`` and reconciles it
into one bot message of the conversation:

1. The question is appended as a user message.
2. An empty bot placeholder with its own id is appended.
3. Every decoded text chunk is added to an accumulator and the placeholder's
   text is overwritten with the whole accumulated value.
4. A fragment starting with ``{"done":true,`` is the completion marker. It
   carries the server id of the answer, which replaces the placeholder id. It
   adds no text. Transports that coalesce writes can deliver it glued to the
   last piece of text, so it is looked for anywhere in a chunk.
5. Any transport or status failure appends a separate bot message with the
   error. Partial text already in the placeholder is kept.

Each chunk is awaited and applied before the next one is read.
"""

import json
import logging
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from src.chat import messages
from src.chat.conversation import ConversationError, ConversationState
from src.chat.ids import MessageIdGenerator
from src.models.schemas import (
    Author,
    ChatRequest,
    CompletionMarker,
    Message,
    MessageId,
)
from src.session.manager import bearer_headers

logger = logging.getLogger(__name__)

CHAT_PATH = "/chat"
COMPLETION_PREFIX = '{"done":true,'

_json_decoder = json.JSONDecoder()


class StreamTransportError(Exception):
    """Raised when the answer stream cannot be read to the end."""


def split_completion_marker(chunk: str) -> tuple[str, CompletionMarker | None, str]:
    """Split a decoded chunk around the first completion marker in it.

    Args:
        chunk: One decoded chunk of the answer body.

    Returns:
        Text before the marker, the marker (None if the chunk has none) and
        whatever follows the marker.

    Raises:
        StreamTransportError: If the marker prefix is present but the
            fragment is not a valid marker.
    """
    start = chunk.find(COMPLETION_PREFIX)
    if start == -1:
        return chunk, None, ""
    try:
        data, end = _json_decoder.raw_decode(chunk, start)
        marker = CompletionMarker.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise StreamTransportError(f"Malformed completion marker: {e}") from e
    return chunk[:start], marker, chunk[end:]


class StreamReader:
    """Sends questions and streams answers into a ConversationState."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        conversation: ConversationState,
        next_id: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the stream reader.

        Args:
            http: Shared client with the service base URL configured.
            conversation: Log the messages are written to.
            next_id: Source of fresh client message ids.
        """
        self._http = http
        self._conversation = conversation
        self._next_id = next_id or MessageIdGenerator()

    def add_user_message(self, question: str) -> Message:
        return self._conversation.append(
            Message(id=self._next_id(), text=question, author=Author.USER)
        )

    def add_bot_message(self, text: str) -> Message:
        return self._conversation.append(
            Message(id=self._next_id(), text=text, author=Author.BOT)
        )

    def add_error_message(self, detail: str) -> Message:
        return self.add_bot_message(messages.error_text(detail))

    async def send_and_stream(self, question: str, thread_id: str, token: str) -> None:
        """Post a question and stream the answer into the conversation.

        Args:
            question: The user's question.
            thread_id: Thread the question belongs to.
            token: Bearer token of the current session.
        """
        self.add_user_message(question)
        await self.stream_answer(question, thread_id, token)

    async def stream_answer(self, question: str, thread_id: str, token: str) -> None:
        """Append the bot placeholder and fill it from the answer stream.

        Failures never propagate; they end up as an extra bot message. If the
        placeholder is removed mid-stream the rest of the answer is dropped.
        """
        placeholder = self._conversation.append(
            Message(id=self._next_id(), text="", author=Author.BOT)
        )
        try:
            await self._read_stream(placeholder.id, question, thread_id, token)
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat request failed with HTTP {e.response.status_code}")
            self.add_error_message(messages.ERROR_FETCH_BOT_RESPONSE)
        except httpx.HTTPError as e:
            logger.error(f"Chat stream interrupted: {e}")
            self.add_error_message(f"Connection failed: {e}")
        except StreamTransportError as e:
            logger.error(f"Chat stream unreadable: {e}")
            self.add_error_message(str(e))
        except ConversationError as e:
            logger.warning(f"Answer abandoned, conversation changed while streaming: {e}")

    async def _read_stream(
        self,
        bot_id: MessageId,
        question: str,
        thread_id: str,
        token: str,
    ) -> None:
        payload = ChatRequest(question=question, thread_id=thread_id)
        headers = bearer_headers(token) | {"Accept": "text/event-stream"}
        accumulated = ""
        id_assigned = False

        async with self._http.stream(
            "POST",
            CHAT_PATH,
            json=payload.model_dump(by_alias=True),
            headers=headers,
        ) as response:
            response.raise_for_status()
            async for chunk in response.aiter_text():
                pending = chunk
                while pending:
                    text, marker, pending = split_completion_marker(pending)
                    if text:
                        accumulated += text
                        self._conversation.update_by_id(bot_id, text=accumulated)
                    if marker is None:
                        continue
                    if id_assigned:
                        logger.warning("Ignoring repeated completion marker")
                        continue
                    bot_id = self._assign_server_id(bot_id, marker.message_id)
                    id_assigned = True

        logger.debug(f"Answer {bot_id} complete ({len(accumulated)} chars)")

    def _assign_server_id(self, bot_id: MessageId, server_id: MessageId) -> MessageId:
        try:
            self._conversation.update_by_id(bot_id, new_id=server_id)
        except ConversationError as e:
            logger.warning(f"Keeping client id {bot_id}: {e}")
            return bot_id
        return server_id
