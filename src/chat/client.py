"""Chat client facade used by the UI.

Wires the session, thread, stream, evaluation and example-question
components around one shared ``httpx.AsyncClient`` and one
ConversationState, and owns the "responding" flag that keeps at most one
answer streaming at a time.

Design:

1. **One HTTP client per chat client** - All components share the same
   AsyncClient. Base URL, timeout and transport are set in one place (tests
   pass a MockTransport or ASGITransport).

2. **Result values** - Session and thread setup return ``Failure`` values.
   Send and evaluate turn every request failure into a bot message or a
   notification.

3. **Responding flag** - ``send`` checks and sets the flag before its first
   await and clears it in ``finally``. Clicks handled while an answer streams
   see the flag and are refused.

There is no timeout by default: a stream that never ends keeps the flag set
until the page is reloaded.
"""

import logging
import random

import httpx

from src.chat import messages
from src.chat.conversation import ConversationState
from src.chat.evaluation import EvaluationReporter
from src.chat.examples import ExampleQuestions
from src.chat.ids import MessageIdGenerator
from src.chat.notifications import NotificationKind, Notifier, log_notifier
from src.chat.stream import StreamReader
from src.chat.threads import ThreadManager
from src.models.schemas import Evaluation, Failure, Message, MessageId
from src.session.config import ClientConfig, get_client_config
from src.session.manager import SessionManager
from src.session.storage import MappingStorage, Storage

logger = logging.getLogger(__name__)


class ChatClient:
    """One chat as seen by one user."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        storage: Storage | None = None,
        notifier: Notifier = log_notifier,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the chat client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            storage: Durable storage for the session token and cached
                     example questions. In-memory if not provided.
            notifier: Receives transient success/error notifications.
            transport: Optional httpx transport, mainly for tests.
            rng: Random source for example question sampling.
        """
        self._config = config or get_client_config()
        self._storage = storage or MappingStorage()
        self._notify = notifier
        self._http = httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=httpx.Timeout(self._config.request_timeout),
            transport=transport,
        )

        self.conversation = ConversationState()
        self.session = SessionManager(self._http, self._storage)
        self.threads = ThreadManager(self._http)
        self.stream = StreamReader(self._http, self.conversation, MessageIdGenerator())
        self.evaluations = EvaluationReporter(
            self._http,
            self.conversation,
            notifier=notifier,
            rollback_on_failure=self._config.rollback_evaluation_on_failure,
            notification_seconds=self._config.notification_seconds,
        )
        self.examples = ExampleQuestions(self._http, self._storage, rng)

        self.is_responding = False
        self.show_example_cards = True
        self.error_message: str | None = None

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> str | None:
        return self.session.context.token

    @property
    def is_ready(self) -> bool:
        """Whether a session exists, i.e. sends and evaluations are allowed."""
        return self.session.context.is_ready

    @property
    def messages(self) -> list[Message]:
        return self.conversation.messages

    async def start(self) -> bool:
        """Establish the session. Called once when the page loads.

        Returns:
            True when a usable token is available.
        """
        result = await self.session.ensure_session()
        if isinstance(result, Failure):
            self.error_message = messages.ERROR_AUTHENTICATION
            return False
        self.error_message = None
        return True

    def accepts(self, text: str) -> bool:
        """Whether ``send`` would act on this input right now."""
        question = text.strip()
        return (
            bool(question)
            and len(question) <= self._config.max_question_length
            and not self.is_responding
            and self.is_ready
        )

    async def send(self, text: str) -> bool:
        """Submit a question and stream the answer into the conversation.

        Refused while another answer is streaming, without a session, or for
        empty or over-long input.

        Args:
            text: Raw input of the user.

        Returns:
            True if the question was submitted.
        """
        if not self.accepts(text):
            logger.debug("Send refused")
            return False

        token = self.token
        question = text.strip()
        self.is_responding = True
        self.show_example_cards = False
        try:
            self.stream.add_user_message(question)
            thread_id = await self.threads.ensure_thread(token)
            if isinstance(thread_id, Failure):
                self.error_message = messages.ERROR_CREATE_THREAD
                self.stream.add_error_message(messages.ERROR_CREATE_THREAD)
                return True
            await self.stream.stream_answer(question, thread_id, token)
            return True
        finally:
            self.is_responding = False

    def can_evaluate(self, message_id: MessageId) -> bool:
        """Whether feedback controls should be offered for a message."""
        return not self.is_responding and self.evaluations.can_evaluate(message_id)

    async def evaluate(self, message_id: MessageId, verdict: Evaluation) -> bool:
        """Rate a bot answer. Each answer can be rated once.

        Returns:
            True if the feedback reached the service.
        """
        if self.is_responding:
            return False
        return await self.evaluations.evaluate(
            message_id,
            verdict,
            self.threads.thread_id,
            self.token,
        )

    async def load_example_questions(self) -> list[str]:
        """Return a random selection of example questions.

        Returns:
            The selection, or an empty list when no session exists or loading
            failed.
        """
        token = self.token
        if token is None:
            return []
        result = await self.examples.sample(token, self._config.example_question_count)
        if isinstance(result, Failure):
            self.error_message = messages.ERROR_FETCH_EXAMPLE_QUESTIONS
            self._notify(
                messages.ERROR_FETCH_EXAMPLE_QUESTIONS,
                NotificationKind.WARNING,
                self._config.notification_seconds,
            )
            return []
        return result

    def new_chat(self) -> bool:
        """Start over with an empty conversation and a new thread."""
        if self.is_responding:
            return False
        self.conversation.clear()
        self.threads.reset()
        self.show_example_cards = True
        return True

    def logout(self) -> bool:
        """Drop the session, the thread and the conversation.

        Refused while an answer is streaming into the conversation.
        """
        if self.is_responding:
            return False
        self.session.logout()
        self.threads.reset()
        self.conversation.clear()
        self.show_example_cards = True
        return True

    async def aclose(self) -> None:
        await self._http.aclose()
