"""Thumbs up/down feedback for bot answers."""

import logging

import httpx

from src.chat import messages
from src.chat.conversation import ConversationState
from src.chat.notifications import NotificationKind, Notifier, log_notifier
from src.models.schemas import Author, Evaluation, EvaluationRequest, MessageId
from src.session.manager import bearer_headers

logger = logging.getLogger(__name__)

EVALUATION_PATH = "/evaluation"


class EvaluationReporter:
    """Posts feedback for one message and updates it optimistically.

    The message's evaluation is set before the request is sent. When the
    request fails the change stays in place unless ``rollback_on_failure``
    is enabled.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        conversation: ConversationState,
        notifier: Notifier = log_notifier,
        rollback_on_failure: bool = False,
        notification_seconds: float = 5.0,
    ) -> None:
        self._http = http
        self._conversation = conversation
        self._notify = notifier
        self._rollback_on_failure = rollback_on_failure
        self._notification_seconds = notification_seconds

    def can_evaluate(self, message_id: MessageId) -> bool:
        """Whether a message is a bot message without feedback yet."""
        message = self._conversation.get(message_id)
        return (
            message is not None
            and message.author is Author.BOT
            and message.evaluation is Evaluation.NONE
        )

    async def evaluate(
        self,
        message_id: MessageId,
        verdict: Evaluation,
        thread_id: str | None,
        token: str | None,
    ) -> bool:
        """Record and send a verdict for a message.

        Args:
            message_id: Id of the bot message being rated.
            verdict: POSITIVE or NEGATIVE.
            thread_id: Current thread, the call is a no-op without one.
            token: Current session token, the call is a no-op without one.

        Returns:
            True if the service accepted the feedback. False if the call was
            refused or the request failed.
        """
        if not thread_id or not token:
            return False
        if verdict is Evaluation.NONE:
            raise ValueError("Verdict must be positive or negative")
        if not self.can_evaluate(message_id):
            logger.info(f"Refusing evaluation of message {message_id}")
            return False

        self._conversation.update_by_id(message_id, evaluation=verdict)

        payload = EvaluationRequest(
            thread_id=thread_id,
            message_id=message_id,
            evaluation=verdict.value,
        )
        try:
            response = await self._http.post(
                EVALUATION_PATH,
                json=payload.model_dump(by_alias=True),
                headers=bearer_headers(token),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Evaluation of message {message_id} failed: {e}")
            if self._rollback_on_failure and self._conversation.get(message_id) is not None:
                self._conversation.reset_evaluation(message_id)
            self._notify(messages.EVALUATION_ERROR, NotificationKind.ERROR, self._notification_seconds)
            return False

        self._notify(messages.EVALUATION_THANKS, NotificationKind.SUCCESS, self._notification_seconds)
        return True
