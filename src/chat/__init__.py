"""Chat core: threads, streamed answers, conversation log and feedback.

Responsibilities:
    - Lazy thread creation per conversation
    - Streaming answer assembly with in-band completion markers
    - Ordered conversation state with guarded in-place updates
    - Optimistic thumbs up/down feedback
    - Example questions for an empty chat

Contains no rendering. The UI reads ChatClient state and calls its
operations.
"""

from src.chat.client import ChatClient
from src.chat.conversation import ConversationError, ConversationState
from src.chat.evaluation import EvaluationReporter
from src.chat.examples import ExampleQuestions
from src.chat.ids import MessageIdGenerator
from src.chat.notifications import NotificationKind, Notifier, log_notifier
from src.chat.stream import StreamReader, StreamTransportError, split_completion_marker
from src.chat.threads import ThreadManager

__all__ = [
    "ChatClient",
    "ConversationError",
    "ConversationState",
    "EvaluationReporter",
    "ExampleQuestions",
    "MessageIdGenerator",
    "NotificationKind",
    "Notifier",
    "StreamReader",
    "StreamTransportError",
    "ThreadManager",
    "log_notifier",
    "split_completion_marker",
]
