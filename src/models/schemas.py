from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MessageId = int | str


class Author(str, Enum):
    """Who wrote a message."""

    USER = "user"
    BOT = "bot"


class Evaluation(str, Enum):
    """Feedback state of a message."""

    NONE = "none"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class ErrorKind(str, Enum):
    """Failure categories surfaced by the client core."""

    AUTHENTICATION = "authentication"
    THREAD_CREATION = "thread_creation"
    STREAM_TRANSPORT = "stream_transport"
    EVALUATION = "evaluation"
    EXAMPLE_QUESTIONS = "example_questions"


class Message(BaseModel):
    """A single entry of the conversation log.

    Attributes:
        id: Client-generated timestamp id, possibly replaced by a server id.
        text: Message content. Grows while a bot answer is streaming.
        author: USER or BOT.
        evaluation: User feedback, only ever set on bot messages.
    """

    id: MessageId
    text: str = ""
    author: Author
    evaluation: Evaluation = Evaluation.NONE


class Failure(BaseModel):
    """Result value returned instead of raising when a request fails.

    Attributes:
        kind: Which operation failed.
        detail: Human-readable reason, used for logs and error messages.
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    detail: str = ""


class AuthResponse(BaseModel):
    """Response of GET /auth."""

    token: str = Field(..., min_length=1)


class ThreadResponse(BaseModel):
    """Response of POST /thread/create."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str = Field(..., min_length=1, alias="threadId")


class ChatRequest(BaseModel):
    """Request payload for POST /chat.

    Attributes:
        question: The user's trimmed question.
        thread_id: Conversation the question belongs to.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1)
    thread_id: str = Field(..., min_length=1, alias="threadId")

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class CompletionMarker(BaseModel):
    """In-band end-of-answer chunk: ``{"done":true,"messageId":<id>}``."""

    model_config = ConfigDict(populate_by_name=True)

    done: Literal[True]
    message_id: MessageId = Field(..., alias="messageId")


class EvaluationRequest(BaseModel):
    """Request payload for POST /evaluation."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str = Field(..., alias="threadId")
    message_id: MessageId = Field(..., alias="messageId")
    evaluation: Literal["positive", "negative"]


class ExampleQuestionsResponse(BaseModel):
    """Response of GET /examples."""

    questions: list[str] = Field(default_factory=list)
