"""Pydantic models for the chat client and its service contract.

Provides type safety and validation for everything crossing the wire,
plus the in-memory message type rendered by the UI.

Models:
    - Message: Individual entry of the conversation log
    - Author / Evaluation: Message enums
    - Failure / ErrorKind: Result values for failed requests
    - AuthResponse, ThreadResponse: Session and thread payloads
    - ChatRequest, CompletionMarker: Streaming chat payloads
    - EvaluationRequest: Thumbs up/down feedback payload
    - ExampleQuestionsResponse: Suggested prompts payload
"""

from src.models.schemas import (
    AuthResponse,
    Author,
    ChatRequest,
    CompletionMarker,
    ErrorKind,
    Evaluation,
    EvaluationRequest,
    ExampleQuestionsResponse,
    Failure,
    Message,
    MessageId,
    ThreadResponse,
)

__all__ = [
    "AuthResponse",
    "Author",
    "ChatRequest",
    "CompletionMarker",
    "ErrorKind",
    "Evaluation",
    "EvaluationRequest",
    "ExampleQuestionsResponse",
    "Failure",
    "Message",
    "MessageId",
    "ThreadResponse",
]
