"""Routes of the development chat service.

Implements the contract the client consumes: token issue and check, thread
creation, streamed answers terminated by an in-band completion marker,
feedback and example questions. All state is in memory.
"""

import asyncio
import json
import logging
import secrets
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from src.models.schemas import (
    AuthResponse,
    ChatRequest,
    EvaluationRequest,
    ExampleQuestionsResponse,
    ThreadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

DEFAULT_EXAMPLE_QUESTIONS = [
    "What can you help me with?",
    "Summarise our conversation so far.",
    "Explain streaming responses in one paragraph.",
    "Give me three tips for writing good questions.",
    "How do I give feedback on an answer?",
    "What happens when I start a new chat?",
]


@dataclass
class BackendState:
    """In-memory store of the development service."""

    tokens: set[str] = field(default_factory=set)
    threads: dict[str, str] = field(default_factory=dict)
    evaluations: list[EvaluationRequest] = field(default_factory=list)
    example_questions: list[str] = field(default_factory=lambda: list(DEFAULT_EXAMPLE_QUESTIONS))
    chunk_delay: float = 0.0
    next_message_id: int = 1

    def issue_message_id(self) -> int:
        message_id = self.next_message_id
        self.next_message_id += 1
        return message_id


def get_state(request: Request) -> BackendState:
    return request.app.state.backend


def require_token(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Extract and check the bearer token of a request.

    Raises:
        HTTPException: 401 if the header is missing or the token unknown.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or token not in get_state(request).tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing bearer token",
        )
    return token


State = Annotated[BackendState, Depends(get_state)]
Token = Annotated[str, Depends(require_token)]


def compose_answer(question: str) -> list[str]:
    """Split the echo answer into word chunks."""
    words = f"You asked: {question}".split(" ")
    return [word if i == 0 else f" {word}" for i, word in enumerate(words)]


@router.get("/auth", response_model=AuthResponse)
async def authenticate(state: State) -> AuthResponse:
    token = secrets.token_urlsafe(24)
    state.tokens.add(token)
    logger.info("Issued session token")
    return AuthResponse(token=token)


@router.get("/auth/check")
async def check_token(token: Token) -> dict[str, bool]:
    return {"valid": True}


@router.post("/thread/create", response_model=ThreadResponse, response_model_by_alias=True)
async def create_thread(state: State, token: Token) -> ThreadResponse:
    thread_id = f"thread-{secrets.token_hex(8)}"
    state.threads[thread_id] = token
    logger.info(f"Created thread {thread_id}")
    return ThreadResponse(thread_id=thread_id)


@router.post("/chat")
async def chat(payload: ChatRequest, state: State, token: Token) -> StreamingResponse:
    """Stream an answer as raw text chunks followed by the completion marker.

    Raises:
        404: Thread unknown or owned by another session.
    """
    if state.threads.get(payload.thread_id) != token:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Thread not found",
        )

    async def generate() -> AsyncGenerator[str]:
        for chunk in compose_answer(payload.question):
            yield chunk
            if state.chunk_delay:
                await asyncio.sleep(state.chunk_delay)
        marker = {"done": True, "messageId": state.issue_message_id()}
        yield json.dumps(marker, separators=(",", ":"))

    return StreamingResponse(generate(), media_type="text/plain; charset=utf-8")


@router.post("/evaluation", status_code=status.HTTP_204_NO_CONTENT)
async def evaluation(payload: EvaluationRequest, state: State, token: Token) -> None:
    if state.threads.get(payload.thread_id) != token:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Thread not found",
        )
    state.evaluations.append(payload)
    logger.info(f"Recorded {payload.evaluation} evaluation for message {payload.message_id}")


@router.get("/examples", response_model=ExampleQuestionsResponse)
async def example_questions(state: State, token: Token) -> ExampleQuestionsResponse:
    return ExampleQuestionsResponse(questions=state.example_questions)


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy", "service": "chat-service-dev"}
