"""Conversation thread creation."""

import logging

import httpx
from pydantic import ValidationError

from src.models.schemas import ErrorKind, Failure, ThreadResponse
from src.session.manager import bearer_headers

logger = logging.getLogger(__name__)

THREAD_PATH = "/thread/create"


class ThreadManager:
    """Lazily creates and caches the thread id of one conversation.

    There is no retry: after a failure the next user action triggers the
    next attempt.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http
        self.thread_id: str | None = None

    async def ensure_thread(self, token: str) -> str | Failure:
        """Return the cached thread id or create one.

        Args:
            token: Bearer token of the current session.

        Returns:
            The thread id, or a thread-creation Failure.
        """
        if self.thread_id is not None:
            return self.thread_id

        try:
            response = await self._http.post(THREAD_PATH, headers=bearer_headers(token))
            response.raise_for_status()
            thread_id = ThreadResponse.model_validate(response.json()).thread_id
        except httpx.HTTPStatusError as e:
            logger.error(f"Thread creation failed with HTTP {e.response.status_code}")
            return Failure(
                kind=ErrorKind.THREAD_CREATION,
                detail=f"HTTP {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            logger.error(f"Thread creation request failed: {e}")
            return Failure(kind=ErrorKind.THREAD_CREATION, detail=f"Connection failed: {e}")
        except (ValueError, ValidationError) as e:
            logger.error(f"Thread creation returned an unusable body: {e}")
            return Failure(kind=ErrorKind.THREAD_CREATION, detail="Malformed thread response")

        self.thread_id = thread_id
        logger.info(f"Created thread {thread_id}")
        return thread_id

    def reset(self) -> None:
        """Forget the thread so the next send starts a new one."""
        self.thread_id = None
