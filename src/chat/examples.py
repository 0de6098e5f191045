"""Suggested example questions shown on an empty chat."""

import logging
import random

import httpx
from pydantic import ValidationError

from src.models.schemas import ErrorKind, ExampleQuestionsResponse, Failure
from src.session.manager import bearer_headers
from src.session.storage import EXAMPLE_QUESTIONS_KEY, Storage

logger = logging.getLogger(__name__)

EXAMPLES_PATH = "/examples"


class ExampleQuestions:
    """Loads example questions once and caches them in durable storage."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        storage: Storage,
        rng: random.Random | None = None,
    ) -> None:
        self._http = http
        self._storage = storage
        self._rng = rng or random.Random()

    def _cached(self) -> list[str] | None:
        cached = self._storage.get_json(EXAMPLE_QUESTIONS_KEY)
        if isinstance(cached, list) and all(isinstance(q, str) for q in cached):
            return cached
        return None

    async def fetch(self, token: str) -> list[str] | Failure:
        """Return all example questions, from the cache when possible."""
        cached = self._cached()
        if cached is not None:
            return cached

        try:
            response = await self._http.get(EXAMPLES_PATH, headers=bearer_headers(token))
            response.raise_for_status()
            questions = ExampleQuestionsResponse.model_validate(response.json()).questions
        except httpx.HTTPError as e:
            logger.warning(f"Fetching example questions failed: {e}")
            return Failure(kind=ErrorKind.EXAMPLE_QUESTIONS, detail=str(e))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Example questions response unusable: {e}")
            return Failure(kind=ErrorKind.EXAMPLE_QUESTIONS, detail="Malformed examples response")

        self._storage.set_json(EXAMPLE_QUESTIONS_KEY, questions)
        return questions

    async def sample(self, token: str, count: int) -> list[str] | Failure:
        """Return up to ``count`` randomly chosen example questions."""
        result = await self.fetch(token)
        if isinstance(result, Failure):
            return result
        return self._rng.sample(result, min(count, len(result)))
