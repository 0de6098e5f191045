"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: Client configuration pointing at a test base URL
    - storage: Empty in-memory durable storage
    - service: Scriptable fake chat service for httpx.MockTransport
    - http: AsyncClient wired to the fake service
    - backend_app: Fresh development service app
    - async_client: HTTPX client for the development service
"""

import json
from collections.abc import AsyncGenerator, AsyncIterator, Awaitable, Callable, Iterable

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.session.config import ClientConfig
from src.session.storage import MappingStorage

BASE_URL = "http://test"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


def stream_response(
    chunks: Iterable[str],
    status_code: int = 200,
    error: Exception | None = None,
) -> httpx.Response:
    """Build a response whose body arrives chunk by chunk.

    Args:
        chunks: Text chunks delivered in order.
        status_code: HTTP status of the response.
        error: Raised by the body after the last chunk, to simulate a
               connection dropping mid-stream.
    """

    async def body() -> AsyncIterator[bytes]:
        for chunk in chunks:
            yield chunk.encode("utf-8")
        if error is not None:
            raise error

    return httpx.Response(
        status_code,
        content=body(),
        headers={"Content-Type": "text/plain; charset=utf-8"},
    )


def marker(message_id: int | str) -> str:
    return json.dumps({"done": True, "messageId": message_id}, separators=(",", ":"))


class FakeService:
    """Routes requests to scripted handlers and records them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def on(self, method: str, path: str, handler: Handler | httpx.Response) -> None:
        if isinstance(handler, httpx.Response):
            self._routes[(method, path)] = self._replay(handler)
        else:
            self._routes[(method, path)] = handler

    @staticmethod
    def _replay(response: httpx.Response) -> Handler:
        # Buffered responses are copied per request; streamed ones are single-use.
        try:
            body = response.content
        except httpx.ResponseNotRead:
            return lambda request: response
        return lambda request: httpx.Response(
            response.status_code, headers=response.headers, content=body
        )

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        result = handler(request)
        if isinstance(result, httpx.Response):
            return result
        return await result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def config() -> ClientConfig:
    """Client configuration for tests.

    Returns:
        Config pointing at the fake base URL with default limits.
    """
    return ClientConfig(api_base_url=BASE_URL)


@pytest.fixture
def storage() -> MappingStorage:
    return MappingStorage()


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
async def http(service: FakeService) -> AsyncGenerator[AsyncClient]:
    """AsyncClient whose requests are answered by the fake service.

    Yields:
        Configured AsyncClient.
    """
    async with AsyncClient(transport=service.transport, base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def backend_app() -> FastAPI:
    """Fresh development service with its own in-memory state."""
    return create_app()


@pytest.fixture
async def async_client(backend_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the development service.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=backend_app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client
