"""Unit tests for ThreadManager."""

import httpx
import pytest_check as check
from httpx import AsyncClient

from src.chat.threads import ThreadManager
from src.models.schemas import ErrorKind, Failure
from tests.conftest import FakeService


class TestEnsureThread:
    """Tests for lazy thread creation."""

    async def test_creates_thread_with_bearer_token(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        service.on("POST", "/thread/create", httpx.Response(200, json={"threadId": "t1"}))
        threads = ThreadManager(http)

        result = await threads.ensure_thread("abc")

        check.equal(result, "t1")
        check.equal(
            service.calls("POST", "/thread/create")[0].headers["Authorization"],
            "Bearer abc",
        )

    async def test_second_call_reuses_cached_id(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        """Two calls in a row issue one request and return the same id."""
        service.on("POST", "/thread/create", httpx.Response(200, json={"threadId": "t1"}))
        threads = ThreadManager(http)

        first = await threads.ensure_thread("abc")
        second = await threads.ensure_thread("abc")

        check.equal(first, second)
        check.equal(len(service.calls("POST", "/thread/create")), 1)

    async def test_failure_returns_marker_and_caches_nothing(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        service.on("POST", "/thread/create", httpx.Response(500))
        threads = ThreadManager(http)

        result = await threads.ensure_thread("abc")

        check.is_instance(result, Failure)
        check.equal(result.kind, ErrorKind.THREAD_CREATION)
        check.is_none(threads.thread_id)

    async def test_connection_error_returns_marker(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        service.on("POST", "/thread/create", unreachable)

        result = await ThreadManager(http).ensure_thread("abc")

        assert isinstance(result, Failure)
        assert "Connection failed" in result.detail

    async def test_next_attempt_after_failure_sends_a_new_request(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        responses = iter([httpx.Response(500), httpx.Response(200, json={"threadId": "t2"})])
        service.on("POST", "/thread/create", lambda request: next(responses))
        threads = ThreadManager(http)

        first = await threads.ensure_thread("abc")
        second = await threads.ensure_thread("abc")

        check.is_instance(first, Failure)
        check.equal(second, "t2")
        check.equal(len(service.calls("POST", "/thread/create")), 2)

    async def test_reset_forces_a_new_thread(
        self, service: FakeService, http: AsyncClient
    ) -> None:
        ids = iter(["t1", "t2"])
        service.on(
            "POST",
            "/thread/create",
            lambda request: httpx.Response(200, json={"threadId": next(ids)}),
        )
        threads = ThreadManager(http)

        await threads.ensure_thread("abc")
        threads.reset()

        assert await threads.ensure_thread("abc") == "t2"
