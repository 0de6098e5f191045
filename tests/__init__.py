"""Test package for the streaming chat client.

Unit tests for isolated components and integration tests for the whole
client flow.

Structure:
    - unit/: Individual component tests against a scripted fake service
    - integration/: Client and service contract tests over ASGITransport

Uses pytest with pytest-asyncio for coroutine tests and pytest-check for
soft assertions.
"""
