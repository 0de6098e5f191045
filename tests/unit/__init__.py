"""Unit tests for individual components in isolation.

Coverage:
    - session/: Configuration, storage and token handling
    - chat/: Threads, answer streaming, conversation state and feedback

Uses httpx.MockTransport in place of the network. Leverages pytest-check
for multiple assertions per test.
"""
