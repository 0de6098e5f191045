"""Streaming chat client - sessions, threads, streamed answers and feedback.

Combines httpx for streaming HTTP, Pydantic for payload validation,
NiceGUI for the chat page, and FastAPI for a local development service.

Components:
    - session: Configuration, durable storage and bearer tokens
    - chat: Threads, answer streaming, conversation state and feedback
    - models: Message and wire payload schemas
    - ui: Web interface for chat interactions
    - api: In-memory development implementation of the chat service
"""

__version__ = "0.1.0"
