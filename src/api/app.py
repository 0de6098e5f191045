"""Factory for the development chat service app."""

import logging
import os

from fastapi import FastAPI

from src.api.routes import BackendState
from src.api.routes import router as chat_router

logger = logging.getLogger(__name__)


def create_app(state: BackendState | None = None) -> FastAPI:
    """Build the development service around one in-memory state.

    Args:
        state: Pre-populated state, mainly for tests. When omitted a fresh
               state is created; DEV_CHUNK_DELAY (seconds) slows the answer
               stream down so streaming is visible in the UI.

    Returns:
        FastAPI app serving the chat contract.
    """
    if state is None:
        state = BackendState(chunk_delay=float(os.getenv("DEV_CHUNK_DELAY", "0")))

    application = FastAPI(title="Chat Service (development)", version="0.1.0")
    application.state.backend = state
    application.include_router(chat_router)

    logger.debug(f"Development service created (chunk delay {state.chunk_delay}s)")
    return application
