"""Development implementation of the chat service.

The client treats the real service as a black box. This FastAPI app
implements the same contract in memory so the client can be run and
integration-tested locally.

Endpoints:
    - GET /auth: Issue a session token
    - GET /auth/check: Validate a bearer token
    - POST /thread/create: Create a conversation thread
    - POST /chat: Stream an answer followed by a completion marker
    - POST /evaluation: Record thumbs up/down feedback
    - GET /examples: Example questions
    - GET /health: Service health status
"""

from src.api.app import create_app
from src.api.routes import BackendState

__all__ = ["BackendState", "create_app"]
