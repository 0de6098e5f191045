"""Session layer: configuration, durable storage and bearer tokens.

Responsibilities:
    - Client configuration loaded from the environment
    - Key/value storage that survives page reloads
    - Token acquisition, validation and logout

Every authenticated request in the client draws its token from the
SessionContext kept here.
"""

from src.session.config import ClientConfig, get_client_config
from src.session.manager import SessionContext, SessionManager, bearer_headers
from src.session.storage import MappingStorage, Storage

__all__ = [
    "ClientConfig",
    "MappingStorage",
    "SessionContext",
    "SessionManager",
    "Storage",
    "bearer_headers",
    "get_client_config",
]
