"""Session token acquisition and validation.

A session is a single opaque bearer token. It is read from durable storage,
probed against ``GET /auth/check`` and, when missing or rejected, replaced by
a fresh one from ``GET /auth``. The token is then held in an explicit
``SessionContext`` that the thread, stream and evaluation components receive
instead of reading ambient storage themselves.
"""

import logging

import httpx
from pydantic import ValidationError

from src.models.schemas import AuthResponse, ErrorKind, Failure
from src.session.storage import SESSION_TOKEN_KEY, Storage

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth"
CHECK_TOKEN_PATH = "/auth/check"


def bearer_headers(token: str) -> dict[str, str]:
    """Build the headers every authenticated request carries."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


class SessionContext:
    """Holds the live session token for one client instance.

    Created empty at client startup, filled by ``SessionManager`` and
    cleared on logout. A new token always overwrites the old one.
    """

    def __init__(self) -> None:
        self.token: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.token is not None

    def init(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


class SessionManager:
    """Ensures the client holds a token the service accepts.

    Validity is never cached: every ``ensure_session`` call re-probes a
    stored token.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        storage: Storage,
        context: SessionContext | None = None,
    ) -> None:
        """Initialize the session manager.

        Args:
            http: Shared client with the service base URL configured.
            storage: Durable storage holding the session token.
            context: Context to fill. A fresh one is created if not provided.
        """
        self._http = http
        self._storage = storage
        self.context = context or SessionContext()

    async def validate(self, token: str) -> bool:
        """Probe the service with a token.

        Any non-success status or transport error counts as invalid.
        """
        try:
            response = await self._http.get(CHECK_TOKEN_PATH, headers=bearer_headers(token))
        except httpx.HTTPError as e:
            logger.warning(f"Token validation request failed: {e}")
            return False
        return response.is_success

    async def authenticate(self) -> str | Failure:
        """Obtain a fresh token and persist it.

        Returns:
            The new token, or a Failure when the service refuses or is unreachable.
        """
        try:
            response = await self._http.get(
                AUTH_PATH, headers={"Content-Type": "application/json"}
            )
            response.raise_for_status()
            token = AuthResponse.model_validate(response.json()).token
        except httpx.HTTPStatusError as e:
            logger.error(f"Authentication failed with HTTP {e.response.status_code}")
            return Failure(
                kind=ErrorKind.AUTHENTICATION,
                detail=f"HTTP {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            logger.error(f"Authentication request failed: {e}")
            return Failure(kind=ErrorKind.AUTHENTICATION, detail=f"Connection failed: {e}")
        except (ValueError, ValidationError) as e:
            logger.error(f"Authentication returned an unusable body: {e}")
            return Failure(kind=ErrorKind.AUTHENTICATION, detail="Malformed auth response")

        self._storage.set(SESSION_TOKEN_KEY, token)
        return token

    async def ensure_session(self) -> str | Failure:
        """Return a valid token, re-authenticating when needed.

        Storage is written exactly once per successful authentication and
        never on a successful validation. When both validation and
        authentication fail the context is left unset.

        Returns:
            The token in use, or an authentication Failure.
        """
        stored = self._storage.get(SESSION_TOKEN_KEY)
        if stored and await self.validate(stored):
            self.context.init(stored)
            return stored

        if stored:
            logger.info("Stored session token rejected, re-authenticating")

        result = await self.authenticate()
        if isinstance(result, Failure):
            self.context.clear()
            return result

        self.context.init(result)
        logger.info("Authenticated new session")
        return result

    def logout(self) -> None:
        """Forget the session in memory and in durable storage."""
        self.context.clear()
        self._storage.remove(SESSION_TOKEN_KEY)
