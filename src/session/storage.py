"""Durable client-side key/value storage.

The browser build of this client keeps its session token in local storage.
Here the same role is played by any mutable mapping: NiceGUI's
``app.storage.user`` in the UI, or a plain dict in tests.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "session_token"
THEME_KEY = "theme"
EXAMPLE_QUESTIONS_KEY = "example_questions"


class Storage(ABC):
    """Interface for string values that outlive a single page load."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a value if present."""

    def get_json(self, key: str) -> Any | None:
        """Return a JSON-decoded value, or None when missing or unreadable."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable stored value for {key!r}")
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value))


class MappingStorage(Storage):
    """Storage backed by a mutable mapping."""

    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self._data: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
