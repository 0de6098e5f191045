"""Transient notification seam.

The client core only decides *that* something should be announced; showing
it (a toast in the UI) is the job of whatever Notifier is plugged in.
"""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Severity of a transient notification."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    def __call__(self, message: str, kind: NotificationKind, duration: float) -> None: ...


def log_notifier(message: str, kind: NotificationKind, duration: float) -> None:
    """Default notifier that writes notifications to the log."""
    level = logging.INFO
    if kind in (NotificationKind.WARNING, NotificationKind.ERROR):
        level = logging.WARNING
    logger.log(level, f"[{kind.value}] {message}")
