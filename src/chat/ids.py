"""Client-side message ids."""

import time
from collections.abc import Callable


class MessageIdGenerator:
    """Strictly increasing millisecond-clock ids.

    Two ids drawn in the same millisecond still differ, so a user message and
    the bot placeholder created right after it can never collide.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or time.time_ns
        self._last = 0

    def __call__(self) -> int:
        now = self._clock() // 1_000_000
        self._last = max(now, self._last + 1)
        return self._last
