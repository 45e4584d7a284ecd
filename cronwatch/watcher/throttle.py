"""A minimum interval between consecutive firings for each key.

Use ``allow`` before firing an alert for a key (usually a job name). Safe for
concurrent use.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from cronwatch.watcher.dedup import _KeyedWindow


class Throttle(_KeyedWindow[str]):
    """Allows at most one firing per ``interval`` for each distinct key."""

    def __init__(
        self,
        interval: timedelta = timedelta(minutes=1),
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(interval, clock, default=timedelta(minutes=1))

    @property
    def interval(self) -> timedelta:
        return self._span

    def allow(self, key: str) -> bool:
        """Return True if ``key`` has not fired within the interval, and record it."""
        return self._admit(key)

    def reset(self, key: str) -> None:
        """Forget ``key`` so its next ``allow`` succeeds."""
        self._discard(key)