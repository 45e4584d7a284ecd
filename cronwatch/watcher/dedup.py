"""Suppression of identical back-to-back alerts within a time window.

Also holds the keyed time-window bookkeeping that the other alert
suppressors in this package are built on.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from datetime import datetime, timedelta, timezone
from typing import Generic, TypeVar

_K = TypeVar("_K", bound=Hashable)
_Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _KeyedWindow(Generic[_K]):
    """Remembers when each key last passed and lets it pass again once ``span`` has elapsed."""

    def __init__(
        self,
        span: timedelta,
        clock: _Clock | None,
        default: timedelta | None = None,
    ) -> None:
        if default is not None and span <= timedelta(0):
            span = default
        self._span = span
        self.clock = clock or _utcnow
        self._passed: dict[_K, datetime] = {}
        self._lock = threading.Lock()

    def _admit(self, key: _K) -> bool:
        with self._lock:
            now = self.clock()
            last = self._passed.get(key)
            if last is not None and now - last < self._span:
                return False
            self._passed[key] = now
            return True

    def _discard(self, key: _K) -> None:
        with self._lock:
            self._passed.pop(key, None)

    def _forget(self, matches: Callable[[_K], bool]) -> None:
        with self._lock:
            self._passed = {k: v for k, v in self._passed.items() if not matches(k)}

    def _copy(self) -> dict[_K, datetime]:
        with self._lock:
            return dict(self._passed)


class Dedup(_KeyedWindow[tuple[str, str]]):
    """Drops an alert whose job name and key were already seen within ``window``."""

    def __init__(
        self,
        window: timedelta = timedelta(minutes=5),
        *,
        clock: _Clock | None = None,
    ) -> None:
        super().__init__(window, clock, default=timedelta(minutes=5))

    @property
    def window(self) -> timedelta:
        return self._span

    def is_duplicate(self, job_name: str, key: str) -> bool:
        """Return True for a repeat within the window; otherwise record the alert."""
        return not self._admit((job_name, key))

    def reset(self, job_name: str) -> None:
        """Forget every alert recorded for ``job_name``."""
        self._forget(lambda seen: seen[0] == job_name)