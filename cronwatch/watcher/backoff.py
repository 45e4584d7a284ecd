"""Exponential back-off delays for repeated alert suppression."""

from __future__ import annotations

from datetime import timedelta


class Backoff:
    """A delay that starts at ``base`` and doubles on each ``next`` up to ``cap``."""

    def __init__(self, base: timedelta = timedelta(0), cap: timedelta = timedelta(0)) -> None:
        if base <= timedelta(0):
            base = timedelta(minutes=1)
        if cap < base:
            cap = base
        self.base = base
        self.cap = cap
        self._current = base

    def current(self) -> timedelta:
        """Return the delay the next call to ``next`` would give, without advancing."""
        return self._current

    def next(self) -> timedelta:
        """Return the current delay and advance to the doubled value."""
        delay = self._current
        self._current = min(self._current * 2, self.cap)
        return delay

    def reset(self) -> None:
        """Return the sequence to ``base``."""
        self._current = self.base