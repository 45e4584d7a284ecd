"""Suppression of repeated alerts for one job within a cooldown window.

Call ``allow`` before forwarding an alert; when a job recovers, call
``reset`` so its next failure is reported at once. Safe for concurrent use.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from cronwatch.watcher.dedup import _KeyedWindow


class RateLimit(_KeyedWindow[str]):
    """Forwards at most one alert per job name per ``cooldown``."""

    def __init__(
        self,
        cooldown: timedelta,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(cooldown, clock)

    @property
    def cooldown(self) -> timedelta:
        return self._span

    def allow(self, job_name: str) -> bool:
        """Return True if an alert for ``job_name`` should go out, and record it."""
        return self._admit(job_name)

    def reset(self, job_name: str) -> None:
        """Clear the state for ``job_name`` so its next alert goes through."""
        self._discard(job_name)

    def snapshot(self) -> dict[str, datetime]:
        """Return a copy of the last-sent times."""
        return self._copy()