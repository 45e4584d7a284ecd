"""Per-job health state, as reported by the health endpoint.

Record a job healthy after a run on time and unhealthy after a missed or
failed run; query one job with ``status`` or all with ``snapshot``.
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from cronwatch.watcher.dedup import _utcnow


@dataclass
class HealthStatus:
    """The current health of one monitored job."""

    job_name: str
    healthy: bool
    last_check: datetime
    message: str


class HealthCheck:
    """Tracks the health of each job; safe for concurrent use."""

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock or _utcnow
        self._states: dict[str, HealthStatus] = {}
        self._lock = threading.Lock()

    def _record(self, job_name: str, healthy: bool, message: str) -> None:
        with self._lock:
            self._states[job_name] = HealthStatus(job_name, healthy, self.clock(), message)

    def record_healthy(self, job_name: str) -> None:
        """Mark ``job_name`` healthy."""
        self._record(job_name, True, "job ran on time")

    def record_unhealthy(self, job_name: str, reason: str) -> None:
        """Mark ``job_name`` unhealthy, giving the reason."""
        self._record(job_name, False, reason)

    def status(self, job_name: str) -> HealthStatus | None:
        """Return a copy of the job's status, or None if it was never recorded."""
        with self._lock:
            state = self._states.get(job_name)
            return dataclasses.replace(state) if state is not None else None

    def snapshot(self) -> list[HealthStatus]:
        """Return copies of every recorded status."""
        with self._lock:
            return [dataclasses.replace(s) for s in self._states.values()]