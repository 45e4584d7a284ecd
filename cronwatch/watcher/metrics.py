"""Runtime counters accumulated over the life of the watcher process.

``checks`` counts per-job evaluations, ``missed`` jobs that overran their
window, and ``alerted`` successful alert dispatches.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class MetricsSnapshot:
    """A point-in-time copy of the counters."""

    checks: int = 0
    missed: int = 0
    alerted: int = 0


class Metrics:
    """Thread-safe watcher counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._checks = 0
        self._missed = 0
        self._alerted = 0

    def record_check(self) -> None:
        """Count one job evaluation."""
        with self._lock:
            self._checks += 1

    def record_missed(self) -> None:
        """Count one missed run."""
        with self._lock:
            self._missed += 1

    def record_alerted(self) -> None:
        """Count one alert sent."""
        with self._lock:
            self._alerted += 1

    def snapshot(self) -> MetricsSnapshot:
        """Read all counters together."""
        with self._lock:
            return MetricsSnapshot(self._checks, self._missed, self._alerted)