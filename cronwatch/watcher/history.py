"""A bounded, thread-safe record of recent watcher check cycles.

Each CheckRecord holds the time the check ran, the names of jobs found
missed and the names of jobs for which an alert was sent.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class CheckRecord:
    """The result of one watcher check cycle."""

    at: datetime
    missed: list[str] = field(default_factory=list)
    alerted: list[str] = field(default_factory=list)

    def copy(self) -> CheckRecord:
        """Return a copy that shares no lists with this record."""
        return CheckRecord(self.at, list(self.missed or []), list(self.alerted or []))


class History:
    """Keeps the most recent ``max_records`` check records, oldest first."""

    def __init__(self, max_records: int = 100) -> None:
        if max_records <= 0:
            max_records = 100
        self.max_records = max_records
        self._records: deque[CheckRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def record(self, record: CheckRecord) -> None:
        """Append a record, evicting the oldest when full."""
        with self._lock:
            self._records.append(record.copy())

    def snapshot(self) -> list[CheckRecord]:
        """Return copies of all stored records, oldest first."""
        with self._lock:
            return [r.copy() for r in self._records]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)