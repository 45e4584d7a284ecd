"""Runtime state of a monitored cron job."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum

from cronwatch.config import JobConfig


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Status(StrEnum):
    """Last known state of a job."""

    OK = "ok"
    FAILED = "failed"
    MISSED = "missed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class JobSnapshot:
    """A consistent point-in-time copy of a job's state."""

    name: str
    schedule: str
    status: Status
    last_seen: datetime
    last_success: datetime | None
    last_failure: datetime | None
    fail_count: int
    missed_count: int
    max_interval: timedelta | None


class Job:
    """A monitored job; safe to update from several threads."""

    def __init__(
        self,
        name: str,
        schedule: str = "",
        max_interval: timedelta | None = None,
        *,
        last_run: datetime | None = None,
    ) -> None:
        self.name = name
        self.schedule = schedule
        self.max_interval = max_interval
        self.last_run = last_run or _utcnow()
        self.last_success: datetime | None = None
        self.last_failure: datetime | None = None
        self.status = Status.UNKNOWN
        self.fail_count = 0
        self.missed_count = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Job(name={self.name!r}, status={self.status.value!r})"

    def record_success(self, at: datetime | None = None) -> None:
        """Mark the job healthy and reset its failure counter."""
        at = at or _utcnow()
        with self._lock:
            self.last_run = at
            self.last_success = at
            self.status = Status.OK
            self.fail_count = 0

    def record_failure(self, at: datetime | None = None) -> None:
        """Mark the job failed and count the failure."""
        at = at or _utcnow()
        with self._lock:
            self.last_run = at
            self.last_failure = at
            self.status = Status.FAILED
            self.fail_count += 1

    def record_missed(self) -> None:
        """Mark the job as having missed its scheduled window."""
        with self._lock:
            self.status = Status.MISSED
            self.fail_count += 1
            self.missed_count += 1

    def force_last_run(self, at: datetime) -> None:
        """Set the last-run time without changing the status."""
        with self._lock:
            self.last_run = at

    def is_missed(self, now: datetime | None = None) -> bool:
        """True when the deadline (last run plus maximum interval) has passed."""
        now = now or _utcnow()
        with self._lock:
            if self.max_interval is None:
                return False
            return now > self.last_run + self.max_interval

    def snapshot(self) -> JobSnapshot:
        """Return a copy of the job's current state."""
        with self._lock:
            return JobSnapshot(
                name=self.name,
                schedule=self.schedule,
                status=self.status,
                last_seen=self.last_run,
                last_success=self.last_success,
                last_failure=self.last_failure,
                fail_count=self.fail_count,
                missed_count=self.missed_count,
                max_interval=self.max_interval,
            )


def job_from_config(cfg: JobConfig) -> Job:
    """Build a Job; the maximum interval falls back to the grace period."""
    max_interval = cfg.max_interval
    if max_interval is None and cfg.grace_period:
        max_interval = cfg.grace_period
    return Job(cfg.name, cfg.schedule, max_interval)