"""GET /api/jobs: every registered job with its current state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from werkzeug.wrappers import Request, Response

from cronwatch.api.healthz_view import _json_response, _json_time
from cronwatch.registry import JobNotFoundError, Registry

_TIMESTAMP_FIELDS = ("last_run", "last_success", "last_failure")


@dataclass(frozen=True)
class JobSummary:
    """The JSON view of one job's current state."""

    name: str
    schedule: str
    status: str
    last_run: datetime | None = None
    last_success: datetime | None = None
    last_failure: datetime | None = None
    missed_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object, leaving out timestamps that were never set."""
        out: dict[str, Any] = {"name": self.name, "schedule": self.schedule, "status": self.status}
        out.update(
            (key, _json_time(value))
            for key in _TIMESTAMP_FIELDS
            if (value := getattr(self, key)) is not None
        )
        out["missed_count"] = self.missed_count
        return out


def jobs_handler(registry: Registry) -> Callable[[Request], Response]:
    """Return a handler listing every job's summary; only GET is allowed."""

    def handle(request: Request) -> Response:
        if request.method != "GET":
            return Response("method not allowed\n", status=405, mimetype="text/plain")
        summaries = []
        for name in registry.names():
            try:
                snap = registry.get(name).snapshot()
            except JobNotFoundError:
                continue
            summary = JobSummary(
                name=snap.name,
                schedule=snap.schedule,
                status=snap.status.value,
                last_run=snap.last_seen,
                last_success=snap.last_success,
                last_failure=snap.last_failure,
                missed_count=snap.missed_count,
            )
            summaries.append(summary.to_dict())
        return _json_response(summaries)

    return handle