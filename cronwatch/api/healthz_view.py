"""GET /healthz: the health of each monitored job."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone

from werkzeug.wrappers import Request, Response

from cronwatch.watcher.healthcheck import HealthCheck


def _json_time(at: datetime) -> str:
    """Format ``at`` as an RFC 3339 UTC timestamp; naive values are taken as UTC."""
    aware = at if at.tzinfo else at.replace(tzinfo=timezone.utc)
    return aware.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _json_response(body: object, status: int = 200) -> Response:
    return Response(json.dumps(body) + "\n", status=status, content_type="application/json")


def healthz_handler(health_check: HealthCheck) -> Callable[[Request], Response]:
    """Return a handler answering 200 when every job is healthy and 503 otherwise."""

    def handle(request: Request) -> Response:
        statuses = health_check.snapshot()
        healthy = all(s.healthy for s in statuses)
        body = {
            "status": "ok" if healthy else "degraded",
            "jobs": [
                {
                    "name": s.job_name,
                    "healthy": s.healthy,
                    "message": s.message,
                    "last_check": _json_time(s.last_check),
                }
                for s in statuses
            ],
            "at": _json_time(datetime.now(timezone.utc)),
        }
        return _json_response(body, 200 if healthy else 503)

    return handle