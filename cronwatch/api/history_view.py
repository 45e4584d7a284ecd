"""GET /history: recent watcher events as JSON."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Protocol

from werkzeug.wrappers import Request, Response

from cronwatch.api.healthz_view import _json_response, _json_time


class _HistoryEntry(Protocol):
    job_name: str
    kind: object
    message: str
    timestamp: datetime


class HistoryProvider(Protocol):
    """Anything that can list recent history entries."""

    def snapshot(self) -> Iterable[_HistoryEntry]: ...


def history_handler(provider: HistoryProvider) -> Callable[[Request], Response]:
    """Return a handler listing the provider's history; only GET is allowed."""

    def handle(request: Request) -> Response:
        if request.method != "GET":
            return Response("method not allowed\n", status=405, mimetype="text/plain")
        return _json_response(
            [
                {
                    "job_name": rec.job_name,
                    "kind": str(rec.kind),
                    "message": rec.message,
                    "timestamp": _json_time(rec.timestamp),
                }
                for rec in provider.snapshot() or ()
            ]
        )

    return handle