"""GET /metrics: watcher counters as JSON."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass

from werkzeug.wrappers import Request, Response

from cronwatch.api.healthz_view import _json_response
from cronwatch.watcher.metrics import Metrics


@dataclass(frozen=True)
class MetricsPayload:
    """The JSON body returned by the metrics endpoint."""

    total_checks: int = 0
    total_missed: int = 0
    total_alerted: int = 0


def metrics_handler(metrics: Metrics) -> Callable[[Request], Response]:
    """Return a handler exposing a snapshot of ``metrics``."""

    def handle(request: Request) -> Response:
        snap = metrics.snapshot()
        return _json_response(asdict(MetricsPayload(snap.checks, snap.missed, snap.alerted)))

    return handle