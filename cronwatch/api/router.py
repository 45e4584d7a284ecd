"""The HTTP interface.

Routes:
    GET /healthz   200 with each job's health, 503 if any job is degraded
    GET /metrics   a snapshot of the watcher counters
    GET /api/jobs  every registered job with its status and timestamps

Usage::

    app = new_router(RouterConfig(registry=reg, metrics=metrics, health_check=hc))
    werkzeug.serving.run_simple("0.0.0.0", 8080, app)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from werkzeug.exceptions import HTTPException, NotFound
from werkzeug.routing import Map, Rule
from werkzeug.wrappers import Request, Response

from cronwatch.api.healthz_view import healthz_handler
from cronwatch.api.jobs_view import jobs_handler
from cronwatch.api.metrics_view import metrics_handler
from cronwatch.registry import Registry
from cronwatch.watcher.healthcheck import HealthCheck
from cronwatch.watcher.metrics import Metrics

_Handler = Callable[[Request], Response]


@dataclass
class RouterConfig:
    """The dependencies the HTTP router needs."""

    registry: Registry
    metrics: Metrics
    health_check: HealthCheck


class _Router:
    """A WSGI application dispatching exact paths to handlers."""

    def __init__(self, routes: dict[str, _Handler]) -> None:
        self._handlers = routes
        self._map = Map([Rule(path, endpoint=path) for path in routes])

    def __call__(self, environ: dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        adapter = self._map.bind_to_environ(environ)
        try:
            endpoint, _ = adapter.match()
            response = self._handlers[endpoint](Request(environ))
        except NotFound:
            response = Response("404 page not found\n", status=404, mimetype="text/plain")
        except HTTPException as exc:
            response = exc.get_response(environ)
        return response(environ, start_response)


def new_router(config: RouterConfig) -> Callable[..., Iterable[bytes]]:
    """Build the WSGI application serving the cronwatch API."""
    return _Router(
        {
            "/healthz": healthz_handler(config.health_check),
            "/metrics": metrics_handler(config.metrics),
            "/api/jobs": jobs_handler(config.registry),
        }
    )