"""The alerter interface and the default alerter that writes to the log."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from cronwatch.watcher.event import Event


class AlertDeliveryError(Exception):
    """Raised when an alert could not be delivered."""


class Alerter(ABC):
    """A backend that surfaces watcher events to operators."""

    @abstractmethod
    def alert(self, event: Event) -> None:
        """Deliver ``event``; raise an exception if delivery fails."""


def _rfc3339(at: datetime) -> str:
    """Second-precision UTC timestamp; naive values are taken as UTC."""
    aware = at if at.tzinfo else at.replace(tzinfo=timezone.utc)
    return format(aware.astimezone(timezone.utc), "%Y-%m-%dT%H:%M:%SZ")


def format_alert(event: Event) -> str:
    """Return a human-readable description of ``event`` without logging it."""
    job = event.job
    return f"job={job.name} status={job.status} message={event.message} at={_rfc3339(event.observed_at)}"


class LogAlerter(Alerter):
    """Writes alerts to a logger; the default when no external channel is set up."""

    def __init__(self, prefix: str = "ALERT", logger: logging.Logger | None = None) -> None:
        self.prefix = prefix or "ALERT"
        self.logger = logger or logging.getLogger("cronwatch.monitor")

    def alert(self, event: Event) -> None:
        job = event.job
        self.logger.warning(
            "[%s] %s | job=%s status=%s message=%s",
            self.prefix, _rfc3339(event.observed_at), job.name, job.status, event.message,
        )