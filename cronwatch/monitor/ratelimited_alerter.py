"""An alerter that forwards at most one alert per job per cooldown."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from cronwatch.monitor.base import AlertDeliveryError, Alerter
from cronwatch.watcher.event import Event
from cronwatch.watcher.ratelimit import RateLimit


class RateLimitedAlerter(Alerter):
    """Suppresses repeated alerts for the same job within ``cooldown``."""

    def __init__(
        self,
        inner: Alerter,
        cooldown: timedelta,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.inner = inner
        self.rate_limit = RateLimit(cooldown, clock=clock)

    def alert(self, event: Event) -> None:
        job_name = event.job.name
        if self.rate_limit.allow(job_name):
            try:
                self.inner.alert(event)
            except Exception as err:
                # Roll back so the next check retries.
                self.rate_limit.reset(job_name)
                raise AlertDeliveryError(f"rate-limited alerter: {err}") from err