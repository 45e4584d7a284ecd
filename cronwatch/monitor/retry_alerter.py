"""An alerter that retries transient delivery failures."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta

from cronwatch.monitor.base import AlertDeliveryError, Alerter
from cronwatch.watcher.event import Event

_NO_DELAY = timedelta(0)


class RetryAlerter(Alerter):
    """Calls ``inner`` up to ``max_attempts`` times, sleeping ``delay`` between tries.

    ``max_attempts`` below 1 becomes 3; a negative delay is treated as zero.
    """

    def __init__(
        self,
        inner: Alerter,
        max_attempts: int = 3,
        delay: timedelta = _NO_DELAY,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.inner = inner
        self.max_attempts = max_attempts if max_attempts >= 1 else 3
        self.delay = max(delay, _NO_DELAY)
        self.sleep = sleep

    def alert(self, event: Event) -> None:
        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1 and self.delay:
                self.sleep(self.delay.total_seconds())
            try:
                self.inner.alert(event)
                return
            except Exception as err:
                last_error = err
        raise AlertDeliveryError(
            f"alert failed after {self.max_attempts} attempts: {last_error}"
        ) from last_error