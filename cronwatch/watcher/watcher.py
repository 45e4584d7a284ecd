"""A background loop that reports jobs which overran their maximum interval.

Usage::

    missed = queue.Queue()
    with Watcher(registry, timedelta(seconds=30), missed.put):
        job = missed.get()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from cronwatch.job import Job
from cronwatch.registry import Registry
from cronwatch.watcher.ticker import RealTicker, Ticker

log = logging.getLogger(__name__)


class Watcher:
    """Checks the registry on every tick and passes each missed job to ``notify``."""

    def __init__(
        self,
        registry: Registry,
        interval: timedelta,
        notify: Callable[[Job], object],
        *,
        ticker_factory: Callable[[timedelta], Ticker] = RealTicker,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("watcher interval must be positive")
        self.registry = registry
        self.interval = interval
        self.notify = notify
        self._ticker_factory = ticker_factory
        self._ticker: Ticker | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """True while the background loop is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the watch loop on a background thread."""
        if self._thread is not None:
            raise RuntimeError("watcher already started")
        self._ticker = self._ticker_factory(self.interval)
        self._thread = threading.Thread(
            target=self._run, args=(self._ticker,), name="cronwatch-watcher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the loop to halt and wait for it to finish."""
        if self._ticker is None or self._thread is None:
            return
        self._ticker.stop()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> Watcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _run(self, ticker: Ticker) -> None:
        for at in ticker:
            try:
                self.check(at)
            except Exception:
                log.exception("watcher: check failed")
        log.info("watcher: stopped")

    def check(self, now: datetime | None = None) -> list[Job]:
        """Mark and report every job whose deadline has passed; return them."""
        now = now or datetime.now(timezone.utc)
        missed = [job for job in self.registry.all() if job.is_missed(now)]
        for job in missed:
            job.record_missed()
            self.notify(job)
        return missed