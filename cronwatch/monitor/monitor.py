"""A background loop that checks jobs for missed runs and raises alerts."""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import timedelta

from cronwatch.job import Job
from cronwatch.monitor.base import Alerter
from cronwatch.registry import Registry
from cronwatch.watcher.event import EventKind, new_event

log = logging.getLogger(__name__)

MISSED_MESSAGE = "job has not run within its expected schedule"


class Monitor:
    """Checks the registry every ``interval`` and alerts on each missed job."""

    def __init__(self, registry: Registry, interval: timedelta, alerter: Alerter) -> None:
        if interval <= timedelta(0):
            raise ValueError("monitor interval must be positive")
        self.registry = registry
        self.interval = interval
        self.alerter = alerter
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the monitoring loop on a background thread."""
        if self._thread is not None:
            raise RuntimeError("monitor already started")
        self._thread = threading.Thread(target=self._run, name="cronwatch-monitor", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the loop to exit and wait for it."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> Monitor:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _run(self) -> None:
        seconds = self.interval.total_seconds()
        while not self._stop_event.wait(seconds):
            self.check()
        log.info("monitor: stopping")

    def check(self) -> list[Job]:
        """Mark every overdue job missed, alert on it, and return those jobs."""
        missed = [job for job in self.registry.all() if job.is_missed()]
        for job in missed:
            job.record_missed()
            event = dataclasses.replace(new_event(EventKind.MISSED, job), message=MISSED_MESSAGE)
            try:
                self.alerter.alert(event)
            except Exception as err:
                log.warning("monitor: alert failed for job %s: %s", job.name, err)
        return missed