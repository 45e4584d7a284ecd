"""A ticker abstraction that decouples check loops from the wall clock.

Production code uses RealTicker, which ticks on a background thread. Tests
use FakeTicker and drive ticks by hand for fast, deterministic runs.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from datetime import datetime, timedelta

from cronwatch.watcher.dedup import _utcnow

_POLL_SECONDS = 0.05


class Ticker:
    """A source of tick times; iterate it to receive ticks until it is stopped."""

    def __init__(self) -> None:
        self._ticks: queue.Queue[datetime] = queue.Queue(maxsize=1)
        self.done = threading.Event()

    def get(self, timeout: float | None = None) -> datetime:
        """Wait for the next tick; raise TimeoutError if none arrives in ``timeout`` seconds."""
        try:
            return self._ticks.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError("no tick received") from None

    def stop(self) -> None:
        """Stop producing ticks."""
        self.done.set()

    def __iter__(self) -> Iterator[datetime]:
        while not self.done.is_set():
            try:
                yield self.get(timeout=_POLL_SECONDS)
            except TimeoutError:
                continue

    def __enter__(self) -> Ticker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class RealTicker(Ticker):
    """Ticks every ``interval``; ticks are dropped while an earlier one is unread."""

    def __init__(self, interval: timedelta) -> None:
        if interval <= timedelta(0):
            raise ValueError("ticker interval must be positive")
        super().__init__()
        self.interval = interval
        self._thread = threading.Thread(target=self._run, name="cronwatch-ticker", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        seconds = self.interval.total_seconds()
        while not self.done.wait(seconds):
            try:
                self._ticks.put_nowait(_utcnow())
            except queue.Full:
                pass

    def get(self, timeout: float | None = None) -> datetime:
        return super().get(timeout)

    def stop(self) -> None:
        super().stop()
        if self._thread is not threading.current_thread():
            self._thread.join()


class FakeTicker(Ticker):
    """A ticker whose ticks are sent by hand with ``tick``."""

    def tick(self, at: datetime | None = None, timeout: float | None = None) -> bool:
        """Send one tick; return False if it could not be delivered within ``timeout``."""
        try:
            self._ticks.put(at or _utcnow(), timeout=timeout)
        except queue.Full:
            return False
        return True

    def get(self, timeout: float | None = None) -> datetime:
        return super().get(timeout)

    def stop(self) -> None:
        super().stop()