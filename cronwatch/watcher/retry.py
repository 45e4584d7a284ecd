"""Retrying an alert attempt a fixed number of times."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import TypeVar

T = TypeVar("T")


class Retry:
    """Runs an action up to ``max_attempts`` times, waiting ``wait_between`` between tries."""

    def __init__(
        self,
        max_attempts: int = 3,
        wait_between: timedelta = timedelta(seconds=2),
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts <= 0:
            max_attempts = 3
        if wait_between <= timedelta(0):
            wait_between = timedelta(seconds=2)
        self.max_attempts = max_attempts
        self.wait_between = wait_between
        self.sleep = sleep

    def do(self, fn: Callable[[], T]) -> T:
        """Call ``fn`` until it returns; re-raise its last exception if every try fails."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                return fn()
            except Exception:
                if attempt == self.max_attempts:
                    raise
                self.sleep(self.wait_between.total_seconds())
        raise AssertionError("unreachable")