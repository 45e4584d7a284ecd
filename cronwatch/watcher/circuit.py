"""A three-state circuit breaker that guards alert delivery.

Closed allows every attempt. After ``max_failures`` consecutive failures the
circuit opens and suppresses attempts for ``reset_after``. Once that window
has passed one probe is allowed (half-open): success closes the circuit,
failure opens it again.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CircuitState(Enum):
    """State of a circuit breaker."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


class Circuit:
    """A circuit breaker for alert suppression; safe for concurrent use."""

    def __init__(
        self,
        max_failures: int = 3,
        reset_after: timedelta = timedelta(minutes=5),
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_failures <= 0:
            max_failures = 3
        if reset_after <= timedelta(0):
            reset_after = timedelta(minutes=5)
        self.max_failures = max_failures
        self.reset_after = reset_after
        self.clock = clock or _utcnow
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: datetime | None = None
        self._lock = threading.Lock()

    def allow(self) -> bool:
        """Return True when an alert attempt may go ahead."""
        with self._lock:
            if self._state is not CircuitState.OPEN:
                return True
            if self.clock() - self._opened_at >= self.reset_after:
                self._state = CircuitState.HALF_OPEN
                return True
            return False

    def record_success(self) -> None:
        """Clear the failure count and close the circuit."""
        with self._lock:
            self._failures = 0
            self._state = CircuitState.CLOSED

    def record_failure(self) -> None:
        """Count a failure, opening the circuit once the limit is reached."""
        with self._lock:
            self._failures += 1
            if self._failures >= self.max_failures:
                self._state = CircuitState.OPEN
                self._opened_at = self.clock()

    def state(self) -> CircuitState:
        """Return the current state."""
        with self._lock:
            return self._state