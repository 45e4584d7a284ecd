"""Syslog-style event lines for log forwarders such as rsyslog or Fluentd."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TextIO

from cronwatch.watcher.dedup import _utcnow


class SyslogWriter:
    """Writes RFC 3339 timestamped watcher events to a text stream (stdout by default)."""

    def __init__(
        self,
        out: TextIO | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.out = out if out is not None else sys.stdout
        self.clock = clock or _utcnow

    def _line(self, level: str, text: str) -> None:
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        stamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        self.out.write(f"{stamp} [{level}] {text}\n")
        self.out.flush()

    def write_event(self, level: str, job_name: str, message: str) -> None:
        """Write one event line for ``job_name``."""
        self._line(level, f"job={job_name} msg={json.dumps(message, ensure_ascii=False)}")

    def write_start(self) -> None:
        """Write a startup line."""
        self._line("INFO", "cronwatch watcher started")

    def write_stop(self) -> None:
        """Write a shutdown line."""
        self._line("INFO", "cronwatch watcher stopped")