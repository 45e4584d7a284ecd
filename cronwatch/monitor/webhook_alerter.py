"""An alerter that posts the job state as JSON to an HTTP webhook."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from cronwatch.monitor.base import AlertDeliveryError, Alerter
from cronwatch.watcher.event import Event


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _json_time(at: datetime) -> str:
    if at.tzinfo is None:
        at = at.replace(tzinfo=timezone.utc)
    return at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _post_json(url: str, body: dict[str, Any], timeout: float) -> int:
    """POST ``body`` as JSON and return the response status code.

    Transport failures raise OSError (or ValueError for a malformed URL).
    """
    data = json.dumps(body).encode("utf-8")
    request = urllib.request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.status
    except urllib.error.HTTPError as err:
        err.close()
        return err.code


@dataclass(frozen=True)
class WebhookPayload:
    """The JSON body sent to the webhook endpoint."""

    job_name: str
    status: str
    message: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object."""
        return {
            "job_name": self.job_name,
            "status": self.status,
            "message": self.message,
            "timestamp": _json_time(self.timestamp),
        }


class WebhookAlerter(Alerter):
    """POSTs each alert to ``url``."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.clock = clock or _utcnow

    def alert(self, event: Event) -> None:
        job = event.job
        status = str(job.status)
        payload = WebhookPayload(
            job_name=job.name,
            status=status,
            message=f'cronwatch: job "{job.name}" is in state {status}',
            timestamp=self.clock(),
        )
        try:
            code = _post_json(self.url, payload.to_dict(), self.timeout)
        except (OSError, ValueError) as err:
            raise AlertDeliveryError(f"webhook alerter: POST {self.url}: {err}") from err
        if not 200 <= code < 300:
            raise AlertDeliveryError(
                f"webhook alerter: unexpected status {code} from {self.url}"
            )