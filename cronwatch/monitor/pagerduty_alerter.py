"""An alerter that triggers PagerDuty events."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from cronwatch.monitor.base import AlertDeliveryError, Alerter, format_alert
from cronwatch.monitor.webhook_alerter import _json_time, _post_json
from cronwatch.watcher.dedup import _utcnow
from cronwatch.watcher.event import Event

PAGERDUTY_EVENTS_URL = "https://events.pagerduty.com/v2/enqueue"


class PagerDutyAlerter(Alerter):
    """Sends a trigger event for each alert to the PagerDuty events API."""

    def __init__(
        self,
        integration_key: str,
        *,
        url: str = PAGERDUTY_EVENTS_URL,
        timeout: float = 10.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.integration_key = integration_key
        self.url = url
        self.timeout = timeout
        self.clock = clock or _utcnow

    def _body(self, event: Event) -> dict[str, object]:
        detail = {
            "summary": format_alert(event),
            "source": event.job.name,
            "severity": "error",
            "timestamp": _json_time(self.clock()),
        }
        return {
            "routing_key": self.integration_key,
            "event_action": "trigger",
            "payload": detail,
            "client": "cronwatch",
        }

    def alert(self, event: Event) -> None:
        try:
            code = _post_json(self.url, self._body(event), self.timeout)
        except (OSError, ValueError) as err:
            raise AlertDeliveryError(f"pagerduty: send event: {err}") from err
        if code not in range(200, 300):
            raise AlertDeliveryError(f"pagerduty: unexpected status {code}")