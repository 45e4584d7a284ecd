"""An alerter that posts messages to a Slack incoming webhook."""

from __future__ import annotations

from typing import Any

from cronwatch.monitor.base import AlertDeliveryError, Alerter, format_alert
from cronwatch.monitor.webhook_alerter import _post_json
from cronwatch.watcher.event import Event


class SlackAlerter(Alerter):
    """Posts a text description of each alert to ``webhook_url``."""

    def __init__(self, webhook_url: str, channel: str = "", *, timeout: float = 10.0) -> None:
        self.webhook_url = webhook_url
        self.channel = channel
        self.timeout = timeout

    def alert(self, event: Event) -> None:
        payload: dict[str, Any] = {}
        if self.channel:
            payload["channel"] = self.channel
        payload["text"] = format_alert(event)
        try:
            code = _post_json(self.webhook_url, payload, self.timeout)
        except (OSError, ValueError) as err:
            raise AlertDeliveryError(f"slack alerter: post: {err}") from err
        if not 200 <= code < 300:
            raise AlertDeliveryError(f"slack alerter: unexpected status {code}")