import json
import threading
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from cronwatch.job import Job
from cronwatch.monitor.base import AlertDeliveryError
from cronwatch.monitor.pagerduty_alerter import PAGERDUTY_EVENTS_URL, PagerDutyAlerter
from cronwatch.watcher.event import EventKind, new_event


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        self.server.received.append((self.command, json.loads(body)))
        self.send_response(self.server.reply_status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, *args):
        pass


@pytest.fixture
def server(monkeypatch):
    for name in ("http_proxy", "HTTP_PROXY"):
        monkeypatch.delenv(name, raising=False)
    srv = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    srv.received = []
    srv.reply_status = 202
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()


def _url(srv):
    return f"http://127.0.0.1:{srv.server_address[1]}/v2/enqueue"


def _pagerduty_event():
    job = Job("nightly-backup", "0 2 * * *")
    job.record_failure()
    return new_event(EventKind.FAILURE, job)


def test_sends_on_failure(server):
    alerter = PagerDutyAlerter("placeholder", url=_url(server))
    alerter.alert(_pagerduty_event())

    method, body = server.received[0]
    assert method == "POST"
    assert body["routing_key"] == "placeholder"
    assert body["event_action"] == "trigger"
    assert body["client"] == "cronwatch"
    assert body["payload"]["source"] == "nightly-backup"
    assert body["payload"]["severity"] == "error"
    assert "nightly-backup" in body["payload"]["summary"]


def test_timestamp_comes_from_clock(server):
    fixed = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    alerter = PagerDutyAlerter("placeholder", url=_url(server), clock=lambda: fixed)
    alerter.alert(_pagerduty_event())
    assert server.received[0][1]["payload"]["timestamp"] == "2024-01-15T12:00:00Z"


def test_non_2xx_returns_error(server):
    server.reply_status = 500
    alerter = PagerDutyAlerter("placeholder", url=_url(server))
    with pytest.raises(AlertDeliveryError, match="unexpected status 500"):
        alerter.alert(_pagerduty_event())


def test_unreachable_returns_error():
    alerter = PagerDutyAlerter("placeholder", url="http://127.0.0.1:0/enqueue")
    with pytest.raises(AlertDeliveryError, match="send event"):
        alerter.alert(_pagerduty_event())


def test_default_url_is_events_api():
    alerter = PagerDutyAlerter("placeholder")
    assert alerter.url == PAGERDUTY_EVENTS_URL
    assert alerter.url == "https://events.pagerduty.com/v2/enqueue"