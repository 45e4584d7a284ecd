import pytest
from werkzeug.test import Client
from werkzeug.wrappers import Request

from cronwatch.api.metrics_view import MetricsPayload, metrics_handler
from cronwatch.watcher.metrics import Metrics


def _scrape(checks=0, missed=0, alerted=0):
    m = Metrics()
    for record, times in ((m.record_check, checks), (m.record_missed, missed), (m.record_alerted, alerted)):
        for _ in range(times):
            record()
    return Client(Request.application(metrics_handler(m))).get("/metrics")


@pytest.mark.parametrize(
    "counts, expected",
    [((10, 2, 1), MetricsPayload(10, 2, 1)), ((0, 0, 0), MetricsPayload(0, 0, 0))],
)
def test_payload_matches_counters(counts, expected):
    resp = _scrape(*counts)
    assert resp.status_code == 200
    assert MetricsPayload(**resp.json) == expected


def test_content_type():
    assert _scrape().headers["Content-Type"] == "application/json"