from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from werkzeug.test import Client
from werkzeug.wrappers import Request

from cronwatch.api.history_view import history_handler

BACKUP_MISSED = {
    "job_name": "backup",
    "kind": "missed",
    "message": "backup missed",
}


def _history_client(records):
    provider = SimpleNamespace(snapshot=lambda: records)
    return Client(Request.application(history_handler(provider)))


def test_returns_records():
    stamp = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    record = SimpleNamespace(timestamp=stamp, **BACKUP_MISSED)
    resp = _history_client([record]).get("/history")
    assert resp.status_code == 200
    assert resp.json == [{**BACKUP_MISSED, "timestamp": "2024-01-01T12:00:00Z"}]


@pytest.mark.parametrize("records", [None, []])
def test_empty_list_as_json(records):
    resp = _history_client(records).get("/history")
    assert (resp.status_code, resp.json) == (200, [])
    assert resp.headers["Content-Type"] == "application/json"


def test_method_not_allowed():
    assert _history_client([]).post("/history").status_code == 405