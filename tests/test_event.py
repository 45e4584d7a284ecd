from datetime import datetime, timedelta, timezone

import pytest

from cronwatch.job import Job
from cronwatch.watcher.event import Event, EventKind, new_event


def make_job(name: str) -> Job:
    return Job(name, "@every 1m", timedelta(seconds=10))


def test_new_event_missed():
    job = make_job("backup")
    before = datetime.now(timezone.utc)
    ev = new_event(EventKind.MISSED, job)
    after = datetime.now(timezone.utc)

    assert ev.kind is EventKind.MISSED
    assert ev.job is job
    assert before <= ev.observed_at <= after
    assert "backup" in ev.message
    assert "missed" in ev.message


def test_new_event_failure():
    ev = new_event(EventKind.FAILURE, make_job("deploy"))
    assert ev.kind is EventKind.FAILURE
    assert "failure" in ev.message


def test_new_event_recovered():
    ev = new_event(EventKind.RECOVERED, make_job("sync"))
    assert ev.kind is EventKind.RECOVERED
    assert "recovered" in ev.message


def test_new_event_unknown_kind():
    ev = new_event("unknown", make_job("test-job"))
    assert ev.kind == "unknown"
    assert "unknown" in ev.message


def test_string_kind_is_converted():
    ev = new_event("missed", make_job("backup"))
    assert ev.kind is EventKind.MISSED


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (EventKind.MISSED, 'job "backup" missed its scheduled run (detected at 2024-01-15T12:00:00Z)'),
        (EventKind.FAILURE, 'job "backup" reported a failure (detected at 2024-01-15T12:00:00Z)'),
        (EventKind.RECOVERED, 'job "backup" has recovered (detected at 2024-01-15T12:00:00Z)'),
        ("weird", 'job "backup": unknown event "weird" at 2024-01-15T12:00:00Z'),
    ],
)
def test_message_format(kind, expected):
    at = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    ev = new_event(kind, make_job("backup"), at)
    assert ev.message == expected
    assert ev.observed_at == at


def test_observed_at_converted_to_utc():
    tz = timezone(timedelta(hours=2))
    at = datetime(2024, 1, 15, 14, 0, 0, tzinfo=tz)
    ev = new_event(EventKind.MISSED, make_job("backup"), at)
    assert ev.observed_at.utcoffset() == timedelta(0)
    assert "2024-01-15T12:00:00Z" in ev.message


def test_event_is_immutable():
    ev = new_event(EventKind.MISSED, make_job("backup"))
    with pytest.raises(AttributeError):
        ev.message = "changed"  # type: ignore[misc]
    assert isinstance(ev, Event) and "backup" in ev.message