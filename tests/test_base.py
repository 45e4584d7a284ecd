import logging
from datetime import datetime, timezone

import pytest

from cronwatch.job import Job
from cronwatch.monitor.base import Alerter, LogAlerter, format_alert
from cronwatch.watcher.event import EventKind, new_event

AT = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _event(name="backup"):
    job = Job(name, "@hourly")
    job.record_missed()
    return new_event(EventKind.MISSED, job, at=AT)


def test_alerter_is_abstract():
    with pytest.raises(TypeError):
        Alerter()


def test_format_alert_contains_fields():
    event = _event()
    text = format_alert(event)
    assert text.startswith("job=backup status=missed message=")
    assert event.message in text
    assert text.endswith("at=2024-01-15T12:00:00Z")


def test_log_alerter_writes_record(caplog):
    logger = logging.getLogger("test.cronwatch.base")
    alerter = LogAlerter("PAGE", logger)
    event = _event("sync")
    with caplog.at_level(logging.WARNING, logger="test.cronwatch.base"):
        assert alerter.alert(event) is None
    assert len(caplog.records) == 1
    line = caplog.records[0].getMessage()
    assert line.startswith("[PAGE] ")
    assert "job=sync" in line
    assert "status=missed" in line
    assert f"message={event.message}" in line


def test_log_alerter_default_prefix(caplog):
    alerter = LogAlerter("")
    assert alerter.prefix == "ALERT"
    with caplog.at_level(logging.WARNING, logger="cronwatch.monitor"):
        alerter.alert(_event())
    assert caplog.records[0].getMessage().startswith("[ALERT] ")