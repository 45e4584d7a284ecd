from datetime import datetime, timezone

from cronwatch.watcher.healthcheck import HealthCheck


def test_initially_unknown():
    hc = HealthCheck()
    assert hc.status("backup") is None


def test_record_healthy():
    hc = HealthCheck()
    hc.record_healthy("backup")
    s = hc.status("backup")
    assert s is not None
    assert s.healthy is True
    assert s.job_name == "backup"
    assert s.message == "job ran on time"


def test_record_unhealthy():
    hc = HealthCheck()
    hc.record_unhealthy("backup", "missed run")
    s = hc.status("backup")
    assert s is not None
    assert s.healthy is False
    assert s.message == "missed run"


def test_overwrites_previous_state():
    hc = HealthCheck()
    hc.record_unhealthy("backup", "missed run")
    hc.record_healthy("backup")
    assert hc.status("backup").healthy is True


def test_last_check_timestamp():
    now = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    hc = HealthCheck(clock=lambda: now)
    hc.record_healthy("db-dump")
    assert hc.status("db-dump").last_check == now


def test_snapshot():
    hc = HealthCheck()
    hc.record_healthy("job-a")
    hc.record_unhealthy("job-b", "timeout")
    snap = hc.snapshot()
    assert len(snap) == 2
    assert {s.job_name: s.healthy for s in snap} == {"job-a": True, "job-b": False}


def test_snapshot_is_independent():
    hc = HealthCheck()
    hc.record_healthy("job-a")
    snap = hc.snapshot()
    snap[0].healthy = False
    assert hc.status("job-a").healthy is True


def test_status_is_independent():
    hc = HealthCheck()
    hc.record_healthy("job-a")
    s = hc.status("job-a")
    s.healthy = False
    assert hc.status("job-a").healthy is True