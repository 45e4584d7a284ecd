from datetime import timedelta

import pytest

from cronwatch.job import Job
from cronwatch.monitor.base import AlertDeliveryError, Alerter
from cronwatch.monitor.retry_alerter import RetryAlerter
from cronwatch.watcher.event import EventKind, new_event


class _Flaky(Alerter):
    """Fails with the queued errors, then succeeds."""

    def __init__(self, errs=()):
        self.errs = list(errs)
        self.events = []

    def alert(self, event):
        self.events.append(event)
        if self.errs:
            raise self.errs.pop(0)


def _retrying(failures, attempts=3, delay=timedelta(0)):
    inner = _Flaky([RuntimeError(f"fail {i}") for i in range(failures)])
    slept = []
    ra = RetryAlerter(inner, attempts, delay, sleep=slept.append)
    return ra, inner, slept


@pytest.mark.parametrize("failures, calls", [(0, 1), (2, 3)])
def test_eventual_success(failures, calls):
    ra, inner, _ = _retrying(failures)
    event = new_event(EventKind.MISSED, Job("job-retry", "@hourly"))
    ra.alert(event)
    assert inner.events == [event] * calls


def test_raises_after_max_attempts():
    ra, inner, _ = _retrying(3)
    with pytest.raises(AlertDeliveryError, match="after 3 attempts") as info:
        ra.alert(new_event(EventKind.MISSED, Job("job-fail", "@hourly")))
    assert len(inner.events) == 3
    assert str(info.value.__cause__) == "fail 2"


def test_defaults_applied():
    ra, inner, _ = _retrying(0, attempts=0)
    ra.alert(new_event(EventKind.MISSED, Job("job-defaults", "@hourly")))
    assert (ra.max_attempts, len(inner.events)) == (3, 1)


@pytest.mark.parametrize(
    "attempts, delay, expected_delay, expected_sleeps",
    [
        (3, timedelta(milliseconds=500), timedelta(milliseconds=500), [0.5, 0.5]),
        (2, timedelta(seconds=-1), timedelta(0), []),
    ],
)
def test_sleeps_between_attempts(attempts, delay, expected_delay, expected_sleeps):
    ra, _, slept = _retrying(attempts, attempts, delay)
    with pytest.raises(AlertDeliveryError):
        ra.alert(new_event(EventKind.MISSED, Job("job-sleep", "@hourly")))
    assert ra.delay == expected_delay
    assert slept == expected_sleeps