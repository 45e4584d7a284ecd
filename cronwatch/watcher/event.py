"""Events observed by the watcher during a check cycle.

Every event has a kind (missed, failure or recovered), the affected job and
the time it was observed. Events are produced by the watcher loop and handed
to the alerting pipeline, which decides how to surface them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum

from cronwatch.job import Job


class EventKind(StrEnum):
    """Classification of what happened during a watcher cycle."""

    MISSED = "missed"
    FAILURE = "failure"
    RECOVERED = "recovered"


@dataclass(frozen=True)
class Event:
    """A single watcher observation."""

    kind: EventKind | str
    job: Job
    observed_at: datetime
    message: str


def _rfc3339(at: datetime) -> str:
    if at.tzinfo is None:
        at = at.replace(tzinfo=timezone.utc)
    text = at.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _format_message(kind: EventKind | str, job: Job, at: datetime) -> str:
    stamp = _rfc3339(at)
    if kind is EventKind.MISSED:
        return f'job "{job.name}" missed its scheduled run (detected at {stamp})'
    if kind is EventKind.FAILURE:
        return f'job "{job.name}" reported a failure (detected at {stamp})'
    if kind is EventKind.RECOVERED:
        return f'job "{job.name}" has recovered (detected at {stamp})'
    return f'job "{job.name}": unknown event "{kind}" at {stamp}'


def new_event(kind: EventKind | str, job: Job, at: datetime | None = None) -> Event:
    """Build an Event for ``job``; ``at`` defaults to the current UTC time."""
    try:
        kind = EventKind(kind)
    except ValueError:
        kind = str(kind)
    if at is None:
        at = datetime.now(timezone.utc)
    elif at.tzinfo is not None:
        at = at.astimezone(timezone.utc)
    return Event(kind=kind, job=job, observed_at=at, message=_format_message(kind, job, at))