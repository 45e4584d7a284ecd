# cronwatch

cronwatch keeps an eye on scheduled jobs. Each job declares the longest it
may go between runs; when a job has not reported in within that interval,
cronwatch marks it as missed and hands it on, either to a callback of yours
or to an alerter. A small WSGI application reports the state of every job
for health probes and dashboards.

## What it provides

### Configuration

`cronwatch.config.load(path)` reads a YAML file and returns a `Config` with
`log_level`, `jobs` (a list of `JobConfig`) and `alerts` (an `AlertConfig`
with optional `email`, `webhook`, `slack` and `pagerduty` sections). The log
level falls back to `info`. `ConfigError` is raised when the file cannot be
read or parsed, when no jobs are defined, or when a job lacks a `name` or a
`schedule`.

Each job may give `max_interval`, `timeout` and `grace_period` as durations
such as `"30m"`, `"1h30m"` or `"250ms"` (a bare number is seconds), or
`grace_minutes` as a whole number of minutes.

### Jobs and the registry

`cronwatch.job.Job` holds the state of one job: its `status`
(`Status.OK`, `Status.FAILED`, `Status.MISSED`, `Status.UNKNOWN`), last run,
last success and failure, failure count and missed count. Jobs are updated
with `record_success`, `record_failure` and `record_missed`; `is_missed(now)`
says whether the last run plus `max_interval` lies in the past, and
`snapshot()` returns a consistent `JobSnapshot`. A job with no maximum
interval is never reported missed.

`cronwatch.job.job_from_config(cfg)` builds a job, taking `max_interval` from
the configuration or, failing that, the grace period.
`cronwatch.registry.build_registry(cfg)` builds a `Registry` from a loaded
configuration. The registry rejects duplicate names with `DuplicateJobError`,
and `Registry.get` raises `JobNotFoundError` for an unknown name; it also
offers `add`, `all`, `names`, `len()`, iteration and `in`.

### The watch loops

- `cronwatch.watcher.watcher.Watcher(registry, interval, notify)` checks the
  registry on every tick of a background thread and calls `notify(job)` for
  each job whose deadline has passed. It can be used as a context manager;
  `check(now)` runs one pass by hand and returns the missed jobs.
- `cronwatch.monitor.monitor.Monitor(registry, interval, alerter)` does the
  same but sends a missed-run `Event` for each overdue job straight to an
  alerter, logging any delivery failure.

### Building blocks in `cronwatch.watcher`

- `backoff.Backoff` – delays doubling from a base up to a cap.
- `circuit.Circuit` – a closed / open / half-open circuit breaker.
- `dedup.Dedup` – drops an identical alert for a job within a window.
- `ratelimit.RateLimit` and `throttle.Throttle` – at most one alert per key
  per cooldown.
- `retry.Retry` – call a function up to a fixed number of times, re-raising
  its last exception.
- `metrics.Metrics` – counters for checks, missed jobs and alerts sent.
- `healthcheck.HealthCheck` – the current health of each job.
- `history.History` – a bounded record of recent check cycles.
- `event.Event`, `event.EventKind` and `event.new_event` – what the loops
  hand to alerters.
- `syslog_writer.SyslogWriter` – timestamped, syslog-friendly log lines.
- `ticker.RealTicker` and `ticker.FakeTicker` – a clock for a loop, and one
  you drive by hand in tests.

Durations throughout are `datetime.timedelta` values.

### Alerters in `cronwatch.monitor`

Every alerter subclasses `base.Alerter` and implements `alert(event)`,
raising an exception when delivery fails (the package's own alerters raise
`base.AlertDeliveryError`).

- `base.LogAlerter` – writes alerts to a logger; `base.format_alert(event)`
  gives the same text without logging it.
- `webhook_alerter.WebhookAlerter` – POSTs the job's name, status, a message
  and a timestamp as JSON.
- `slack_alerter.SlackAlerter` – posts a text message to a Slack incoming
  webhook, optionally naming a channel.
- `pagerduty_alerter.PagerDutyAlerter` – sends a trigger event to the
  PagerDuty events API.

Wrappers that sit in front of any alerter:

- `retry_alerter.RetryAlerter` – retries failed deliveries.
- `ratelimited_alerter.RateLimitedAlerter` – at most one alert per job per
  cooldown; a failed delivery clears the limit so the next check retries.
- `circuit_alerter.CircuitAlerter` – a circuit breaker per job; while a
  job's circuit is open, alerts raise `CircuitOpenError`.

### HTTP interface

`cronwatch.api.router.new_router(RouterConfig(registry=..., metrics=...,
health_check=...))` returns a WSGI application serving:

| Route           | Response                                                  |
|-----------------|-----------------------------------------------------------|
| `GET /healthz`  | per-job health; `200` when all are healthy, `503` if not  |
| `GET /metrics`  | `total_checks`, `total_missed`, `total_alerted`           |
| `GET /api/jobs` | every job with its schedule, status and last-run times    |

Other paths answer `404`. `cronwatch.api.history_view.history_handler(provider)`
is a further handler, not mounted by the router, that lists entries from any
object with a `snapshot()` method as JSON.

## Configuration

```yaml
log_level: info

jobs:
  - name: backup
    schedule: "0 2 * * *"
    max_interval: 25h
  - name: cleanup
    schedule: "@hourly"
    grace_minutes: 90

alerts:
  webhook:
    url: https://hooks.example.com/cronwatch
  slack:
    webhook_url: https://hooks.example.com/slack
    channel: "#alerts"
```

Every job needs a `name` and a `schedule`; at least one job must be defined.

## Using it from Python

```python
from datetime import timedelta

from werkzeug.serving import run_simple

from cronwatch.api.router import RouterConfig, new_router
from cronwatch.config import load
from cronwatch.monitor.monitor import Monitor
from cronwatch.monitor.webhook_alerter import WebhookAlerter
from cronwatch.registry import build_registry
from cronwatch.watcher.healthcheck import HealthCheck
from cronwatch.watcher.metrics import Metrics

cfg = load("cronwatch.yaml")
registry = build_registry(cfg)

metrics = Metrics()
health = HealthCheck()
app = new_router(RouterConfig(registry=registry, metrics=metrics, health_check=health))

alerter = WebhookAlerter(cfg.alerts.webhook.url)
with Monitor(registry, timedelta(seconds=30), alerter):
    run_simple("0.0.0.0", 8080, app)
```

Jobs report their own outcomes:

```python
from datetime import datetime, timezone

job = registry.get("backup")
job.record_success(datetime.now(timezone.utc))
health.record_healthy("backup")
```

The guard types can be used on their own:

```python
from datetime import timedelta

from cronwatch.watcher.ratelimit import RateLimit

limit = RateLimit(timedelta(minutes=5))
if limit.allow("backup"):
    ...  # forward the alert
```

## What it does not do

- There is no command-line program or daemon; you assemble the pieces in
  your own Python code, as above.
- The `alerts` section of the configuration is parsed but nothing turns it
  into alerters for you; construct the alerters you want yourself.
- There is no e-mail alerter, and no alerter that fans one event out to
  several backends; either can be written as an `Alerter` subclass.
- Schedules are recorded and reported but not interpreted; a missed run is
  judged only by the job's maximum interval.
- All state is held in memory and is lost when the process exits.
- The loops do not update `Metrics`, `HealthCheck` or `History`; record
  into them from your own code.

## Running the tests

The test suite uses pytest, available through the `test` extra.