"""Loading and validating the YAML configuration file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    """Raised when the configuration cannot be read or is invalid."""


@dataclass
class JobConfig:
    """Configuration for a single monitored cron job."""

    name: str = ""
    schedule: str = ""
    command: str = ""
    timeout: timedelta | None = None
    max_interval: timedelta | None = None
    grace_period: timedelta = timedelta(0)


@dataclass
class EmailConfig:
    """SMTP alert settings."""

    smtp_host: str = ""
    smtp_port: int = 25
    username: str = ""
    password: str = ""
    from_addr: str = ""
    to: list[str] = field(default_factory=list)
    enabled: bool = True


@dataclass
class WebhookConfig:
    """HTTP webhook alert settings."""

    url: str = ""


@dataclass
class SlackConfig:
    """Slack incoming-webhook alert settings."""

    webhook_url: str = ""
    channel: str = ""


@dataclass
class PagerDutyConfig:
    """PagerDuty events alert settings."""

    routing_key: str = ""


@dataclass
class AlertConfig:
    """Alert destinations; a section left out of the file is None."""

    email: EmailConfig | None = None
    webhook: WebhookConfig | None = None
    slack: SlackConfig | None = None
    pagerduty: PagerDutyConfig | None = None


@dataclass
class Config:
    """Top-level application configuration."""

    log_level: str = "info"
    jobs: list[JobConfig] = field(default_factory=list)
    alerts: AlertConfig = field(default_factory=AlertConfig)


_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _parse_duration(value: Any, where: str) -> timedelta:
    """Parse a duration such as "30m", "1h30m" or "250ms"; bare numbers are seconds."""
    if isinstance(value, bool):
        raise ConfigError(f"config: {where}: invalid duration {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise ConfigError(f"config: {where}: invalid duration {value!r}")
    text = value.strip()
    sign = 1
    if text and text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ConfigError(f"config: {where}: invalid duration {value!r}")
    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ConfigError(f"config: {where}: invalid duration {value!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    return timedelta(seconds=sign * total)


def _string(mapping: dict, key: str, where: str) -> str:
    value = mapping.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigError(f"config: {where}: {key} must be a string")


def _integer(mapping: dict, key: str, where: str, default: int) -> int:
    value = mapping.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"config: {where}: {key} must be an integer")
    return value


def _optional_duration(mapping: dict, key: str, where: str) -> timedelta | None:
    if mapping.get(key) is None:
        return None
    return _parse_duration(mapping[key], f"{where}: {key}")


def _job(index: int, item: Any) -> JobConfig:
    where = f"job[{index}]"
    if not isinstance(item, dict):
        raise ConfigError(f"config: {where}: expected a mapping")
    grace = _optional_duration(item, "grace_period", where)
    if grace is None:
        grace = timedelta(minutes=_integer(item, "grace_minutes", where, 0))
    return JobConfig(
        name=_string(item, "name", where),
        schedule=_string(item, "schedule", where),
        command=_string(item, "command", where),
        timeout=_optional_duration(item, "timeout", where),
        max_interval=_optional_duration(item, "max_interval", where),
        grace_period=grace,
    )


def _recipients(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError("config: alerts.email: to must be a string or a list of strings")


def _email(raw: Any) -> EmailConfig | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return EmailConfig(to=[raw])
    if not isinstance(raw, dict):
        raise ConfigError("config: alerts.email: expected a mapping or an address")
    where = "alerts.email"
    enabled = raw.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(f"config: {where}: enabled must be a boolean")
    return EmailConfig(
        smtp_host=_string(raw, "smtp_host", where),
        smtp_port=_integer(raw, "smtp_port", where, 25),
        username=_string(raw, "username", where),
        password=_string(raw, "password", where),
        from_addr=_string(raw, "from", where),
        to=_recipients(raw.get("to")),
        enabled=enabled,
    )


def _simple_section(raw: Any, name: str, cls: type, key: str) -> Any:
    """Parse a section holding one main string; a bare string is shorthand for it."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return cls(**{key: raw})
    if not isinstance(raw, dict):
        raise ConfigError(f"config: alerts.{name}: expected a mapping")
    where = f"alerts.{name}"
    values = {f: _string(raw, f, where) for f in cls.__dataclass_fields__}
    return cls(**values)


def _alerts(raw: Any) -> AlertConfig:
    if raw is None:
        return AlertConfig()
    if not isinstance(raw, dict):
        raise ConfigError("config: alerts: expected a mapping")
    return AlertConfig(
        email=_email(raw.get("email")),
        webhook=_simple_section(raw.get("webhook"), "webhook", WebhookConfig, "url"),
        slack=_simple_section(raw.get("slack"), "slack", SlackConfig, "webhook_url"),
        pagerduty=_simple_section(
            raw.get("pagerduty"), "pagerduty", PagerDutyConfig, "routing_key"
        ),
    )


def load(path: str | Path) -> Config:
    """Read, parse and validate the YAML configuration at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigError(f"config: read file: {err}") from err

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ConfigError(f"config: parse yaml: {err}") from err

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("config: parse yaml: top level must be a mapping")

    log_level = _string(raw, "log_level", "log_level") or "info"

    jobs_raw = raw.get("jobs") or []
    if not isinstance(jobs_raw, list):
        raise ConfigError("config: jobs must be a list")
    if not jobs_raw:
        raise ConfigError("config: no jobs defined")

    jobs = [_job(i, item) for i, item in enumerate(jobs_raw)]
    for i, job in enumerate(jobs):
        if not job.name:
            raise ConfigError(f"config: job[{i}]: name is required")
        if not job.schedule:
            raise ConfigError(f'config: job "{job.name}": schedule is required')

    return Config(log_level=log_level, jobs=jobs, alerts=_alerts(raw.get("alerts")))