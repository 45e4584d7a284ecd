from datetime import timedelta

import pytest

from cronwatch.config import Config, JobConfig
from cronwatch.job import Job
from cronwatch.registry import (
    DuplicateJobError,
    JobNotFoundError,
    Registry,
    build_registry,
)


def make_config(*names):
    return Config(
        jobs=[
            JobConfig(name=n, schedule="* * * * *", grace_period=timedelta(minutes=1))
            for n in names
        ]
    )


def test_new_registry_ok():
    r = build_registry(make_config("jobA", "jobB"))
    assert len(r) == 2


def test_new_registry_duplicate_name():
    with pytest.raises(DuplicateJobError, match="dup"):
        build_registry(make_config("dup", "dup"))


def test_registry_get():
    r = build_registry(make_config("myJob"))
    assert r.get("myJob").name == "myJob"


def test_registry_get_missing():
    r = build_registry(make_config("present"))
    with pytest.raises(JobNotFoundError):
        r.get("absent")


def test_registry_all():
    r = build_registry(make_config("a", "b", "c"))
    assert len(r.all()) == 3
    assert {j.name for j in r.all()} == {"a", "b", "c"}


def test_registry_names_in_insertion_order():
    r = build_registry(make_config("z", "a", "m"))
    assert r.names() == ["z", "a", "m"]


def test_registry_add_and_contains():
    r = Registry()
    r.add(Job("x"))
    assert "x" in r
    assert "y" not in r
    with pytest.raises(DuplicateJobError):
        r.add(Job("x"))


def test_built_jobs_carry_interval():
    r = build_registry(make_config("a"))
    assert r.get("a").max_interval == timedelta(minutes=1)