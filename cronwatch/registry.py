"""A name-indexed collection of monitored jobs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from cronwatch.config import Config
from cronwatch.job import Job, job_from_config


class DuplicateJobError(ValueError):
    """Raised when two jobs share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'duplicate job name: "{name}"')
        self.name = name


class JobNotFoundError(LookupError):
    """Raised when no job has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'job not found: "{name}"')
        self.name = name


class Registry:
    """All monitored jobs, in the order they were added."""

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self._jobs: dict[str, Job] = {}
        for job in jobs:
            self.add(job)

    def add(self, job: Job) -> None:
        """Register a job; names must be unique."""
        if job.name in self._jobs:
            raise DuplicateJobError(job.name)
        self._jobs[job.name] = job

    def get(self, name: str) -> Job:
        """Return the job called ``name``."""
        try:
            return self._jobs[name]
        except KeyError:
            raise JobNotFoundError(name) from None

    def all(self) -> list[Job]:
        """Return every registered job."""
        return list(self._jobs.values())

    def names(self) -> list[str]:
        """Return the names of every registered job."""
        return list(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self.all())

    def __contains__(self, name: object) -> bool:
        return name in self._jobs


def build_registry(cfg: Config) -> Registry:
    """Build a Registry from the application configuration."""
    return Registry(job_from_config(jcfg) for jcfg in cfg.jobs)