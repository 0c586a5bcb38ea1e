"""
In-memory job registry for the dashboard.

This module holds the ordered list of jobs the dashboard starts from.
It is built once at startup and then copied into the status mutator;
nothing is read from or written to disk.

Purpose:
    The dashboard needs a single place that owns the initial job list,
    hands out sequential ids, and produces independent copies for the
    components that consume it.
"""

from typing import Iterable, List, Optional, Tuple

from .model import Job, JobStatus, copy_jobs

# Jobs shown when the dashboard starts.
# Order here is the order rows are displayed in.
SEED_JOBS: List[Tuple[str, JobStatus]] = [
    ("Job A", JobStatus.RUNNING),
    ("Job B", JobStatus.COMPLETED),
]


class JobRegistry:
    """
    Ordered, in-memory collection of jobs.

    Ids are assigned sequentially from 1 in insertion order, so every
    job created through the registry has a unique id.

    Example:
        >>> registry = JobRegistry.seeded()
        >>> [job.name for job in registry.snapshot()]
        ['Job A', 'Job B']
    """

    def __init__(self, jobs: Optional[Iterable[Job]] = None):
        self._jobs: List[Job] = list(jobs or [])
        self._next_id = max((job.id for job in self._jobs), default=0) + 1

    @classmethod
    def seeded(cls) -> "JobRegistry":
        """Build a registry holding the fixed startup jobs."""
        registry = cls()
        for name, status in SEED_JOBS:
            registry.add(name, status)
        return registry

    def add(self, name: str, status: JobStatus = JobStatus.RUNNING) -> Job:
        """
        Append a new job and return it.

        Args:
            name: Label shown on the dashboard.
            status: Initial status (default: RUNNING).

        Returns:
            Job: The created record, carrying the next sequential id.
        """
        job = Job(id=self._next_id, name=name, status=status)
        self._next_id += 1
        self._jobs.append(job)
        return job

    def snapshot(self) -> List[Job]:
        """Return an independent copy of the jobs in insertion order."""
        return copy_jobs(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)
