"""
Data models for the job dashboard.

This module defines the job record shown by the dashboard and the status
values a job can take.

Purpose:
    The registry, the status mutator and the renderer all pass job lists
    around. Keeping the record frozen means a list handed to another
    component can never be edited behind its back; a status change always
    produces a new record.

Note:
    Only two statuses exist. The mutator's toggle folds every status that
    is not RUNNING into RUNNING, so adding a third value here would need a
    decision about where it toggles to.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List


class JobStatus(Enum):
    """Lifecycle state of a job as shown on the dashboard."""

    RUNNING = "Running"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class Job:
    """
    A single job row on the dashboard.

    Attributes:
        id: Unique identifier, stable for the lifetime of the process.
        name: Human-readable label. Never changes after creation.
        status: Current JobStatus. The only field that changes over time.
    """
    id: int
    name: str
    status: JobStatus

    def with_status(self, status: JobStatus) -> "Job":
        """Return a copy of this job carrying a different status."""
        return replace(self, status=status)


def copy_jobs(jobs) -> List[Job]:
    """
    Return an independent, order-preserving copy of a job list.

    Job records are immutable, so a shallow list copy is enough to give
    the caller a list nobody else can append to or reorder.
    """
    return list(jobs)
