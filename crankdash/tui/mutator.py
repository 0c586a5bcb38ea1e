"""
Background status mutator that simulates job activity.

This module runs a worker thread that flips every job's status on a
fixed timer and publishes the whole list to the render loop through an
UpdateChannel.

Purpose:
    The dashboard has no real job source. The mutator stands in for one,
    so the render loop has a steady stream of snapshots to display.

Design Decisions:
    - The mutator owns a private copy of the job list; it never shares it
    - Every tick publishes one complete snapshot, never a partial update
    - Stopping is explicit: stop() wakes the interval wait and any send
      that is blocked on a full channel
"""

import threading
from typing import List, Optional

from .channel import UpdateChannel
from .model import Job, JobStatus, copy_jobs
from ..utils.sessionlog import NullLogger

# Seconds between ticks
TICK_INTERVAL = 2.0


def toggle_status(status: JobStatus) -> JobStatus:
    """
    Return the status a job moves to on the next tick.

    RUNNING becomes COMPLETED; every other status becomes RUNNING.
    """
    if status is JobStatus.RUNNING:
        return JobStatus.COMPLETED
    return JobStatus.RUNNING


class StatusMutator:
    """
    Flip job statuses on a timer and publish snapshots.

    Attributes:
        channel: Where snapshots are sent.
        interval: Seconds to wait before each tick.
        ticks: Number of ticks performed so far.

    Example:
        >>> mutator = StatusMutator(registry.snapshot(), channel)
        >>> mutator.start()
        >>> ...
        >>> mutator.stop()
    """

    def __init__(
        self,
        jobs: List[Job],
        channel: UpdateChannel,
        interval: float = TICK_INTERVAL,
        logger=None,
    ):
        self._jobs = copy_jobs(jobs)
        self.channel = channel
        self.interval = interval
        self.logger = logger or NullLogger()
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def snapshot(self) -> List[Job]:
        """Return a copy of the mutator's current job list."""
        return copy_jobs(self._jobs)

    def tick(self) -> List[Job]:
        """
        Toggle every job's status once and return the resulting snapshot.

        The private list is replaced in one assignment, so a snapshot
        taken at any point reflects a single tick.
        """
        self._jobs = [job.with_status(toggle_status(job.status)) for job in self._jobs]
        self.ticks += 1
        return self.snapshot()

    def run(self) -> None:
        """
        Tick and publish until stop() is called.

        Intended to run on the worker thread started by start(), but can
        be called directly.
        """
        while not self._stop.wait(self.interval):
            snapshot = self.tick()
            if self.channel.send(snapshot, stop=self._stop):
                self.logger.info("mutator", "Tick published", tick=self.ticks, jobs=len(snapshot))
            elif not self._stop.is_set():
                # Receiver is gone; nothing is listening for this snapshot.
                self.logger.warn("mutator", "Tick dropped: channel closed", tick=self.ticks)

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None:
            raise RuntimeError("StatusMutator already started")
        self._thread = threading.Thread(
            target=self.run, name="status-mutator", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Signal the worker to stop and wait for it to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        """True while the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()
