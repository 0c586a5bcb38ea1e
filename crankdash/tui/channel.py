"""
One-slot snapshot channel between the status mutator and the render loop.

Purpose:
    The mutator produces a full job list every tick and the render loop
    picks it up whenever it next polls. The channel holds at most one
    pending snapshot: a second send waits until the first is taken, so a
    slow render loop throttles the producer instead of losing updates.

Design Decisions:
    - Backed by queue.Queue(maxsize=1), which does its own locking
    - Sends wait in short slices so they can notice a stop request or a
      closed receiver instead of blocking forever
    - A failed send is reported through the return value, never raised
"""

import threading
from queue import Empty, Full, Queue
from typing import List, Optional

from .model import Job

# How long a blocked send waits before re-checking for stop/close.
SEND_WAIT_SLICE = 0.05


class UpdateChannel:
    """
    Single-producer, single-consumer channel with capacity one.

    Example:
        >>> channel = UpdateChannel()
        >>> channel.send(jobs)
        True
        >>> channel.try_receive() == jobs
        True
        >>> channel.try_receive() is None
        True
    """

    def __init__(self):
        self._queue: Queue = Queue(maxsize=1)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        """True once the receiving side has gone away."""
        return self._closed.is_set()

    def close(self) -> None:
        """
        Mark the receiver as gone.

        Any send that is waiting for capacity, and every later send,
        returns False.
        """
        self._closed.set()

    def pending(self) -> bool:
        """Report whether a snapshot is waiting to be received."""
        return not self._queue.empty()

    def send(self, snapshot: List[Job], stop: Optional[threading.Event] = None) -> bool:
        """
        Deliver a snapshot, waiting while the previous one is unconsumed.

        Args:
            snapshot: The complete job list to publish.
            stop: Optional event; if set while waiting, the send gives up.

        Returns:
            bool: True if the snapshot was queued, False if the receiver
                  closed the channel or the stop event fired first.
        """
        while not self.closed:
            if stop is not None and stop.is_set():
                return False
            try:
                self._queue.put(snapshot, timeout=SEND_WAIT_SLICE)
                return True
            except Full:
                continue
        return False

    def try_receive(self) -> Optional[List[Job]]:
        """
        Take the pending snapshot without waiting.

        Returns:
            The pending job list, or None if nothing new has arrived.
        """
        try:
            return self._queue.get_nowait()
        except Empty:
            return None
