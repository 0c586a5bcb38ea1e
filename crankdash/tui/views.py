"""
Curses-based views for the job dashboard.

This module contains the dashboard renderer and the main render loop.

Architecture:
    - Background thread: StatusMutator toggles job statuses and sends
      snapshots
    - Main thread: RenderLoop drains the channel, redraws, polls for 'q'
    - Communication: a one-slot UpdateChannel between the two

Layout:
    +----------------------------------+
    | Crankshaft Monitoring Dashboard  |   header (3 rows)
    +----------------------------------+
    +----------------------------------+
    | 1: Job A - Running               |   job list (remaining rows)
    | 2: Job B - Completed             |
    +----------------------------------+
    +----------------------------------+
    | Press `q` to quit                |   footer (3 rows)
    +----------------------------------+
"""

import curses
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .channel import UpdateChannel
from .model import Job, copy_jobs
from .mutator import TICK_INTERVAL, StatusMutator
from .registry import JobRegistry
from ..utils.sessionlog import NullLogger

HEADER_TEXT = "Crankshaft Monitoring Dashboard"
FOOTER_TEXT = "Press `q` to quit"

# Rows taken by the bordered header and footer panels
HEADER_HEIGHT = 3
FOOTER_HEIGHT = 3

# Upper bound on how long a single getch() waits for input
POLL_INTERVAL_MS = 100

QUIT_KEY = ord("q")

# A line of text made of (text, curses attribute) segments
Segment = Tuple[str, int]


class LoopState(Enum):
    RUNNING = "running"
    TERMINATING = "terminating"


@dataclass(frozen=True)
class Palette:
    """Curses attributes used by the renderer. All zero means no styling."""
    header: int = 0
    job_id: int = 0
    footer: int = 0


def init_palette() -> Palette:
    """
    Set up color pairs for the dashboard.

    Must be called after curses has been initialised. Falls back to an
    unstyled palette on terminals without color support.
    """
    if not curses.has_colors():
        return Palette()

    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(1, curses.COLOR_CYAN, -1)
    curses.init_pair(2, curses.COLOR_YELLOW, -1)
    return Palette(
        header=curses.color_pair(1) | curses.A_BOLD,
        job_id=curses.color_pair(2),
        footer=curses.A_DIM,
    )


def job_line(job: Job, palette: Palette) -> List[Segment]:
    """Format one job row as styled segments: "<id>: <name> - <status>"."""
    return [
        (f"{job.id}: ", palette.job_id),
        (f"{job.name} - {job.status.value}", 0),
    ]


def _draw_panel(screen, top: int, height: int, width: int, max_rows: int,
                lines: Sequence[List[Segment]]) -> None:
    """
    Draw a bordered box and write lines inside it.

    Rows at or beyond max_rows are skipped and text is truncated to the
    inner width, so a small terminal clips the panel instead of failing.
    """
    if height < 2 or width < 2:
        return

    inner = width - 2
    rows = (
        ["+" + "-" * inner + "+"]
        + ["|" + " " * inner + "|"] * (height - 2)
        + ["+" + "-" * inner + "+"]
    )
    for offset, border in enumerate(rows):
        if top + offset >= max_rows:
            return
        screen.addstr(top + offset, 0, border)

    for offset, segments in enumerate(lines[: height - 2], start=1):
        y = top + offset
        if y >= max_rows:
            return
        x = 1
        for text, attr in segments:
            room = inner - (x - 1)
            if room <= 0:
                break
            screen.addstr(y, x, text[:room], attr)
            x += len(text[:room])


def render_dashboard(screen, jobs: Sequence[Job], palette: Optional[Palette] = None) -> None:
    """
    Draw one full frame of the dashboard.

    Args:
        screen: A curses window (or anything with the same drawing calls).
        jobs: The job list to display, in display order.
        palette: Attributes to style the frame with (default: unstyled).

    Raises:
        curses.error: Propagated from the drawing primitives.
    """
    palette = palette or Palette()

    screen.erase()
    h, w = screen.getmaxyx()
    # Never touch the last column; writing the bottom-right cell fails
    width = w - 1

    footer_top = max(HEADER_HEIGHT, h - FOOTER_HEIGHT)
    body_height = footer_top - HEADER_HEIGHT

    _draw_panel(screen, 0, HEADER_HEIGHT, width, h, [[(HEADER_TEXT, palette.header)]])
    _draw_panel(screen, HEADER_HEIGHT, body_height, width, h,
                [job_line(job, palette) for job in jobs])
    _draw_panel(screen, footer_top, FOOTER_HEIGHT, width, h, [[(FOOTER_TEXT, palette.footer)]])

    screen.refresh()


class RenderLoop:
    """
    Foreground loop: drain the channel, redraw, poll for the quit key.

    Attributes:
        jobs: The job list currently on screen.
        state: LoopState.RUNNING until 'q' is pressed.
        frames: Number of frames rendered so far.
    """

    def __init__(self, screen, jobs: List[Job], channel: UpdateChannel,
                 palette: Optional[Palette] = None, logger=None):
        self.screen = screen
        self.jobs = copy_jobs(jobs)
        self.channel = channel
        self.palette = palette or Palette()
        self.logger = logger or NullLogger()
        self.state = LoopState.RUNNING
        self.frames = 0

    def drain(self) -> bool:
        """
        Replace the displayed list with the pending snapshot, if any.

        Returns:
            bool: True if a new snapshot was taken.
        """
        snapshot = self.channel.try_receive()
        if snapshot is None:
            return False
        # Wholesale replacement; the previous list is discarded
        self.jobs = snapshot
        self.logger.info("render", "Snapshot received", jobs=len(snapshot))
        return True

    def iterate(self) -> LoopState:
        """Run one drain/render/poll cycle and return the resulting state."""
        self.drain()
        render_dashboard(self.screen, self.jobs, self.palette)
        self.frames += 1

        # getch() returns -1 when the poll times out
        if self.screen.getch() == QUIT_KEY:
            self.logger.info("render", "Quit key pressed")
            self.state = LoopState.TERMINATING
        return self.state

    def run(self) -> int:
        """
        Loop until the quit key is pressed.

        The channel is closed on every exit path, including render
        errors, so the mutator stops waiting on a receiver that is gone.

        Returns:
            int: The number of frames rendered.
        """
        self.screen.timeout(POLL_INTERVAL_MS)
        try:
            while self.state is LoopState.RUNNING:
                self.iterate()
        finally:
            self.channel.close()
        return self.frames


def run_dashboard(stdscr, registry: Optional[JobRegistry] = None, logger=None,
                  tick_interval: float = TICK_INTERVAL) -> int:
    """
    Run the interactive job dashboard.

    Args:
        stdscr: The curses standard screen (provided by curses.wrapper).
        registry: Jobs to start from (default: the seeded registry).
        logger: SessionLogger for the run (default: discard logs).
        tick_interval: Seconds between status mutator ticks.

    Returns:
        int: The number of frames rendered before the user quit.

    Note:
        Call this via curses.wrapper() so the terminal is restored even
        when rendering fails.
    """
    logger = logger or NullLogger()
    if registry is None:
        registry = JobRegistry.seeded()

    # Hide the cursor for a cleaner UI
    curses.curs_set(0)
    palette = init_palette()

    channel = UpdateChannel()
    mutator = StatusMutator(registry.snapshot(), channel,
                            interval=tick_interval, logger=logger)
    loop = RenderLoop(stdscr, registry.snapshot(), channel, palette, logger)

    mutator.start()
    try:
        return loop.run()
    finally:
        mutator.stop()
        logger.info("render", "Dashboard closed", frames=loop.frames, ticks=mutator.ticks)
