"""Shared fixtures: fake curses screen and a recording logger."""

from __future__ import annotations

import curses

import pytest

from crankdash.tui.model import Job, JobStatus


class FakeScreen:
    """
    Stand-in for a curses window.

    Records every refreshed frame as a list of row strings. getch() pops
    from a scripted key list; an item may be a callable, which is invoked
    and its return value used as the key. Once the script runs out,
    getch() returns -1 (poll timeout).
    """

    def __init__(self, keys=(), size=(24, 80), fail_on_row=None):
        self.keys = list(keys)
        self.size = size
        self.fail_on_row = fail_on_row
        self.frames: list[list[str]] = []
        self.attrs: list[tuple[int, int, str, int]] = []
        self.timeout_ms = None
        self._rows: dict[int, list[str]] = {}

    def erase(self):
        self._rows = {}
        self.attrs = []

    def getmaxyx(self):
        return self.size

    def addstr(self, y, x, text, attr=0):
        h, w = self.size
        if y == self.fail_on_row:
            raise curses.error("addstr() returned ERR")
        if y >= h or x + len(text) > w:
            raise curses.error("addstr() returned ERR")
        row = self._rows.setdefault(y, [" "] * w)
        row[x:x + len(text)] = list(text)
        self.attrs.append((y, x, text, attr))

    def refresh(self):
        h, _ = self.size
        self.frames.append(
            ["".join(self._rows.get(y, [])).rstrip() for y in range(h)]
        )

    def timeout(self, ms):
        self.timeout_ms = ms

    def getch(self):
        if not self.keys:
            return -1
        key = self.keys.pop(0)
        if callable(key):
            key = key()
        return key


class RecordingLogger:
    """Collects (component, level, message, fields) tuples instead of writing a file."""

    def __init__(self):
        self.records: list[tuple[str, str, str, dict]] = []

    def log(self, component, level, message, **fields):
        self.records.append((component, level.upper(), message, fields))

    def info(self, component, message, **fields):
        self.log(component, "INFO", message, **fields)

    def warn(self, component, message, **fields):
        self.log(component, "WARN", message, **fields)

    def error(self, component, message, **fields):
        self.log(component, "ERROR", message, **fields)

    def levels(self, component):
        return [level for comp, level, _, _ in self.records if comp == component]


@pytest.fixture
def seed_jobs():
    return [
        Job(1, "Job A", JobStatus.RUNNING),
        Job(2, "Job B", JobStatus.COMPLETED),
    ]


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture(autouse=True)
def isolated_log_root(tmp_path, monkeypatch):
    """Keep session logs out of the working tree."""
    monkeypatch.setenv("CRANKDASH_LOG_ROOT", str(tmp_path / "logs"))
    yield tmp_path / "logs"
