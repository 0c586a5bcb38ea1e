"""
Session logging for the dashboard.

While the dashboard runs, curses owns the terminal, so nothing can be
printed. Each run instead appends to its own log file, which can be
followed with `tail -f` from another terminal.

Line Format:
    <timestamp> [session=<id>] [component=<name>] <LEVEL> <message> [key=value ...]

Both the render loop and the mutator thread write to the same file, so
each line is written with a single append under a lock.
"""

from __future__ import annotations

import datetime
import os
import threading
import uuid
from pathlib import Path

LEVELS = ("INFO", "WARN", "ERROR")


def log_root() -> Path:
    """
    Return the root directory for dashboard logs.

    CRANKDASH_LOG_ROOT wins when set; otherwise ./logs under the current
    working directory.
    """
    root = os.environ.get("CRANKDASH_LOG_ROOT")
    return Path(root) if root else Path.cwd() / "logs"


def session_log_path(session_id: str) -> Path:
    """Resolve the log file path for a dashboard session."""
    return log_root() / "sessions" / f"{session_id}.log"


def format_fields(fields: dict) -> str:
    """Render extra fields as space separated key=value pairs, in call order."""
    return " ".join(f"{key}={value}" for key, value in fields.items())


class SessionLogger:
    """
    Append-only log file for one dashboard session.

    Example:
        >>> logger = SessionLogger()
        >>> logger.info("mutator", "Tick published", tick=1, jobs=2)
        # 2024-01-15T12:00:00Z [session=...] [component=mutator] INFO Tick published tick=1 jobs=2
    """

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or str(uuid.uuid4())
        self.path = session_log_path(self.session_id)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @staticmethod
    def timestamp() -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%SZ")

    def log(self, component: str, level: str, message: str, **fields) -> None:
        """
        Append one line to the session log.

        Raises:
            ValueError: If level is not one of INFO, WARN, ERROR.
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        parts = [
            self.timestamp(),
            f"[session={self.session_id}]",
            f"[component={component}]",
            level,
            message,
        ]
        if fields:
            parts.append(format_fields(fields))

        with self._lock, self.path.open("a", encoding="utf-8") as f:
            f.write(" ".join(parts) + "\n")

    def info(self, component: str, message: str, **fields) -> None:
        self.log(component, "INFO", message, **fields)

    def warn(self, component: str, message: str, **fields) -> None:
        self.log(component, "WARN", message, **fields)

    def error(self, component: str, message: str, **fields) -> None:
        self.log(component, "ERROR", message, **fields)


class NullLogger:
    """Logger with the SessionLogger interface that discards everything."""

    def log(self, component: str, level: str, message: str, **fields) -> None:
        pass

    def info(self, component: str, message: str, **fields) -> None:
        pass

    def warn(self, component: str, message: str, **fields) -> None:
        pass

    def error(self, component: str, message: str, **fields) -> None:
        pass
