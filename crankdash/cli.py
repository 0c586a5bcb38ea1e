#!/usr/bin/env python3
"""
crankdash - Terminal dashboard for simulated job activity.

This module implements the command-line interface for crankdash.

Responsibilities:
    - Run the live curses dashboard (run)
    - Run the same job feed as plain text output (run --plain)
    - List the jobs the dashboard starts with (jobs)

Usage:
    python -m crankdash <command> [options]

Examples:
    python -m crankdash run
    python -m crankdash run --plain --ticks 3
    python -m crankdash jobs
"""

import argparse
import curses
import os
import sys
import time
from pathlib import Path

from .tui.channel import UpdateChannel
from .tui.model import JobStatus
from .tui.mutator import TICK_INTERVAL, StatusMutator
from .tui.registry import JobRegistry
from .tui.views import POLL_INTERVAL_MS, run_dashboard
from .utils.sessionlog import NullLogger, SessionLogger

# ============================================================
# Environment Configuration
# ============================================================

def parse_env_line(line: str):
    """
    Parse one .env line into a (key, value) pair.

    Accepts an optional leading "export " and strips one layer of matching
    single or double quotes around the value. Returns None for blank
    lines, comments and lines without "=".
    """
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export "):]

    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    return key, value


def load_dotenv(path=None) -> list:
    """
    Load a .env file into os.environ if present.

    Looks in the current working directory unless a path is given.
    Variables already set in the environment win over values in the file.

    Returns:
        list: Names of the variables that were taken from the file.
    """
    env_path = Path(path) if path else Path.cwd() / ".env"
    if not env_path.exists():
        return []

    applied = []
    for line in env_path.read_text(encoding="utf-8").splitlines():
        pair = parse_env_line(line)
        if pair is None or pair[0] in os.environ:
            continue
        os.environ[pair[0]] = pair[1]
        applied.append(pair[0])
    return applied


# ============================================================
# Plain text output
# ============================================================

def format_job(job) -> str:
    """Format a job as a single plain-text line."""
    marker = "✔" if job.status is JobStatus.COMPLETED else "…"
    return f"{marker} {job.id}: {job.name} - {job.status.value}"


def list_jobs(registry=None) -> None:
    """Print the jobs the dashboard starts with."""
    if registry is None:
        registry = JobRegistry.seeded()
    for job in registry.snapshot():
        print(format_job(job))


def run_plain(ticks=None, registry=None, logger=None,
              tick_interval: float = TICK_INTERVAL) -> int:
    """
    Follow the job feed without curses, printing each snapshot.

    Args:
        ticks: Stop after this many snapshots (default: run until Ctrl+C).
        registry: Jobs to start from (default: the seeded registry).
        logger: SessionLogger for the run.
        tick_interval: Seconds between status mutator ticks.

    Returns:
        int: The number of snapshots printed.
    """
    logger = logger or NullLogger()
    if registry is None:
        registry = JobRegistry.seeded()

    channel = UpdateChannel()
    mutator = StatusMutator(registry.snapshot(), channel,
                            interval=tick_interval, logger=logger)

    print("[crankdash] Initial jobs")
    for job in registry.snapshot():
        print(f"  {format_job(job)}")
    print()

    printed = 0
    mutator.start()
    try:
        while ticks is None or printed < ticks:
            snapshot = channel.try_receive()
            if snapshot is None:
                time.sleep(POLL_INTERVAL_MS / 1000)
                continue

            printed += 1
            print(f"[crankdash] Update {printed}")
            for job in snapshot:
                print(f"  {format_job(job)}")
            print()
    finally:
        channel.close()
        mutator.stop()

    return printed


# ============================================================
# Command-Line Argument Parsing
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="crankdash",
        description="Crankshaft job monitoring dashboard",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
    )

    # --- run: live dashboard ---
    run_parser = subparsers.add_parser(
        "run",
        help="Show the live job dashboard",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print updates as plain text instead of the curses dashboard",
    )
    run_parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="With --plain, exit after this many updates",
    )
    run_parser.add_argument(
        "--no-log",
        action="store_true",
        help="Do not write a session log file",
    )

    # --- jobs: list seed jobs ---
    subparsers.add_parser(
        "jobs",
        help="List the jobs the dashboard starts with",
    )

    return parser


# ============================================================
# Entry Point
# ============================================================

def main(argv=None) -> None:
    """
    Main entry point for the crankdash CLI.

    Exit Codes:
        0: Success (including quitting with q or Ctrl+C)
        2: Invalid arguments
    """
    env_keys = load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "jobs":
        list_jobs()
        sys.exit(0)

    if args.command == "run":
        if args.ticks is not None and not args.plain:
            parser.error("--ticks requires --plain")
        if args.ticks is not None and args.ticks < 1:
            parser.error("--ticks must be at least 1")

        logger = NullLogger() if args.no_log else SessionLogger()
        mode = "plain" if args.plain else "tui"
        logger.info("cli", "Session started", mode=mode)
        if env_keys:
            logger.info("cli", "Loaded .env", keys=",".join(env_keys))

        try:
            if args.plain:
                run_plain(ticks=args.ticks, logger=logger)
            else:
                curses.wrapper(run_dashboard, logger=logger)
        except KeyboardInterrupt:
            logger.warn("cli", "Interrupted (Ctrl+C)")
        except curses.error as exc:
            logger.error("cli", f"Terminal failure: {exc}")
            raise

        logger.info("cli", "Session finished")
        sys.exit(0)

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
