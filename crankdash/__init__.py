"""
crankdash - Terminal dashboard for simulated job activity.

This package shows a live list of jobs in the terminal while a background
worker flips their statuses on a fixed timer.

Package Structure:
    - cli.py: Command-line interface and entry point
    - tui/: Job model, registry, status mutator, channel and curses views
    - utils/: Session logging

Usage:
    Run as a module: python -m crankdash <command>

Example:
    python -m crankdash run
"""

__version__ = "0.1.0"
