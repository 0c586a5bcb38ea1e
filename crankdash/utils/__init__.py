"""
Utility modules for crankdash.

Modules:
    - sessionlog: Per-session append-only log files
"""
