"""
Entry point for running crankdash as a Python module.

Enables:
    python -m crankdash <command>
"""

from .cli import main

if __name__ == "__main__":
    main()
