"""
TUI components for crankdash.

Modules:
    - model: Job record and status values
    - registry: In-memory ordered job list with the startup seed data
    - mutator: Background worker that toggles statuses on a timer
    - channel: One-slot snapshot handoff from mutator to render loop
    - views: Curses renderer and the main render loop

Architecture:
    The TUI uses a producer-consumer pattern:
    1. StatusMutator ticks in a background thread and sends snapshots
    2. UpdateChannel holds at most one pending snapshot
    3. RenderLoop drains the channel, redraws, and polls for 'q'
"""
