"""Use cases that remove expired content."""

from .sweeper import (
    SWEEP_EVENTS,
    SWEEP_NOTIFICATIONS,
    SWEEP_OPPORTUNITIES,
    SweepResult,
    run_scheduled_sweep,
    sweep,
)

__all__ = [
    "SWEEP_EVENTS",
    "SWEEP_NOTIFICATIONS",
    "SWEEP_OPPORTUNITIES",
    "SweepResult",
    "run_scheduled_sweep",
    "sweep",
]
