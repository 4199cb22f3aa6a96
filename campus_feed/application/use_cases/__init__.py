"""Aggregate application use cases."""

from .cleanup import SweepResult, sweep
from .notifications import FanOutResult, create_notification, deliver, resolve_audience

__all__ = [
    "FanOutResult",
    "SweepResult",
    "create_notification",
    "deliver",
    "resolve_audience",
    "sweep",
]
