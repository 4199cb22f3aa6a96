"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    reset_timezone_cache,
    start_of_day,
)

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "reset_timezone_cache",
    "start_of_day",
]
