"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campus_feed.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` model). If the provided value cannot be resolved, ``UTC`` is
    used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    localized = ensure_app_naive_datetime(now_in_app_timezone())
    if localized is None:  # pragma: no cover - defensive guard
        msg = "Failed to compute the application naive datetime"
        raise RuntimeError(msg)
    return localized


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    Not every backend keeps the offset of a ``DATETIME`` column (SQLite drops it).
    Storing the localized naive value keeps comparisons consistent while the domain
    layer keeps working with aware datetimes.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def start_of_day(value: date) -> datetime:
    """Return midnight of ``value`` in the application timezone."""

    return datetime.combine(value, time.min, tzinfo=get_app_timezone())


def reset_timezone_cache() -> None:
    """Forget the resolved timezone so a new ``APP_TIMEZONE`` is picked up."""

    get_app_timezone.cache_clear()


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return ZoneInfo(_DEFAULT_TIMEZONE)
