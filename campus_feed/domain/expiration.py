"""Expiration policy shared by every read path and the cleanup sweeper.

Each content kind has one side-effect-free rule deciding whether its time window
has closed. ``is_live`` adds the publication flag on top of that rule. Read paths
filter with ``is_live`` and the sweeper deletes with ``is_expired``; both go
through the functions below so they can never disagree.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Union

from campus_feed.config import get_settings
from campus_feed.domain.entities import Event, Notification, Opportunity
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone, start_of_day

ExpiringItem = Union[Notification, Event, Opportunity]


def event_effective_expiry(event: Event, *, grace_days: int | None = None) -> datetime:
    """Return the explicit expiry of ``event`` or its date plus the grace window."""

    if event.expires_at is not None:
        return ensure_app_timezone(event.expires_at)
    if grace_days is None:
        grace_days = get_settings().event_grace_days
    return start_of_day(event.event_date) + timedelta(days=grace_days)


def notification_is_expired(notification: Notification, now: datetime) -> bool:
    if notification.expires_at is None:
        return False
    return ensure_app_timezone(notification.expires_at) <= now


def event_is_expired(event: Event, now: datetime) -> bool:
    # Both the day of the event and its expiry must be behind us.
    if event.event_date >= now.date():
        return False
    return event_effective_expiry(event) <= now


def opportunity_is_expired(opportunity: Opportunity, now: datetime) -> bool:
    if opportunity.deadline is None:
        return False
    return ensure_app_timezone(opportunity.deadline) <= now


_EXPIRY_RULES: dict[type, Callable[..., bool]] = {
    Notification: notification_is_expired,
    Event: event_is_expired,
    Opportunity: opportunity_is_expired,
}


def is_expired(item: ExpiringItem, now: datetime | None = None) -> bool:
    """Return ``True`` once the time window of ``item`` has closed for good."""

    rule = _EXPIRY_RULES.get(type(item))
    if rule is None:
        raise TypeError(f"No expiration rule for {type(item).__name__}")
    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return rule(item, moment)


def is_live(item: ExpiringItem, now: datetime | None = None) -> bool:
    """Return ``True`` when ``item`` is published and still inside its window."""

    return bool(item.is_published) and not is_expired(item, now)


__all__ = [
    "ExpiringItem",
    "event_effective_expiry",
    "event_is_expired",
    "is_expired",
    "is_live",
    "notification_is_expired",
    "opportunity_is_expired",
]
