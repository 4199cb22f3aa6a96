"""Unit tests for the expiration policy shared by read paths and the sweeper."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from campus_feed.domain.entities import Event, Notification, Opportunity
from campus_feed.domain.expiration import event_effective_expiry, is_expired, is_live

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _notification(**overrides) -> Notification:
    values = {"id": None, "title": "Exam", "body": "Room 4"}
    values.update(overrides)
    return Notification(**values)


def _event(**overrides) -> Event:
    values = {"id": None, "title": "Hackathon", "event_date": TODAY}
    values.update(overrides)
    return Event(**values)


def _opportunity(**overrides) -> Opportunity:
    values = {
        "id": None,
        "title": "Intern",
        "opportunity_type": "Internship",
        "description": "Summer role",
    }
    values.update(overrides)
    return Opportunity(**values)


def test_notification_without_expiry_never_expires() -> None:
    assert not is_expired(_notification(), NOW)
    assert is_live(_notification(), NOW + timedelta(days=3650))


def test_notification_expires_at_its_boundary() -> None:
    notification = _notification(expires_at=NOW)

    assert is_expired(notification, NOW)
    assert not is_expired(notification, NOW - timedelta(seconds=1))


def test_unpublished_notification_is_not_live() -> None:
    notification = _notification(is_published=False, expires_at=NOW + timedelta(hours=1))

    assert not is_expired(notification, NOW)
    assert not is_live(notification, NOW)


def test_event_of_today_stays_live_even_with_past_expiry() -> None:
    event = _event(event_date=TODAY, expires_at=NOW - timedelta(days=1))

    assert not is_expired(event, NOW)


def test_event_without_expiry_uses_grace_window() -> None:
    yesterday = _event(event_date=TODAY - timedelta(days=1))
    long_ago = _event(event_date=TODAY - timedelta(days=10))
    eight_days_ago = _event(event_date=TODAY - timedelta(days=8))

    assert not is_expired(yesterday, NOW)
    assert is_expired(long_ago, NOW)
    assert is_expired(eight_days_ago, NOW)


def test_past_event_with_future_expiry_is_live() -> None:
    event = _event(event_date=TODAY - timedelta(days=10), expires_at=NOW + timedelta(days=1))

    assert not is_expired(event, NOW)
    assert is_live(event, NOW)


def test_event_effective_expiry_prefers_explicit_value() -> None:
    explicit = NOW + timedelta(hours=5)

    assert event_effective_expiry(_event(expires_at=explicit)) == explicit
    assert event_effective_expiry(_event(event_date=date(2026, 3, 1)), grace_days=2) == datetime(
        2026, 3, 3, tzinfo=timezone.utc
    )


def test_opportunity_deadline_rules() -> None:
    assert not is_expired(_opportunity(), NOW)
    assert is_expired(_opportunity(deadline=NOW - timedelta(minutes=1)), NOW)
    assert is_live(_opportunity(deadline=NOW + timedelta(minutes=1)), NOW)
    assert not is_live(_opportunity(is_published=False), NOW)


def test_naive_moments_are_read_in_app_timezone() -> None:
    notification = _notification(expires_at=NOW)

    assert is_expired(notification, NOW.replace(tzinfo=None))


def test_unknown_item_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        is_expired(object(), NOW)  # type: ignore[arg-type]
