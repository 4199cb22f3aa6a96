"""Tests for per-recipient read state and the feeds built on top of it."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from campus_feed.application.use_cases.notifications import (
    create_notification,
    dismiss,
    mark_all_read,
    mark_read,
    notification_feed,
    unread_count,
    unread_feed,
    update_notification,
)
from campus_feed.domain.entities import TargetingSpec
from campus_feed.domain.exceptions import NotFound


def _notify(session, title: str = "Library closed", **overrides):
    values = {"title": title, "body": "See notice board", "targeting": TargetingSpec.everyone()}
    values.update(overrides)
    return create_notification(session, **values)


def test_mark_read_is_monotonic(session, make_user) -> None:
    student = make_user()
    result = _notify(session)

    assert unread_count(session, student.id) == 1
    assert mark_read(session, result.notification_id, student.id) is True
    assert mark_read(session, result.notification_id, student.id) is False
    assert unread_count(session, student.id) == 0

    entries = notification_feed(session, student.id)
    assert len(entries) == 1
    assert entries[0].delivery.is_read is True
    assert entries[0].delivery.read_at is not None


def test_read_state_is_per_recipient(session, make_user) -> None:
    first, second = make_user(), make_user()
    result = _notify(session)

    mark_read(session, result.notification_id, first.id)

    assert unread_count(session, first.id) == 0
    assert unread_count(session, second.id) == 1


def test_mark_read_requires_a_delivery(session, make_user, branch) -> None:
    outsider = make_user()
    make_user(branch_id=branch.id)
    result = _notify(session, targeting=TargetingSpec.matching(branch_id=branch.id))

    with pytest.raises(NotFound):
        mark_read(session, result.notification_id, outsider.id)
    with pytest.raises(NotFound):
        mark_read(session, uuid4(), outsider.id)


def test_expired_notifications_are_hidden_but_kept(session, make_user, now) -> None:
    student = make_user()
    result = _notify(session, expires_at=now + timedelta(hours=1))

    later = now + timedelta(hours=2)

    assert unread_count(session, student.id, now=later) == 0
    assert unread_feed(session, student.id, now=later) == []
    assert notification_feed(session, student.id, now=later) == []
    assert unread_count(session, student.id) == 1
    assert unread_feed(session, student.id)[0].notification.id == result.notification_id


def test_unpublished_notifications_are_hidden(session, make_user) -> None:
    student = make_user()
    result = _notify(session)

    update_notification(session, result.notification_id, is_published=False)

    assert unread_count(session, student.id) == 0
    assert notification_feed(session, student.id) == []

    update_notification(session, result.notification_id, is_published=True)

    assert unread_count(session, student.id) == 1


def test_update_notification_can_clear_expiry(session, make_user, now) -> None:
    student = make_user()
    result = _notify(session, expires_at=now + timedelta(hours=1))

    updated = update_notification(session, result.notification_id, expires_at=None)

    assert updated.expires_at is None
    assert unread_count(session, student.id, now=now + timedelta(days=30)) == 1


def test_unread_feed_is_newest_first_and_paginated(session, make_user) -> None:
    student = make_user()
    for index in range(5):
        _notify(session, title=f"Notice {index}")

    entries = unread_feed(session, student.id, limit=20)
    created = [entry.notification.created_at for entry in entries]

    assert len(entries) == 5
    assert created == sorted(created, reverse=True)

    page = unread_feed(session, student.id, limit=2, offset=1)
    assert [entry.notification.id for entry in page] == [
        entry.notification.id for entry in entries[1:3]
    ]
    assert unread_feed(session, student.id, limit=2, offset=10) == []


def test_negative_pagination_is_rejected(session, make_user) -> None:
    student = make_user()

    with pytest.raises(ValueError):
        unread_feed(session, student.id, limit=-1)
    with pytest.raises(ValueError):
        notification_feed(session, student.id, offset=-1)


def test_mark_all_read_only_touches_live_entries(session, make_user, now) -> None:
    student = make_user()
    _notify(session, title="One")
    _notify(session, title="Two")
    hidden = _notify(session, title="Hidden")
    update_notification(session, hidden.notification_id, is_published=False)

    assert mark_all_read(session, student.id) == 2
    assert mark_all_read(session, student.id) == 0

    update_notification(session, hidden.notification_id, is_published=True)
    assert unread_count(session, student.id) == 1


def test_dismiss_hides_entry_and_marks_it_read(session, make_user) -> None:
    student = make_user()
    result = _notify(session)

    assert dismiss(session, result.notification_id, student.id) is True
    assert dismiss(session, result.notification_id, student.id) is False
    assert notification_feed(session, student.id) == []
    assert unread_count(session, student.id) == 0
    assert mark_read(session, result.notification_id, student.id) is False


def test_dismiss_requires_a_delivery(session, make_user) -> None:
    student = make_user()

    with pytest.raises(NotFound):
        dismiss(session, uuid4(), student.id)
