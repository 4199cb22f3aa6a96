"""Tests for the cleanup sweep of expired content."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from campus_feed.application.use_cases.cleanup import (
    SWEEP_EVENTS,
    SWEEP_NOTIFICATIONS,
    SWEEP_OPPORTUNITIES,
    sweep,
)
from campus_feed.application.use_cases.content import (
    add_bookmark,
    add_rsvp,
    update_opportunity,
)
from campus_feed.application.use_cases.notifications import (
    create_notification,
    update_notification,
)
from campus_feed.domain.entities import TargetingSpec
from campus_feed.infrastructure import database
from campus_feed.infrastructure.models import (
    BookmarkModel,
    DeliveryRecordModel,
    EventRsvpModel,
)
from campus_feed.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    OpportunityRepository,
)


def _notify(session, **overrides):
    values = {"title": "Notice", "body": "Body", "targeting": TargetingSpec.everyone()}
    values.update(overrides)
    return create_notification(session, **values)


def test_sweep_removes_expired_notifications_with_deliveries(session, make_user, now) -> None:
    for _ in range(3):
        make_user()
    expired = _notify(session, expires_at=now + timedelta(minutes=30))
    soon = _notify(session, expires_at=now + timedelta(hours=3))
    forever = _notify(session)

    result = sweep(session, now=now + timedelta(hours=1))

    repository = NotificationRepository(session)
    assert result.deleted[SWEEP_NOTIFICATIONS] == 1
    assert result.failed == []
    assert repository.get(expired.notification_id) is None
    assert repository.count_deliveries(expired.notification_id) == 0
    assert repository.get(soon.notification_id) is not None
    assert repository.get(forever.notification_id) is not None
    assert session.query(DeliveryRecordModel).count() == 6


def test_sweep_removes_expired_events_with_rsvps(session, make_user, make_event, now) -> None:
    student = make_user()
    today = now.date()
    old = make_event(title="Old", event_date=today - timedelta(days=10))
    recent = make_event(title="Yesterday", event_date=today - timedelta(days=1))
    extended = make_event(
        title="Extended",
        event_date=today - timedelta(days=10),
        expires_at=now + timedelta(days=1),
    )
    upcoming = make_event(title="Upcoming", event_date=today + timedelta(days=1))
    add_rsvp(session, upcoming.id, student.id)
    # The RSVP of a past event is inserted directly; registration is closed for it.
    EventRepository(session).add_rsvp(old.id, student.id)

    result = sweep(session, now=now)

    repository = EventRepository(session)
    assert result.deleted[SWEEP_EVENTS] == 1
    assert repository.get(old.id) is None
    assert repository.count_rsvps(old.id) == 0
    for kept in (recent, extended, upcoming):
        assert repository.get(kept.id) is not None
    assert session.query(EventRsvpModel).count() == 1


def test_sweep_removes_expired_opportunities_with_bookmarks(
    session, make_user, make_opportunity, now
) -> None:
    student = make_user()
    closed = make_opportunity(title="Closed", deadline=now + timedelta(minutes=5))
    draft = make_opportunity(title="Draft", deadline=now + timedelta(days=2), is_published=False)
    open_ended = make_opportunity(title="Open", deadline=None)
    add_bookmark(session, closed.id, student.id)
    add_bookmark(session, open_ended.id, student.id)

    result = sweep(session, now=now + timedelta(hours=1))

    repository = OpportunityRepository(session)
    assert result.deleted[SWEEP_OPPORTUNITIES] == 1
    assert repository.get(closed.id) is None
    assert repository.get(draft.id) is not None
    assert repository.get(open_ended.id) is not None
    assert session.query(BookmarkModel).count() == 1


def test_unpublished_rows_are_swept_once_their_window_closes(session, make_user, now) -> None:
    make_user()
    hidden = _notify(session, expires_at=now + timedelta(minutes=10), is_published=False)
    draft = _notify(session, expires_at=now + timedelta(days=10))
    update_notification(session, draft.notification_id, is_published=False)

    result = sweep(session, now=now + timedelta(hours=1))

    repository = NotificationRepository(session)
    assert result.deleted[SWEEP_NOTIFICATIONS] == 1
    assert repository.get(hidden.notification_id) is None
    assert repository.get(draft.notification_id) is not None


def test_second_sweep_deletes_nothing(session, make_user, make_event, now) -> None:
    make_user()
    _notify(session, expires_at=now + timedelta(minutes=1))
    make_event(event_date=now.date() - timedelta(days=30))

    first = sweep(session, now=now + timedelta(hours=1))
    second = sweep(session, now=now + timedelta(hours=1))

    assert first.total_deleted == 2
    assert second.total_deleted == 0
    assert second.deleted == {
        SWEEP_NOTIFICATIONS: 0,
        SWEEP_EVENTS: 0,
        SWEEP_OPPORTUNITIES: 0,
    }


def test_failure_of_one_kind_does_not_stop_the_others(
    session, make_user, make_event, make_opportunity, now, monkeypatch
) -> None:
    make_user()
    expired = _notify(session, expires_at=now + timedelta(minutes=1))
    old_event = make_event(event_date=now.date() - timedelta(days=30))
    closed = make_opportunity(deadline=now + timedelta(minutes=1))

    def broken_delete(self, event_ids, **kwargs):
        raise SQLAlchemyError("simulated store failure")

    monkeypatch.setattr(EventRepository, "delete_many", broken_delete)

    result = sweep(session, now=now + timedelta(hours=1))

    assert result.failed == [SWEEP_EVENTS]
    assert result.deleted == {SWEEP_NOTIFICATIONS: 1, SWEEP_OPPORTUNITIES: 1}
    assert NotificationRepository(session).get(expired.notification_id) is None
    assert OpportunityRepository(session).get(closed.id) is None
    assert EventRepository(session).get(old_event.id) is not None


def _extend_during_load(monkeypatch, repository_cls, method_name, extend):
    """Run ``extend`` in a separate session right after the sweep has loaded its rows."""

    original = getattr(repository_cls, method_name)

    def load_then_extend(self, *args, **kwargs):
        loaded = original(self, *args, **kwargs)
        other = database.SessionLocal()
        try:
            extend(other)
        finally:
            other.close()
        return loaded

    monkeypatch.setattr(repository_cls, method_name, load_then_extend)


def test_notification_extended_after_selection_survives(
    session, make_user, now, monkeypatch
) -> None:
    make_user()
    extended = _notify(session, expires_at=now + timedelta(minutes=30))
    stale = _notify(session, expires_at=now + timedelta(minutes=30))
    _extend_during_load(
        monkeypatch,
        NotificationRepository,
        "list_all",
        lambda other: update_notification(
            other, extended.notification_id, expires_at=now + timedelta(days=5)
        ),
    )

    result = sweep(session, now=now + timedelta(hours=1))

    repository = NotificationRepository(session)
    assert result.deleted[SWEEP_NOTIFICATIONS] == 1
    assert repository.get(extended.notification_id) is not None
    assert repository.count_deliveries(extended.notification_id) == 1
    assert repository.get(stale.notification_id) is None


def test_opportunity_extended_after_selection_keeps_bookmarks(
    session, make_user, make_opportunity, now, monkeypatch
) -> None:
    student = make_user()
    reopened = make_opportunity(deadline=now + timedelta(minutes=5))
    add_bookmark(session, reopened.id, student.id)
    _extend_during_load(
        monkeypatch,
        OpportunityRepository,
        "list",
        lambda other: update_opportunity(other, reopened.id, deadline=now + timedelta(days=7)),
    )

    result = sweep(session, now=now + timedelta(hours=1))

    assert result.deleted[SWEEP_OPPORTUNITIES] == 0
    assert OpportunityRepository(session).get(reopened.id) is not None
    assert session.query(BookmarkModel).count() == 1
