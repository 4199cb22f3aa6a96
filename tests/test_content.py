"""Tests for events, opportunities, RSVPs, bookmarks and the active feed."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from campus_feed.application.use_cases.content import (
    active_feed,
    add_bookmark,
    add_rsvp,
    cancel_rsvp,
    get_event,
    list_bookmarks,
    list_events,
    list_opportunities,
    list_rsvps,
    remove_bookmark,
    update_event,
    update_opportunity,
)
from campus_feed.application.use_cases.notifications import notification_feed
from campus_feed.domain.entities import (
    CATEGORY_EVENT,
    CATEGORY_OPPORTUNITY,
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    Event,
)
from campus_feed.domain.exceptions import Conflict, NotFound
from campus_feed.domain.expiration import event_effective_expiry
from campus_feed.infrastructure.models import BookmarkModel
from campus_feed.infrastructure.repositories import EventRepository


def test_active_feed_orders_by_effective_date(
    session, make_event, make_opportunity, now
) -> None:
    today = now.date()
    later_event = make_event(title="Later", event_date=today + timedelta(days=5))
    soon_event = make_event(title="Soon", event_date=today + timedelta(days=2))
    mid_opportunity = make_opportunity(title="Mid", deadline=now + timedelta(days=3))
    undated = make_opportunity(title="Rolling", deadline=None)
    make_event(title="Hidden", event_date=today + timedelta(days=1), is_published=False)
    make_event(title="Gone", event_date=today - timedelta(days=20))
    make_opportunity(title="Closed", deadline=now - timedelta(hours=1))

    items = active_feed(session, as_of=now)

    assert [item.id for item in items] == [
        soon_event.id,
        mid_opportunity.id,
        later_event.id,
        undated.id,
    ]
    assert items[0].kind == "event"
    assert items[0].host is None
    assert items[1].kind == "opportunity"
    assert items[1].host == "Acme"
    assert items[1].expires_at == items[1].deadline
    assert items[-1].effective_date is None


def test_active_feed_breaks_date_ties_by_newest(session, now) -> None:
    repository = EventRepository(session)
    day = now.date() + timedelta(days=4)
    older = repository.create(
        Event(id=None, title="Older", event_date=day, created_at=now - timedelta(hours=2))
    )
    newer = repository.create(
        Event(id=None, title="Newer", event_date=day, created_at=now - timedelta(hours=1))
    )

    items = active_feed(session, as_of=now, kind="event")

    assert [item.id for item in items] == [newer.id, older.id]


def test_active_feed_filters_by_kind(session, make_event, make_opportunity, now) -> None:
    make_event()
    opportunity = make_opportunity()

    items = active_feed(session, as_of=now, kind="opportunity")

    assert [item.id for item in items] == [opportunity.id]
    with pytest.raises(ValueError):
        active_feed(session, kind="workshop")


def test_event_projection_uses_effective_expiry(session, make_event, now) -> None:
    event = make_event(event_date=now.date() + timedelta(days=1))

    (item,) = active_feed(session, as_of=now)

    assert item.effective_date == event.event_date
    assert item.expires_at == event_effective_expiry(event)


def test_hidden_content_is_only_listed_on_request(session, make_event, now) -> None:
    visible = make_event(title="Visible")
    hidden = make_event(title="Draft", is_published=False)

    assert [event.id for event in list_events(session, now=now)] == [visible.id]
    assert {event.id for event in list_events(session, include_hidden=True)} == {
        visible.id,
        hidden.id,
    }
    with pytest.raises(NotFound):
        get_event(session, hidden.id, now=now)
    assert get_event(session, hidden.id, include_hidden=True).id == hidden.id


def test_update_event_rejects_unknown_fields(session, make_event) -> None:
    event = make_event()

    updated = update_event(session, event.id, location="Auditorium")
    assert updated.location == "Auditorium"

    with pytest.raises(ValueError):
        update_event(session, event.id, created_by=uuid4())
    with pytest.raises(NotFound):
        update_event(session, uuid4(), title="Missing")


def test_opportunity_validation(session, make_opportunity) -> None:
    with pytest.raises(ValueError):
        make_opportunity(opportunity_type="Gig")
    with pytest.raises(ValueError):
        make_opportunity(target_year=5)

    opportunity = make_opportunity(opportunity_type="Hackathon")
    with pytest.raises(ValueError):
        update_opportunity(session, opportunity.id, opportunity_type="Party")


def test_list_opportunities_by_type(session, make_opportunity, now) -> None:
    internship = make_opportunity()
    make_opportunity(title="Grant", opportunity_type="Scholarship")

    listed = list_opportunities(session, opportunity_type="Internship", now=now)

    assert [opportunity.id for opportunity in listed] == [internship.id]


def test_rsvp_is_idempotent(session, make_user, make_event) -> None:
    student = make_user()
    event = make_event()

    assert add_rsvp(session, event.id, student.id) is True
    assert add_rsvp(session, event.id, student.id) is False
    assert [rsvp.user_id for rsvp in list_rsvps(session, event.id)] == [student.id]

    assert cancel_rsvp(session, event.id, student.id) is True
    assert cancel_rsvp(session, event.id, student.id) is False


def test_rsvp_respects_capacity_and_deadline(session, make_user, make_event, now) -> None:
    first, second = make_user(), make_user()
    full = make_event(title="Small room", max_participants=1)
    closed = make_event(title="Closed", registration_deadline=now - timedelta(hours=1))

    add_rsvp(session, full.id, first.id)

    with pytest.raises(Conflict):
        add_rsvp(session, full.id, second.id)
    with pytest.raises(Conflict):
        add_rsvp(session, closed.id, first.id)


def test_rsvp_needs_a_live_event(session, make_user, make_event, now) -> None:
    student = make_user()
    old = make_event(event_date=now.date() - timedelta(days=30))

    with pytest.raises(NotFound):
        add_rsvp(session, old.id, student.id)
    with pytest.raises(NotFound):
        add_rsvp(session, uuid4(), student.id)


def test_bookmarks(session, make_user, make_opportunity, now) -> None:
    student = make_user()
    live = make_opportunity(title="Live")
    closing = make_opportunity(title="Closing", deadline=now + timedelta(minutes=10))

    assert add_bookmark(session, live.id, student.id) is True
    assert add_bookmark(session, live.id, student.id) is False
    add_bookmark(session, closing.id, student.id)

    later = now + timedelta(hours=1)
    assert [opportunity.id for opportunity in list_bookmarks(session, student.id, now=later)] == [
        live.id
    ]

    assert remove_bookmark(session, live.id, student.id) is True
    assert remove_bookmark(session, live.id, student.id) is False
    with pytest.raises(NotFound):
        add_bookmark(session, uuid4(), student.id)


def test_new_event_is_announced_to_its_branch(session, make_user, make_event, branch) -> None:
    member = make_user(branch_id=branch.id, year=1, semester=1)
    outsider = make_user()

    event = make_event(title="Robotics Expo", target_branch_id=branch.id, announce=True)

    (entry,) = notification_feed(session, member.id)
    assert entry.notification.title == "New Event: Robotics Expo"
    assert entry.notification.category == CATEGORY_EVENT
    assert entry.notification.related_resource_id == event.id
    assert entry.notification.expires_at == event_effective_expiry(event)
    assert notification_feed(session, outsider.id) == []


def test_unpublished_event_is_not_announced(session, make_user, make_event) -> None:
    student = make_user()

    make_event(is_published=False, announce=True)

    assert notification_feed(session, student.id) == []


def test_opportunity_announcement_priority(session, make_user, make_opportunity, now) -> None:
    student = make_user()
    make_opportunity(title="Urgent", deadline=now + timedelta(days=3), announce=True)
    make_opportunity(title="Relaxed", deadline=now + timedelta(days=30), announce=True)

    entries = {
        entry.notification.title: entry.notification
        for entry in notification_feed(session, student.id)
    }

    assert entries["New Internship: Urgent"].priority == PRIORITY_HIGH
    assert entries["New Internship: Relaxed"].priority == PRIORITY_NORMAL
    assert entries["New Internship: Urgent"].category == CATEGORY_OPPORTUNITY
    assert "Acme" in entries["New Internship: Urgent"].body


def test_hidden_opportunities_cannot_be_bookmarked(
    session, make_user, make_opportunity, now
) -> None:
    student = make_user()
    draft = make_opportunity(title="Draft", is_published=False)
    closed = make_opportunity(title="Closed", deadline=now + timedelta(minutes=10))

    with pytest.raises(NotFound):
        add_bookmark(session, draft.id, student.id)
    with pytest.raises(NotFound):
        add_bookmark(session, closed.id, student.id, now=now + timedelta(hours=1))
    assert session.query(BookmarkModel).count() == 0
