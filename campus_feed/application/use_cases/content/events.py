"""Use cases for authoring and reading campus events."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import Event
from campus_feed.domain.exceptions import NotFound
from campus_feed.domain.expiration import is_live
from campus_feed.infrastructure.repositories import EventRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

from .announce import announce_event

EDITABLE_EVENT_FIELDS = frozenset(
    {
        "title",
        "description",
        "event_date",
        "start_time",
        "end_time",
        "location",
        "organizer",
        "target_branch_id",
        "registration_deadline",
        "max_participants",
        "is_published",
        "expires_at",
    }
)


def _validate(event: Event) -> None:
    if not event.title or not event.title.strip():
        raise ValueError("Title is required")
    if event.max_participants is not None and event.max_participants <= 0:
        raise ValueError("max_participants must be a positive number")
    if event.start_time and event.end_time and event.end_time < event.start_time:
        raise ValueError("end_time must not be earlier than start_time")


def create_event(
    session: Session,
    *,
    title: str,
    event_date: date,
    description: str | None = None,
    start_time: time | None = None,
    end_time: time | None = None,
    location: str | None = None,
    organizer: str | None = None,
    target_branch_id: UUID | None = None,
    registration_deadline: datetime | None = None,
    max_participants: int | None = None,
    is_published: bool = True,
    expires_at: datetime | None = None,
    created_by: UUID | None = None,
    announce: bool = True,
) -> Event:
    """Create an event and, when published, announce it to its audience."""

    entity = Event(
        id=None,
        title=title.strip() if title else title,
        event_date=event_date,
        description=description,
        start_time=start_time,
        end_time=end_time,
        location=location,
        organizer=organizer,
        target_branch_id=target_branch_id,
        registration_deadline=ensure_app_timezone(registration_deadline),
        max_participants=max_participants,
        is_published=is_published,
        expires_at=ensure_app_timezone(expires_at),
        created_by=created_by,
        created_at=now_in_app_timezone(),
    )
    _validate(entity)
    saved = EventRepository(session).create(entity)
    if announce and saved.is_published:
        announce_event(session, saved)
    return saved


def update_event(session: Session, event_id: UUID, **changes: Any) -> Event:
    """Apply ``changes`` to the event; unknown fields are rejected."""

    unknown = set(changes) - EDITABLE_EVENT_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    repository = EventRepository(session)
    current = repository.get(event_id)
    if current is None:
        raise NotFound(f"Event {event_id} not found")

    for key in ("registration_deadline", "expires_at"):
        if key in changes:
            changes[key] = ensure_app_timezone(changes[key])
    updated = replace(current, **changes)
    _validate(updated)
    return repository.update(updated)


def get_event(
    session: Session,
    event_id: UUID,
    *,
    include_hidden: bool = False,
    now: datetime | None = None,
) -> Event:
    """Return the event, hiding unpublished or expired ones unless ``include_hidden``."""

    event = EventRepository(session).get(event_id)
    if event is None or (not include_hidden and not is_live(event, now)):
        raise NotFound(f"Event {event_id} not found")
    return event


def list_events(
    session: Session,
    *,
    include_hidden: bool = False,
    now: datetime | None = None,
) -> list[Event]:
    repository = EventRepository(session)
    if include_hidden:
        return list(repository.list())
    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return [event for event in repository.list(published_only=True) if is_live(event, moment)]


def delete_event(session: Session, event_id: UUID) -> None:
    """Delete the event together with its RSVPs."""

    repository = EventRepository(session)
    if repository.get(event_id) is None:
        raise NotFound(f"Event {event_id} not found")
    repository.delete_many([event_id])


__all__ = [
    "EDITABLE_EVENT_FIELDS",
    "create_event",
    "delete_event",
    "get_event",
    "list_events",
    "update_event",
]
