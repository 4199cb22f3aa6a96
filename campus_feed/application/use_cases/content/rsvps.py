"""Use cases for registering users to events."""

from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import EventRsvp
from campus_feed.domain.exceptions import Conflict, NotFound
from campus_feed.domain.expiration import is_live
from campus_feed.infrastructure.repositories import EventRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone


def add_rsvp(
    session: Session, event_id: UUID, user_id: UUID, *, now: datetime | None = None
) -> bool:
    """Register ``user_id`` for the event; registering twice is a no-op returning ``False``."""

    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    repository = EventRepository(session)
    event = repository.get(event_id)
    if event is None or not is_live(event, moment):
        raise NotFound(f"Event {event_id} not found")

    if any(rsvp.user_id == user_id for rsvp in repository.list_rsvps(event_id)):
        return False
    if event.registration_deadline is not None and event.registration_deadline <= moment:
        raise Conflict("Registration for this event is closed")
    if event.max_participants is not None and repository.count_rsvps(event_id) >= event.max_participants:
        raise Conflict("This event is full")
    return repository.add_rsvp(event_id, user_id)


def cancel_rsvp(session: Session, event_id: UUID, user_id: UUID) -> bool:
    return EventRepository(session).remove_rsvp(event_id, user_id)


def list_rsvps(session: Session, event_id: UUID) -> list[EventRsvp]:
    repository = EventRepository(session)
    if repository.get(event_id) is None:
        raise NotFound(f"Event {event_id} not found")
    return list(repository.list_rsvps(event_id))


__all__ = ["add_rsvp", "cancel_rsvp", "list_rsvps"]
