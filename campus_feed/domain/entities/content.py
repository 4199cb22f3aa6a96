"""Domain entities for time-bounded campus content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from uuid import UUID

CONTENT_KIND_EVENT = "event"
CONTENT_KIND_OPPORTUNITY = "opportunity"


@dataclass
class Event:
    """Campus activity scheduled for a given day."""

    id: UUID | None
    title: str
    event_date: date
    description: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    location: str | None = None
    organizer: str | None = None
    target_branch_id: UUID | None = None
    registration_deadline: datetime | None = None
    max_participants: int | None = None
    is_published: bool = True
    expires_at: datetime | None = None
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class EventRsvp:
    """Registration of a user for an event."""

    id: UUID | None
    event_id: UUID
    user_id: UUID
    created_at: datetime | None = None


@dataclass
class Opportunity:
    """Career or academic opportunity open until its deadline."""

    id: UUID | None
    title: str
    opportunity_type: str
    description: str
    company_name: str | None = None
    eligibility: str | None = None
    location: str | None = None
    is_remote: bool = False
    application_link: str | None = None
    stipend: str | None = None
    target_branch_id: UUID | None = None
    target_year: int | None = None
    deadline: datetime | None = None
    is_published: bool = True
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Bookmark:
    """An opportunity saved for later by a user."""

    id: UUID | None
    opportunity_id: UUID
    user_id: UUID
    created_at: datetime | None = None


@dataclass(frozen=True)
class ActiveContentItem:
    """Read-time projection shared by events and opportunities."""

    id: UUID
    kind: str
    title: str
    description: str | None
    effective_date: date | None
    location: str | None
    host: str | None
    deadline: datetime | None
    expires_at: datetime | None
    is_published: bool
    created_at: datetime | None
    start_time: time | None = None
    end_time: time | None = None
    opportunity_type: str | None = None
    application_link: str | None = None


__all__ = [
    "CONTENT_KIND_EVENT",
    "CONTENT_KIND_OPPORTUNITY",
    "ActiveContentItem",
    "Bookmark",
    "Event",
    "EventRsvp",
    "Opportunity",
]
