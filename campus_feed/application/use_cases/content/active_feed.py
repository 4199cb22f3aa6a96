"""Unified, read-only view over the live events and opportunities."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Session

from campus_feed.domain.entities import (
    CONTENT_KIND_EVENT,
    CONTENT_KIND_OPPORTUNITY,
    ActiveContentItem,
    Event,
    Opportunity,
)
from campus_feed.domain.expiration import event_effective_expiry, is_live
from campus_feed.infrastructure.repositories import EventRepository, OpportunityRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

FEED_KIND_ALL = "all"
FEED_KINDS = (FEED_KIND_ALL, CONTENT_KIND_EVENT, CONTENT_KIND_OPPORTUNITY)


def project_event(event: Event) -> ActiveContentItem:
    return ActiveContentItem(
        id=event.id,
        kind=CONTENT_KIND_EVENT,
        title=event.title,
        description=event.description,
        effective_date=event.event_date,
        location=event.location,
        host=event.organizer,
        deadline=event.registration_deadline,
        expires_at=event_effective_expiry(event),
        is_published=event.is_published,
        created_at=event.created_at,
        start_time=event.start_time,
        end_time=event.end_time,
    )


def project_opportunity(opportunity: Opportunity) -> ActiveContentItem:
    deadline = ensure_app_timezone(opportunity.deadline)
    return ActiveContentItem(
        id=opportunity.id,
        kind=CONTENT_KIND_OPPORTUNITY,
        title=opportunity.title,
        description=opportunity.description,
        effective_date=deadline.date() if deadline else None,
        location=opportunity.location,
        host=opportunity.company_name,
        deadline=deadline,
        expires_at=deadline,
        is_published=opportunity.is_published,
        created_at=opportunity.created_at,
        opportunity_type=opportunity.opportunity_type,
        application_link=opportunity.application_link,
    )


def _sort_key(item: ActiveContentItem) -> tuple:
    # Undated items go last; newer items first within the same day.
    created = item.created_at.timestamp() if item.created_at else 0.0
    return (item.effective_date is None, item.effective_date or date.max, -created)


def active_feed(
    session: Session,
    as_of: datetime | None = None,
    kind: str = FEED_KIND_ALL,
) -> list[ActiveContentItem]:
    """Return every live event and opportunity projected into one shape.

    Items are ordered by effective date ascending (event date, or opportunity
    deadline) with undated opportunities last, then by creation time descending.
    """

    if kind not in FEED_KINDS:
        raise ValueError(f"kind must be one of: {', '.join(FEED_KINDS)}")

    moment = ensure_app_timezone(as_of) if as_of is not None else now_in_app_timezone()
    items: list[ActiveContentItem] = []
    if kind in (FEED_KIND_ALL, CONTENT_KIND_EVENT):
        events = EventRepository(session).list(published_only=True)
        items.extend(project_event(event) for event in events if is_live(event, moment))
    if kind in (FEED_KIND_ALL, CONTENT_KIND_OPPORTUNITY):
        opportunities = OpportunityRepository(session).list(published_only=True)
        items.extend(
            project_opportunity(opportunity)
            for opportunity in opportunities
            if is_live(opportunity, moment)
        )
    return sorted(items, key=_sort_key)


__all__ = [
    "FEED_KINDS",
    "FEED_KIND_ALL",
    "active_feed",
    "project_event",
    "project_opportunity",
]
