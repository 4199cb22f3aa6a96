"""Automatic announcements published when new campus content goes live."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from campus_feed.domain.entities import (
    CATEGORY_EVENT,
    CATEGORY_OPPORTUNITY,
    CONTENT_KIND_EVENT,
    CONTENT_KIND_OPPORTUNITY,
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    Event,
    Opportunity,
    TargetingSpec,
)
from campus_feed.domain.expiration import event_effective_expiry
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

from ..notifications import FanOutResult, create_notification

logger = logging.getLogger(__name__)

URGENT_DEADLINE_WINDOW = timedelta(days=7)


def announce_event(session: Session, event: Event) -> FanOutResult | None:
    """Tell the event's audience that a new event was published."""

    if not event.is_published:
        return None

    body = f"A new event has been added. Check it out: {event.title} on {event.event_date.isoformat()}"
    targeting = (
        TargetingSpec.matching(branch_id=event.target_branch_id)
        if event.target_branch_id
        else TargetingSpec.everyone()
    )
    result = create_notification(
        session,
        title=f"New Event: {event.title}",
        body=body,
        targeting=targeting,
        category=CATEGORY_EVENT,
        priority=PRIORITY_NORMAL,
        expires_at=event_effective_expiry(event),
        payload={"event_id": str(event.id), "event_date": event.event_date.isoformat()},
        created_by=event.created_by,
        related_resource_type=CONTENT_KIND_EVENT,
        related_resource_id=event.id,
    )
    logger.info("Event %s announced to %s recipients", event.id, result.delivered_count)
    return result


def announce_opportunity(
    session: Session, opportunity: Opportunity, *, now: datetime | None = None
) -> FanOutResult | None:
    """Tell the opportunity's audience that a new opportunity was posted.

    Opportunities closing within a week are announced with high priority.
    """

    if not opportunity.is_published:
        return None

    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    deadline = ensure_app_timezone(opportunity.deadline)
    company = opportunity.company_name or "a company"
    closing = f"Deadline: {deadline.date().isoformat()}" if deadline else "Check it out now!"
    body = (
        f"A new {opportunity.opportunity_type.lower()} opportunity has been posted at "
        f"{company}. {closing}"
    )
    priority = (
        PRIORITY_HIGH
        if deadline is not None and deadline < moment + URGENT_DEADLINE_WINDOW
        else PRIORITY_NORMAL
    )
    if opportunity.target_branch_id or opportunity.target_year:
        targeting = TargetingSpec.matching(
            branch_id=opportunity.target_branch_id, year=opportunity.target_year
        )
    else:
        targeting = TargetingSpec.everyone()

    result = create_notification(
        session,
        title=f"New {opportunity.opportunity_type}: {opportunity.title}",
        body=body,
        targeting=targeting,
        category=CATEGORY_OPPORTUNITY,
        priority=priority,
        expires_at=deadline,
        payload={
            "opportunity_id": str(opportunity.id),
            "type": opportunity.opportunity_type,
            "company": opportunity.company_name,
        },
        created_by=opportunity.created_by,
        related_resource_type=CONTENT_KIND_OPPORTUNITY,
        related_resource_id=opportunity.id,
    )
    logger.info(
        "Opportunity %s announced to %s recipients", opportunity.id, result.delivered_count
    )
    return result


__all__ = ["URGENT_DEADLINE_WINDOW", "announce_event", "announce_opportunity"]
