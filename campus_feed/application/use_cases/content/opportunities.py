"""Use cases for authoring and reading opportunities."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import Opportunity
from campus_feed.domain.exceptions import NotFound
from campus_feed.domain.expiration import is_live
from campus_feed.infrastructure.repositories import OpportunityRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

from .announce import announce_opportunity

OPPORTUNITY_TYPES = ("Internship", "Job", "Scholarship", "Competition", "Workshop", "Hackathon")

EDITABLE_OPPORTUNITY_FIELDS = frozenset(
    {
        "title",
        "opportunity_type",
        "company_name",
        "description",
        "eligibility",
        "location",
        "is_remote",
        "application_link",
        "stipend",
        "target_branch_id",
        "target_year",
        "deadline",
        "is_published",
    }
)


def _validate(opportunity: Opportunity) -> None:
    if not opportunity.title or not opportunity.title.strip():
        raise ValueError("Title is required")
    if not opportunity.description:
        raise ValueError("Description is required")
    if opportunity.opportunity_type not in OPPORTUNITY_TYPES:
        raise ValueError(
            f"Opportunity type must be one of: {', '.join(OPPORTUNITY_TYPES)}"
        )
    if opportunity.target_year is not None and not 1 <= opportunity.target_year <= 4:
        raise ValueError("target_year must be between 1 and 4")


def create_opportunity(
    session: Session,
    *,
    title: str,
    opportunity_type: str,
    description: str,
    company_name: str | None = None,
    eligibility: str | None = None,
    location: str | None = None,
    is_remote: bool = False,
    application_link: str | None = None,
    stipend: str | None = None,
    target_branch_id: UUID | None = None,
    target_year: int | None = None,
    deadline: datetime | None = None,
    is_published: bool = True,
    created_by: UUID | None = None,
    announce: bool = True,
) -> Opportunity:
    """Create an opportunity and, when published, announce it to its audience."""

    entity = Opportunity(
        id=None,
        title=title.strip() if title else title,
        opportunity_type=opportunity_type,
        description=description,
        company_name=company_name,
        eligibility=eligibility,
        location=location,
        is_remote=is_remote,
        application_link=application_link,
        stipend=stipend,
        target_branch_id=target_branch_id,
        target_year=target_year,
        deadline=ensure_app_timezone(deadline),
        is_published=is_published,
        created_by=created_by,
        created_at=now_in_app_timezone(),
    )
    _validate(entity)
    saved = OpportunityRepository(session).create(entity)
    if announce and saved.is_published:
        announce_opportunity(session, saved)
    return saved


def update_opportunity(session: Session, opportunity_id: UUID, **changes: Any) -> Opportunity:
    unknown = set(changes) - EDITABLE_OPPORTUNITY_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    repository = OpportunityRepository(session)
    current = repository.get(opportunity_id)
    if current is None:
        raise NotFound(f"Opportunity {opportunity_id} not found")

    if "deadline" in changes:
        changes["deadline"] = ensure_app_timezone(changes["deadline"])
    updated = replace(current, **changes)
    _validate(updated)
    return repository.update(updated)


def get_opportunity(
    session: Session,
    opportunity_id: UUID,
    *,
    include_hidden: bool = False,
    now: datetime | None = None,
) -> Opportunity:
    opportunity = OpportunityRepository(session).get(opportunity_id)
    if opportunity is None or (not include_hidden and not is_live(opportunity, now)):
        raise NotFound(f"Opportunity {opportunity_id} not found")
    return opportunity


def list_opportunities(
    session: Session,
    *,
    include_hidden: bool = False,
    opportunity_type: str | None = None,
    now: datetime | None = None,
) -> list[Opportunity]:
    repository = OpportunityRepository(session)
    if include_hidden:
        return list(repository.list(opportunity_type=opportunity_type))
    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return [
        opportunity
        for opportunity in repository.list(published_only=True, opportunity_type=opportunity_type)
        if is_live(opportunity, moment)
    ]


def delete_opportunity(session: Session, opportunity_id: UUID) -> None:
    """Delete the opportunity together with its bookmarks."""

    repository = OpportunityRepository(session)
    if repository.get(opportunity_id) is None:
        raise NotFound(f"Opportunity {opportunity_id} not found")
    repository.delete_many([opportunity_id])


__all__ = [
    "EDITABLE_OPPORTUNITY_FIELDS",
    "OPPORTUNITY_TYPES",
    "create_opportunity",
    "delete_opportunity",
    "get_opportunity",
    "list_opportunities",
    "update_opportunity",
]
