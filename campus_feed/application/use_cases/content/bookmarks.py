"""Use cases for saving opportunities for later."""

from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import Opportunity
from campus_feed.domain.exceptions import NotFound
from campus_feed.domain.expiration import is_live
from campus_feed.infrastructure.repositories import OpportunityRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone


def add_bookmark(
    session: Session, opportunity_id: UUID, user_id: UUID, *, now: datetime | None = None
) -> bool:
    """Bookmark the opportunity; bookmarking twice keeps a single bookmark.

    Unpublished or closed opportunities are reported as missing.
    """

    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    repository = OpportunityRepository(session)
    opportunity = repository.get(opportunity_id)
    if opportunity is None or not is_live(opportunity, moment):
        raise NotFound(f"Opportunity {opportunity_id} not found")
    return repository.add_bookmark(opportunity_id, user_id)


def remove_bookmark(session: Session, opportunity_id: UUID, user_id: UUID) -> bool:
    return OpportunityRepository(session).remove_bookmark(opportunity_id, user_id)


def list_bookmarks(
    session: Session, user_id: UUID, *, now: datetime | None = None
) -> list[Opportunity]:
    """Return the live opportunities bookmarked by ``user_id``, most recently saved first."""

    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    rows = OpportunityRepository(session).list_bookmarked(user_id)
    return [opportunity for _bookmark, opportunity in rows if is_live(opportunity, moment)]


__all__ = ["add_bookmark", "list_bookmarks", "remove_bookmark"]
