"""Use case for opening or closing part of the hierarchy for registration."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import TAXONOMY_KINDS, Branch, BranchSemester, BranchYear
from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import TaxonomyRepository

logger = logging.getLogger(__name__)


def set_active(
    session: Session, kind: str, entity_id: UUID, active: bool
) -> Branch | BranchYear | BranchSemester:
    """Toggle the activation flag of a branch, year or semester."""

    if kind not in TAXONOMY_KINDS:
        raise ValueError(f"kind must be one of: {', '.join(TAXONOMY_KINDS)}")
    entity = TaxonomyRepository(session).set_active(kind, entity_id, active)
    if entity is None:
        raise NotFound(f"{kind.capitalize()} {entity_id} not found")
    logger.info("%s %s is now %s", kind, entity_id, "active" if active else "inactive")
    return entity
