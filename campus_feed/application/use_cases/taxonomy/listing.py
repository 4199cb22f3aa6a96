"""Read the open parts of the registration hierarchy."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import Branch, BranchSemester, BranchYear
from campus_feed.infrastructure.repositories import TaxonomyRepository


def list_active_branches(session: Session) -> list[Branch]:
    return list(TaxonomyRepository(session).list_active_branches())


def list_active_years(session: Session, branch_id: UUID) -> list[BranchYear]:
    """Years of ``branch_id`` open for registration; empty when the branch is closed."""

    return list(TaxonomyRepository(session).list_active_years(branch_id))


def list_active_semesters(
    session: Session, branch_id: UUID, year_number: int
) -> list[BranchSemester]:
    return list(TaxonomyRepository(session).list_active_semesters(branch_id, year_number))
