"""Check whether a branch/year/semester combination can be selected."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import CombinationStatus
from campus_feed.infrastructure.repositories import TaxonomyRepository

MESSAGE_AVAILABLE = "Available for registration"
MESSAGE_BRANCH_CLOSED = "This branch is currently not accepting new registrations"
MESSAGE_YEAR_CLOSED = "This year is currently not available for registration"
MESSAGE_SEMESTER_CLOSED = "This semester is currently not available for registration"


def check_combination(
    session: Session,
    branch_id: UUID,
    year_number: int | None = None,
    semester_number: int | None = None,
) -> CombinationStatus:
    """Report which level of the combination, if any, is closed.

    Unknown rows count as inactive. Levels that are not asked about count as
    active; the semester is only checked together with a year.
    """

    repository = TaxonomyRepository(session)
    branch = repository.get_branch(branch_id)
    branch_active = bool(branch and branch.is_active)

    year_active = True
    if year_number is not None:
        year = repository.get_year(branch_id, year_number)
        year_active = bool(year and year.is_active)

    semester_active = True
    if year_number is not None and semester_number is not None:
        semester = repository.get_semester(branch_id, year_number, semester_number)
        semester_active = bool(semester and semester.is_active)

    if not branch_active:
        message = MESSAGE_BRANCH_CLOSED
    elif not year_active:
        message = MESSAGE_YEAR_CLOSED
    elif not semester_active:
        message = MESSAGE_SEMESTER_CLOSED
    else:
        message = MESSAGE_AVAILABLE

    return CombinationStatus(
        can_select=branch_active and year_active and semester_active,
        branch_active=branch_active,
        year_active=year_active,
        semester_active=semester_active,
        message=message,
    )
