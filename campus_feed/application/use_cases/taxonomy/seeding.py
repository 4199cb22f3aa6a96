"""Create a branch with its full year and semester structure."""

from sqlalchemy.orm import Session

from campus_feed.domain.entities import Branch, BranchSemester, BranchYear
from campus_feed.infrastructure.repositories import TaxonomyRepository

YEARS_PER_BRANCH = 4
SEMESTERS_PER_YEAR = 2


def seed_branch(session: Session, *, code: str, name: str, display_order: int = 1) -> Branch:
    """Create ``code`` with years 1-4 and semesters 1-8, skipping rows that exist."""

    repository = TaxonomyRepository(session)
    branch = repository.get_branch_by_code(code)
    if branch is None:
        branch = repository.create_branch(
            Branch(id=None, code=code, name=name, display_order=display_order)
        )

    for year_number in range(1, YEARS_PER_BRANCH + 1):
        year = repository.get_year(branch.id, year_number)
        if year is None:
            year = repository.create_year(
                BranchYear(
                    id=None,
                    branch_id=branch.id,
                    year_number=year_number,
                    display_order=year_number,
                )
            )
        first_semester = (year_number - 1) * SEMESTERS_PER_YEAR + 1
        for semester_number in range(first_semester, first_semester + SEMESTERS_PER_YEAR):
            if repository.get_semester(branch.id, year_number, semester_number) is not None:
                continue
            repository.create_semester(
                BranchSemester(
                    id=None,
                    branch_year_id=year.id,
                    branch_id=branch.id,
                    year_number=year_number,
                    semester_number=semester_number,
                    label=f"Semester {semester_number}",
                    display_order=semester_number,
                )
            )
    return branch
