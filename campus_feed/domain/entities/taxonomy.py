"""Domain entities for the branch, year and semester registration hierarchy."""

from dataclasses import dataclass
from uuid import UUID

TAXONOMY_BRANCH = "branch"
TAXONOMY_YEAR = "year"
TAXONOMY_SEMESTER = "semester"

TAXONOMY_KINDS = (TAXONOMY_BRANCH, TAXONOMY_YEAR, TAXONOMY_SEMESTER)


@dataclass
class Branch:
    id: UUID | None
    code: str
    name: str
    is_active: bool = True
    display_order: int = 1


@dataclass
class BranchYear:
    id: UUID | None
    branch_id: UUID
    year_number: int
    is_active: bool = True
    display_order: int = 1


@dataclass
class BranchSemester:
    id: UUID | None
    branch_year_id: UUID
    branch_id: UUID
    year_number: int
    semester_number: int
    label: str
    is_active: bool = True
    display_order: int = 1


@dataclass(frozen=True)
class CombinationStatus:
    """Whether a branch/year/semester combination is open for registration."""

    can_select: bool
    branch_active: bool
    year_active: bool
    semester_active: bool
    message: str


__all__ = [
    "TAXONOMY_BRANCH",
    "TAXONOMY_KINDS",
    "TAXONOMY_SEMESTER",
    "TAXONOMY_YEAR",
    "Branch",
    "BranchSemester",
    "BranchYear",
    "CombinationStatus",
]
