"""Use cases for the branch, year and semester registration hierarchy."""

from .activation import set_active
from .eligibility import check_combination
from .listing import list_active_branches, list_active_semesters, list_active_years
from .seeding import seed_branch

__all__ = [
    "check_combination",
    "list_active_branches",
    "list_active_semesters",
    "list_active_years",
    "seed_branch",
    "set_active",
]
