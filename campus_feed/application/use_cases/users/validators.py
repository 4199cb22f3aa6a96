"""Common validation helpers for user use cases."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import TaxonomyRepository


def normalize_email(email: str) -> str:
    """Return a trimmed, lower-cased address or raise ``ValueError``."""

    normalized = email.strip()
    if normalized.count("@") != 1:
        raise ValueError("A valid email address is required")

    local_part, domain = normalized.split("@", 1)
    if not local_part or not domain:
        raise ValueError("A valid email address is required")

    return f"{local_part}@{domain.lower()}"


def ensure_academic_profile(
    session: Session,
    *,
    branch_id: UUID | None,
    year: int | None,
    semester: int | None,
) -> None:
    """Validate the branch, year and semester a student is registered for."""

    if year is not None and not 1 <= year <= 4:
        raise ValueError("Year must be between 1 and 4")
    if semester is not None and not 1 <= semester <= 8:
        raise ValueError("Semester must be between 1 and 8")
    if branch_id is not None and TaxonomyRepository(session).get_branch(branch_id) is None:
        raise NotFound(f"Branch {branch_id} not found")
