"""Use case for creating users."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import User
from campus_feed.domain.exceptions import Conflict
from campus_feed.infrastructure.repositories import UserRepository
from campus_feed.utils import now_in_app_timezone

from .validators import ensure_academic_profile, normalize_email


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    branch_id: UUID | None = None,
    year: int | None = None,
    semester: int | None = None,
    is_admin: bool = False,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise Conflict("The email address is already registered")

    ensure_academic_profile(session, branch_id=branch_id, year=year, semester=semester)

    user = User(
        id=None,
        name=name,
        email=normalized_email,
        branch_id=branch_id,
        year=year,
        semester=semester,
        is_admin=is_admin,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
