"""Use case for updating user information."""

from dataclasses import replace
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import User
from campus_feed.domain.exceptions import Conflict, NotFound
from campus_feed.infrastructure.repositories import UserRepository

from .validators import ensure_academic_profile, normalize_email

_UNSET: Any = object()


def update_user(
    session: Session,
    *,
    user_id: UUID,
    name: str | None = None,
    email: str | None = None,
    branch_id: UUID | None = _UNSET,
    year: int | None = _UNSET,
    semester: int | None = _UNSET,
    is_admin: bool | None = None,
) -> User:
    """Update the provided user with the new values.

    Changing the academic profile only affects notifications fanned out later;
    existing delivery records are kept.
    """

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise NotFound(f"User {user_id} not found")

    new_email = current_user.email
    if email is not None:
        normalized_email = normalize_email(email)
        if normalized_email != current_user.email:
            existing_with_email = repository.get_by_email(normalized_email)
            if existing_with_email and existing_with_email.id != user_id:
                raise Conflict("The email address is already registered")
            new_email = normalized_email

    updated_user = replace(
        current_user,
        name=name if name is not None else current_user.name,
        email=new_email,
        branch_id=current_user.branch_id if branch_id is _UNSET else branch_id,
        year=current_user.year if year is _UNSET else year,
        semester=current_user.semester if semester is _UNSET else semester,
        is_admin=is_admin if is_admin is not None else current_user.is_admin,
    )
    ensure_academic_profile(
        session,
        branch_id=updated_user.branch_id,
        year=updated_user.year,
        semester=updated_user.semester,
    )
    return repository.update(updated_user)
