"""Use case for retrieving a single user."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import User
from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: UUID) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return user
