"""Use case for deleting a user."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import UserRepository


def delete_user(session: Session, user_id: UUID) -> None:
    """Delete the user together with their deliveries, bookmarks and RSVPs."""

    if not UserRepository(session).delete(user_id):
        raise NotFound(f"User {user_id} not found")
