"""FastAPI dependency utilities."""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from campus_feed.domain.entities import User
from campus_feed.infrastructure.database import get_db
from campus_feed.infrastructure.repositories import UserRepository


def resolve_user(raw_user_id: str | None, db: Session) -> User:
    """Return the user identified by ``raw_user_id``."""

    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    try:
        user_id = UUID(raw_user_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        ) from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_current_user(
    x_user_id: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Return the caller identified by the ``X-User-Id`` header."""

    return resolve_user(x_user_id, db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the caller has administrator privileges."""

    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user
