"""Routes for managing the accounts notifications are delivered to."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from campus_feed.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    update_user as update_user_uc,
)
from campus_feed.domain.entities import User
from campus_feed.infrastructure.database import get_db
from campus_feed.interfaces.api.dependencies import get_current_user, require_admin
from campus_feed.interfaces.api.errors import DOMAIN_ERRORS, to_http_exception
from campus_feed.interfaces.api.schemas import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

_ADMIN_ONLY_FIELDS = {"email", "is_admin"}


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Create a new account."""

    try:
        user = create_user_uc(db, **user_in.model_dump())
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return _to_read_model(current_user)


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    users = list_users_uc(db, skip=skip, limit=limit)
    return [_to_read_model(user) for user in users]


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        user = get_user_uc(db, user_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(user)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: UUID,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update an account; students may only edit their own name and academic profile."""

    update_data = user_in.model_dump(exclude_unset=True)
    if not current_user.is_admin:
        if user_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
        forbidden = _ADMIN_ONLY_FIELDS & set(update_data)
        if forbidden:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only administrators can change: {', '.join(sorted(forbidden))}",
            )

    try:
        user = update_user_uc(db, user_id=user_id, **update_data)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Delete the account together with its deliveries, bookmarks and RSVPs."""

    try:
        delete_user_uc(db, user_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
