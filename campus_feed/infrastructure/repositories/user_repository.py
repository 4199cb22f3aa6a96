"""Persistence layer for recipient accounts."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import User
from campus_feed.infrastructure.models import (
    BookmarkModel,
    DeliveryRecordModel,
    EventRsvpModel,
    UserModel,
)
from campus_feed.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide the read access the core needs plus account seeding and removal."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: UUID) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .order_by(UserModel.created_at.asc(), UserModel.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_ids(
        self,
        *,
        branch_id: UUID | None = None,
        semester: int | None = None,
        year: int | None = None,
    ) -> set[UUID]:
        """Return the ids of every account matching all provided filters."""

        query = self.session.query(UserModel.id)
        if branch_id is not None:
            query = query.filter(UserModel.branch_id == branch_id)
        if semester is not None:
            query = query.filter(UserModel.semester == semester)
        if year is not None:
            query = query.filter(UserModel.year == year)
        return {user_id for (user_id,) in query.all()}

    def existing_ids(self, user_ids: Iterable[UUID]) -> set[UUID]:
        unique_ids = set(user_ids)
        if not unique_ids:
            return set()
        query = self.session.query(UserModel.id).filter(UserModel.id.in_(unique_ids))
        return {user_id for (user_id,) in query.all()}

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: UUID) -> bool:
        """Remove the account and every weak reference pointing at it."""

        model = self.session.get(UserModel, user_id)
        if model is None:
            return False
        dependents = (
            (DeliveryRecordModel, DeliveryRecordModel.recipient_id),
            (BookmarkModel, BookmarkModel.user_id),
            (EventRsvpModel, EventRsvpModel.user_id),
        )
        for dependent_model, owner_column in dependents:
            self.session.query(dependent_model).filter(owner_column == user_id).delete(
                synchronize_session=False
            )
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        if user.id is not None:
            model.id = user.id
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        model.name = user.name
        model.email = user.email
        model.branch_id = user.branch_id
        model.year = user.year
        model.semester = user.semester
        model.is_admin = user.is_admin

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            branch_id=model.branch_id,
            year=model.year,
            semester=model.semester,
            is_admin=bool(model.is_admin),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
