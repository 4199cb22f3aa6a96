"""Persistence layer for opportunities and the bookmarks pointing at them."""

from collections.abc import Callable, Iterable, Sequence
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_feed.domain.entities import Bookmark, Opportunity
from campus_feed.infrastructure.models import BookmarkModel, OpportunityModel
from campus_feed.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from ._conflicts import insert_ignoring_conflicts


class OpportunityRepository:
    """Provide CRUD operations for opportunities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        published_only: bool = False,
        opportunity_type: str | None = None,
    ) -> Sequence[Opportunity]:
        query = self.session.query(OpportunityModel)
        if published_only:
            query = query.filter(OpportunityModel.is_published.is_(True))
        if opportunity_type is not None:
            query = query.filter(OpportunityModel.opportunity_type == opportunity_type)
        query = query.order_by(OpportunityModel.created_at.desc(), OpportunityModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, opportunity_id: UUID) -> Opportunity | None:
        model = self.session.get(OpportunityModel, opportunity_id)
        return self._to_entity(model) if model else None

    def create(self, opportunity: Opportunity) -> Opportunity:
        model = OpportunityModel()
        self._apply_entity_to_model(model, opportunity, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, opportunity: Opportunity) -> Opportunity:
        if opportunity.id is None:
            raise ValueError("Opportunity id is required for updates")
        model = self.session.get(OpportunityModel, opportunity.id)
        if model is None:
            msg = f"Opportunity with id {opportunity.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, opportunity, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_many(
        self,
        opportunity_ids: Iterable[UUID],
        *,
        recheck: Callable[[Opportunity], bool] | None = None,
    ) -> int:
        """Delete opportunities together with their bookmarks in a single transaction."""

        ids = list(set(opportunity_ids))
        if not ids:
            return 0
        try:
            if recheck is not None:
                # Skip rows whose deadline moved since they were selected.
                locked = (
                    self.session.query(OpportunityModel)
                    .filter(OpportunityModel.id.in_(ids))
                    .with_for_update()
                    .populate_existing()
                    .all()
                )
                ids = [model.id for model in locked if recheck(self._to_entity(model))]
                if not ids:
                    self.session.commit()
                    return 0
            self.session.query(BookmarkModel).filter(
                BookmarkModel.opportunity_id.in_(ids)
            ).delete(synchronize_session=False)
            deleted = (
                self.session.query(OpportunityModel)
                .filter(OpportunityModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return deleted

    def add_bookmark(self, opportunity_id: UUID, user_id: UUID) -> bool:
        row = {
            "id": uuid4(),
            "opportunity_id": opportunity_id,
            "user_id": user_id,
            "created_at": ensure_app_naive_datetime(now_in_app_timezone()),
        }
        inserted = insert_ignoring_conflicts(
            self.session,
            BookmarkModel,
            [row],
            conflict_columns=("opportunity_id", "user_id"),
        )
        return inserted > 0

    def remove_bookmark(self, opportunity_id: UUID, user_id: UUID) -> bool:
        deleted = (
            self.session.query(BookmarkModel)
            .filter(
                BookmarkModel.opportunity_id == opportunity_id,
                BookmarkModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    def list_bookmarked(self, user_id: UUID) -> Sequence[tuple[Bookmark, Opportunity]]:
        """Return the user's bookmarks joined with their opportunity, newest first."""

        query = (
            self.session.query(BookmarkModel, OpportunityModel)
            .join(OpportunityModel, BookmarkModel.opportunity_id == OpportunityModel.id)
            .filter(BookmarkModel.user_id == user_id)
            .order_by(BookmarkModel.created_at.desc(), BookmarkModel.id.desc())
        )
        return [
            (
                Bookmark(
                    id=bookmark.id,
                    opportunity_id=bookmark.opportunity_id,
                    user_id=bookmark.user_id,
                    created_at=ensure_app_timezone(bookmark.created_at),
                ),
                self._to_entity(opportunity),
            )
            for bookmark, opportunity in query.all()
        ]

    @staticmethod
    def _apply_entity_to_model(
        model: OpportunityModel,
        opportunity: Opportunity,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            if opportunity.id is not None:
                model.id = opportunity.id
            model.created_by = opportunity.created_by
            model.created_at = (
                ensure_app_naive_datetime(opportunity.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.title = opportunity.title
        model.opportunity_type = opportunity.opportunity_type
        model.company_name = opportunity.company_name
        model.description = opportunity.description
        model.eligibility = opportunity.eligibility
        model.location = opportunity.location
        model.is_remote = opportunity.is_remote
        model.application_link = opportunity.application_link
        model.stipend = opportunity.stipend
        model.target_branch_id = opportunity.target_branch_id
        model.target_year = opportunity.target_year
        model.deadline = ensure_app_naive_datetime(opportunity.deadline)
        model.is_published = opportunity.is_published

    @staticmethod
    def _to_entity(model: OpportunityModel) -> Opportunity:
        return Opportunity(
            id=model.id,
            title=model.title,
            opportunity_type=model.opportunity_type,
            company_name=model.company_name,
            description=model.description,
            eligibility=model.eligibility,
            location=model.location,
            is_remote=bool(model.is_remote),
            application_link=model.application_link,
            stipend=model.stipend,
            target_branch_id=model.target_branch_id,
            target_year=model.target_year,
            deadline=ensure_app_timezone(model.deadline),
            is_published=bool(model.is_published),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["OpportunityRepository"]
