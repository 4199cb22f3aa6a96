"""Persistence layer for campus events and their RSVPs."""

from collections.abc import Callable, Iterable, Sequence
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_feed.domain.entities import Event, EventRsvp
from campus_feed.infrastructure.models import EventModel, EventRsvpModel
from campus_feed.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from ._conflicts import insert_ignoring_conflicts


class EventRepository:
    """Provide CRUD operations for events."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, published_only: bool = False) -> Sequence[Event]:
        query = self.session.query(EventModel)
        if published_only:
            query = query.filter(EventModel.is_published.is_(True))
        query = query.order_by(EventModel.event_date.asc(), EventModel.created_at.desc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, event_id: UUID) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def create(self, event: Event) -> Event:
        model = EventModel()
        self._apply_entity_to_model(model, event, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, event: Event) -> Event:
        if event.id is None:
            raise ValueError("Event id is required for updates")
        model = self.session.get(EventModel, event.id)
        if model is None:
            msg = f"Event with id {event.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, event, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_many(
        self,
        event_ids: Iterable[UUID],
        *,
        recheck: Callable[[Event], bool] | None = None,
    ) -> int:
        """Delete events together with their RSVPs in a single transaction."""

        ids = list(set(event_ids))
        if not ids:
            return 0
        try:
            if recheck is not None:
                locked = (
                    self.session.query(EventModel)
                    .filter(EventModel.id.in_(ids))
                    .with_for_update()
                    .populate_existing()
                    .all()
                )
                ids = [model.id for model in locked if recheck(self._to_entity(model))]
                if not ids:
                    self.session.commit()
                    return 0
            self.session.query(EventRsvpModel).filter(EventRsvpModel.event_id.in_(ids)).delete(
                synchronize_session=False
            )
            deleted = (
                self.session.query(EventModel)
                .filter(EventModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return deleted

    def add_rsvp(self, event_id: UUID, user_id: UUID) -> bool:
        """Register ``user_id`` for the event; returns ``False`` when already registered."""

        row = {
            "id": uuid4(),
            "event_id": event_id,
            "user_id": user_id,
            "created_at": ensure_app_naive_datetime(now_in_app_timezone()),
        }
        inserted = insert_ignoring_conflicts(
            self.session, EventRsvpModel, [row], conflict_columns=("event_id", "user_id")
        )
        return inserted > 0

    def remove_rsvp(self, event_id: UUID, user_id: UUID) -> bool:
        deleted = (
            self.session.query(EventRsvpModel)
            .filter(EventRsvpModel.event_id == event_id, EventRsvpModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    def count_rsvps(self, event_id: UUID) -> int:
        return self.session.query(EventRsvpModel).filter(EventRsvpModel.event_id == event_id).count()

    def list_rsvps(self, event_id: UUID) -> Sequence[EventRsvp]:
        query = (
            self.session.query(EventRsvpModel)
            .filter(EventRsvpModel.event_id == event_id)
            .order_by(EventRsvpModel.created_at.asc())
        )
        return [
            EventRsvp(
                id=model.id,
                event_id=model.event_id,
                user_id=model.user_id,
                created_at=ensure_app_timezone(model.created_at),
            )
            for model in query.all()
        ]

    @staticmethod
    def _apply_entity_to_model(
        model: EventModel,
        event: Event,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            if event.id is not None:
                model.id = event.id
            model.created_by = event.created_by
            model.created_at = (
                ensure_app_naive_datetime(event.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.title = event.title
        model.description = event.description
        model.event_date = event.event_date
        model.start_time = event.start_time
        model.end_time = event.end_time
        model.location = event.location
        model.organizer = event.organizer
        model.target_branch_id = event.target_branch_id
        model.registration_deadline = ensure_app_naive_datetime(event.registration_deadline)
        model.max_participants = event.max_participants
        model.is_published = event.is_published
        model.expires_at = ensure_app_naive_datetime(event.expires_at)

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            title=model.title,
            description=model.description,
            event_date=model.event_date,
            start_time=model.start_time,
            end_time=model.end_time,
            location=model.location,
            organizer=model.organizer,
            target_branch_id=model.target_branch_id,
            registration_deadline=ensure_app_timezone(model.registration_deadline),
            max_participants=model.max_participants,
            is_published=bool(model.is_published),
            expires_at=ensure_app_timezone(model.expires_at),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["EventRepository"]
