"""Persistence helpers for notifications and their delivery records."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_feed.domain.entities import DeliveryRecord, FeedEntry, Notification
from campus_feed.infrastructure.models import DeliveryRecordModel, NotificationModel
from campus_feed.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from ._conflicts import insert_ignoring_conflicts

_DELIVERY_CONFLICT_COLUMNS = ("notification_id", "recipient_id")


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: UUID) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list(self, *, skip: int = 0, limit: int | None = 50) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_all(self) -> Sequence[Notification]:
        """Return every stored notification regardless of state."""

        return [self._to_entity(model) for model in self.session.query(NotificationModel).all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def increment_send_count(self, notification_id: UUID, amount: int) -> None:
        if amount <= 0:
            return
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id
        ).update(
            {NotificationModel.send_count: NotificationModel.send_count + amount},
            synchronize_session=False,
        )
        self.session.commit()

    def delete_with_deliveries(
        self,
        notification_ids: Iterable[UUID],
        *,
        recheck: Callable[[Notification], bool] | None = None,
    ) -> int:
        """Delete notifications and their delivery records in one transaction.

        When ``recheck`` is given the candidate rows are reloaded under a row lock
        and only those still satisfying it are deleted.
        """

        ids = list(set(notification_ids))
        if not ids:
            return 0
        try:
            if recheck is not None:
                locked = (
                    self.session.query(NotificationModel)
                    .filter(NotificationModel.id.in_(ids))
                    .with_for_update()
                    .populate_existing()
                    .all()
                )
                ids = [model.id for model in locked if recheck(self._to_entity(model))]
                if not ids:
                    self.session.commit()
                    return 0
            self.session.query(DeliveryRecordModel).filter(
                DeliveryRecordModel.notification_id.in_(ids)
            ).delete(synchronize_session=False)
            deleted = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return deleted

    # Delivery records -------------------------------------------------

    def insert_deliveries(
        self, notification_id: UUID, recipient_ids: Iterable[UUID]
    ) -> Sequence[UUID]:
        """Create delivery records, skipping pairs that already exist.

        Returns the recipients that received a new record in this call.
        """

        created_at = ensure_app_naive_datetime(now_in_app_timezone())
        rows = [
            {
                "id": uuid4(),
                "notification_id": notification_id,
                "recipient_id": recipient_id,
                "is_read": False,
                "is_dismissed": False,
                "created_at": created_at,
            }
            for recipient_id in recipient_ids
        ]
        if not rows:
            return []
        insert_ignoring_conflicts(
            self.session,
            DeliveryRecordModel,
            rows,
            conflict_columns=_DELIVERY_CONFLICT_COLUMNS,
        )
        # Skipped rows never got stored, so only our freshly generated ids match.
        written = (
            self.session.query(DeliveryRecordModel.recipient_id)
            .filter(DeliveryRecordModel.id.in_([row["id"] for row in rows]))
            .all()
        )
        return [recipient_id for (recipient_id,) in written]

    def count_deliveries(self, notification_id: UUID) -> int:
        return (
            self.session.query(DeliveryRecordModel)
            .filter(DeliveryRecordModel.notification_id == notification_id)
            .count()
        )

    def get_delivery(self, notification_id: UUID, recipient_id: UUID) -> DeliveryRecord | None:
        model = (
            self.session.query(DeliveryRecordModel)
            .filter(DeliveryRecordModel.notification_id == notification_id)
            .filter(DeliveryRecordModel.recipient_id == recipient_id)
            .first()
        )
        return self._delivery_to_entity(model) if model else None

    def mark_as_read(
        self,
        notification_ids: Iterable[UUID],
        *,
        recipient_id: UUID,
        read_at: datetime | None = None,
    ) -> int:
        """Flip unread records to read; records already read are left untouched."""

        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.notification_id.in_(ids),
                DeliveryRecordModel.recipient_id == recipient_id,
                DeliveryRecordModel.is_read.is_(False),
            )
            .update(
                {
                    DeliveryRecordModel.is_read: True,
                    DeliveryRecordModel.read_at: ensure_app_naive_datetime(
                        read_at or now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def dismiss(
        self,
        notification_id: UUID,
        *,
        recipient_id: UUID,
        dismissed_at: datetime | None = None,
    ) -> bool:
        """Hide an entry from the recipient's feed; dismissing also marks it read."""

        model = (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.notification_id == notification_id,
                DeliveryRecordModel.recipient_id == recipient_id,
            )
            .first()
        )
        if model is None or model.is_dismissed:
            return False
        moment = ensure_app_naive_datetime(dismissed_at or now_in_app_timezone())
        model.is_dismissed = True
        model.dismissed_at = moment
        if not model.is_read:
            model.is_read = True
            model.read_at = moment
        self.session.add(model)
        self.session.commit()
        return True

    def list_entries_for_recipient(
        self,
        recipient_id: UUID,
        *,
        unread_only: bool = False,
    ) -> list[FeedEntry]:
        """Return published, non-dismissed entries, most recent notification first."""

        query = (
            self.session.query(DeliveryRecordModel, NotificationModel)
            .join(NotificationModel, DeliveryRecordModel.notification_id == NotificationModel.id)
            .filter(DeliveryRecordModel.recipient_id == recipient_id)
            .filter(DeliveryRecordModel.is_dismissed.is_(False))
            .filter(NotificationModel.is_published.is_(True))
        )
        if unread_only:
            query = query.filter(DeliveryRecordModel.is_read.is_(False))
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        return [
            FeedEntry(
                delivery=self._delivery_to_entity(delivery),
                notification=self._to_entity(notification),
            )
            for delivery, notification in query.all()
        ]

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            if notification.id is not None:
                model.id = notification.id
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
            model.created_by = notification.created_by
            model.send_count = notification.send_count or 0
        model.title = notification.title
        model.body = notification.body
        model.category = notification.category
        model.priority = notification.priority
        model.payload = notification.payload or {}
        model.targeting = notification.targeting or {}
        model.related_resource_type = notification.related_resource_type
        model.related_resource_id = notification.related_resource_id
        model.is_published = notification.is_published
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            body=model.body,
            category=model.category,
            priority=model.priority,
            payload=model.payload or {},
            targeting=model.targeting or {},
            is_published=bool(model.is_published),
            expires_at=ensure_app_timezone(model.expires_at),
            send_count=model.send_count or 0,
            related_resource_type=model.related_resource_type,
            related_resource_id=model.related_resource_id,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _delivery_to_entity(model: DeliveryRecordModel) -> DeliveryRecord:
        return DeliveryRecord(
            id=model.id,
            notification_id=model.notification_id,
            recipient_id=model.recipient_id,
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            is_dismissed=bool(model.is_dismissed),
            dismissed_at=ensure_app_timezone(model.dismissed_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
