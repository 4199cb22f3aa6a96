"""Deliver a notification to every member of its resolved audience."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_feed.config import get_settings
from campus_feed.domain.entities import Notification, TargetingSpec
from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.notifications import dispatch_notification
from campus_feed.infrastructure.repositories import NotificationRepository

from .audience import resolve_audience

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FanOutResult:
    notification_id: UUID
    delivered_count: int


def deliver(session: Session, notification: Notification, spec: TargetingSpec) -> FanOutResult:
    """Persist ``notification`` and create one delivery record per recipient.

    The targeting specification is validated before anything is written, so an
    invalid specification leaves the store untouched. The notification row is
    committed on its own before fan-out starts; a failure while creating it means
    no delivery record exists.
    """

    notification.targeting = spec.to_payload()
    repository = NotificationRepository(session)
    saved = repository.create(notification)
    delivered_count = _fan_out(session, repository, saved, spec)
    return FanOutResult(notification_id=saved.id, delivered_count=delivered_count)


def redeliver(session: Session, notification_id: UUID, spec: TargetingSpec) -> FanOutResult:
    """Re-run fan-out for an existing notification without duplicating deliveries."""

    spec.mode()
    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFound(f"Notification {notification_id} not found")
    delivered_count = _fan_out(session, repository, notification, spec)
    return FanOutResult(notification_id=notification_id, delivered_count=delivered_count)


def _fan_out(
    session: Session,
    repository: NotificationRepository,
    notification: Notification,
    spec: TargetingSpec,
) -> int:
    recipients = sorted(resolve_audience(session, spec), key=str)
    batch_size = get_settings().fanout_batch_size

    new_recipients: list[UUID] = []
    for start in range(0, len(recipients), batch_size):
        batch = recipients[start : start + batch_size]
        new_recipients.extend(_insert_batch(repository, notification.id, batch))

    try:
        repository.increment_send_count(notification.id, len(new_recipients))
    except SQLAlchemyError:
        session.rollback()
        logger.warning(
            "Could not update send count of notification %s", notification.id, exc_info=True
        )

    logger.info(
        "Notification %s fanned out to %s recipients (%s new deliveries)",
        notification.id,
        len(recipients),
        len(new_recipients),
    )
    # Recipients that already had a delivery were pushed the first time round.
    if new_recipients and notification.is_published:
        dispatch_notification(notification, new_recipients)
    return repository.count_deliveries(notification.id)


def _insert_batch(
    repository: NotificationRepository, notification_id: UUID, batch: Sequence[UUID]
) -> Sequence[UUID]:
    try:
        return repository.insert_deliveries(notification_id, batch)
    except SQLAlchemyError:
        logger.warning(
            "Delivery batch of %s recipients failed for notification %s; retrying one by one",
            len(batch),
            notification_id,
        )

    inserted: list[UUID] = []
    for recipient_id in batch:
        try:
            inserted.extend(repository.insert_deliveries(notification_id, [recipient_id]))
        except SQLAlchemyError:
            logger.exception(
                "Skipping delivery of notification %s to recipient %s",
                notification_id,
                recipient_id,
            )
    return inserted


__all__ = ["FanOutResult", "deliver", "redeliver"]
