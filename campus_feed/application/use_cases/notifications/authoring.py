"""Administrative use cases for authoring notifications."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import (
    CATEGORY_CUSTOM,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_NORMAL,
    Notification,
    TargetingSpec,
)
from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import NotificationRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

from .fan_out import FanOutResult, deliver

_UNSET: Any = object()


def create_notification(
    session: Session,
    *,
    title: str,
    body: str,
    targeting: TargetingSpec,
    category: str = CATEGORY_CUSTOM,
    priority: str = PRIORITY_NORMAL,
    expires_at: datetime | None = None,
    payload: dict[str, Any] | None = None,
    created_by: UUID | None = None,
    is_published: bool = True,
    related_resource_type: str | None = None,
    related_resource_id: UUID | None = None,
) -> FanOutResult:
    """Author a notification and deliver it synchronously to its audience."""

    if not title or not title.strip():
        raise ValueError("Title is required")
    if category not in NOTIFICATION_CATEGORIES:
        raise ValueError(f"Unknown notification category '{category}'")
    if priority not in NOTIFICATION_PRIORITIES:
        raise ValueError(f"Unknown notification priority '{priority}'")

    notification = Notification(
        id=None,
        title=title.strip(),
        body=body,
        category=category,
        priority=priority,
        payload=payload or {},
        is_published=is_published,
        expires_at=ensure_app_timezone(expires_at),
        related_resource_type=related_resource_type,
        related_resource_id=related_resource_id,
        created_by=created_by,
        created_at=now_in_app_timezone(),
    )
    return deliver(session, notification, targeting)


def get_notification(session: Session, notification_id: UUID) -> Notification:
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFound(f"Notification {notification_id} not found")
    return notification


def update_notification(
    session: Session,
    notification_id: UUID,
    *,
    is_published: bool | None = None,
    expires_at: datetime | None = _UNSET,
) -> Notification:
    """Change the publication flag or the expiry of a published notification.

    These are the only fields that may change once a notification has been
    delivered. Passing ``expires_at=None`` clears the expiry.
    """

    repository = NotificationRepository(session)
    current = repository.get(notification_id)
    if current is None:
        raise NotFound(f"Notification {notification_id} not found")

    updated = replace(
        current,
        is_published=is_published if is_published is not None else current.is_published,
        expires_at=current.expires_at if expires_at is _UNSET else ensure_app_timezone(expires_at),
    )
    return repository.update(updated)


def delete_notification(session: Session, notification_id: UUID) -> None:
    repository = NotificationRepository(session)
    if repository.get(notification_id) is None:
        raise NotFound(f"Notification {notification_id} not found")
    repository.delete_with_deliveries([notification_id])


def list_notifications(session: Session, *, skip: int = 0, limit: int = 50) -> list[Notification]:
    return list(NotificationRepository(session).list(skip=skip, limit=limit))


__all__ = [
    "create_notification",
    "delete_notification",
    "get_notification",
    "list_notifications",
    "update_notification",
]
