"""Utility helpers to push delivered notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable
from uuid import UUID

from anyio import from_thread

from campus_feed.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery to connected users.

    Pushes are best effort. Recipients without an open websocket are skipped and
    a push that cannot be scheduled from the calling thread is dropped; the
    delivery record stays the source of truth either way.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification, recipients: Iterable[UUID]) -> int:
        """Schedule ``notification`` for every connected recipient and return how many."""

        message = {"type": "notification", "data": self._serialize(notification)}
        scheduled = 0
        for user_id in set(recipients) & self._manager.connected_users():
            if self._schedule_send(user_id, dict(message)):
                scheduled += 1
        return scheduled

    def _schedule_send(self, user_id: UUID, message: dict[str, Any]) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_user, user_id, message)
            except RuntimeError:
                logger.debug(
                    "No event loop reachable to push notification to user %s", user_id
                )
                return False
        else:
            loop.create_task(self._manager.send_to_user(user_id, message))
        return True

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": str(notification.id),
            "title": notification.title,
            "body": notification.body,
            "category": notification.category,
            "priority": notification.priority,
            "payload": notification.payload or {},
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
            "expires_at": notification.expires_at.isoformat()
            if notification.expires_at
            else None,
        }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification, recipients: Iterable[UUID]) -> int:
    """Public helper that delegates to the shared publisher instance."""

    return notification_publisher.dispatch(notification, recipients)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
