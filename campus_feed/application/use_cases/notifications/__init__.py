"""Use cases for notification authoring, fan-out and read state."""

from .audience import resolve_audience
from .authoring import (
    create_notification,
    delete_notification,
    get_notification,
    list_notifications,
    update_notification,
)
from .fan_out import FanOutResult, deliver, redeliver
from .read_state import (
    dismiss,
    mark_all_read,
    mark_read,
    notification_feed,
    unread_count,
    unread_feed,
)

__all__ = [
    "FanOutResult",
    "create_notification",
    "deliver",
    "delete_notification",
    "dismiss",
    "get_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
    "notification_feed",
    "redeliver",
    "resolve_audience",
    "unread_count",
    "unread_feed",
    "update_notification",
]
