"""Domain entities for authored notifications and their per-recipient delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

CATEGORY_CUSTOM = "custom"
CATEGORY_ANNOUNCEMENT = "announcement"
CATEGORY_EVENT = "event"
CATEGORY_OPPORTUNITY = "opportunity"
CATEGORY_EXAM_REMINDER = "exam_reminder"
CATEGORY_TIMETABLE_UPDATE = "timetable_update"

NOTIFICATION_CATEGORIES = (
    CATEGORY_CUSTOM,
    CATEGORY_ANNOUNCEMENT,
    CATEGORY_EVENT,
    CATEGORY_OPPORTUNITY,
    CATEGORY_EXAM_REMINDER,
    CATEGORY_TIMETABLE_UPDATE,
)

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITY_URGENT = "urgent"

NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH, PRIORITY_URGENT)


@dataclass
class Notification:
    """Content authored once and delivered to a resolved audience."""

    id: UUID | None
    title: str
    body: str
    category: str = CATEGORY_CUSTOM
    priority: str = PRIORITY_NORMAL
    payload: dict[str, Any] = field(default_factory=dict)
    targeting: dict[str, Any] = field(default_factory=dict)
    is_published: bool = True
    expires_at: datetime | None = None
    send_count: int = 0
    related_resource_type: str | None = None
    related_resource_id: UUID | None = None
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class DeliveryRecord:
    """Tracks the read state of one notification for one recipient."""

    id: UUID | None
    notification_id: UUID
    recipient_id: UUID
    is_read: bool = False
    read_at: datetime | None = None
    is_dismissed: bool = False
    dismissed_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class FeedEntry:
    """A delivery record joined with its parent notification."""

    delivery: DeliveryRecord
    notification: Notification


__all__ = [
    "CATEGORY_ANNOUNCEMENT",
    "CATEGORY_CUSTOM",
    "CATEGORY_EVENT",
    "CATEGORY_EXAM_REMINDER",
    "CATEGORY_OPPORTUNITY",
    "CATEGORY_TIMETABLE_UPDATE",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "PRIORITY_URGENT",
    "DeliveryRecord",
    "FeedEntry",
    "Notification",
]
