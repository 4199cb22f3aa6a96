"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from campus_feed.domain.entities import (
    CATEGORY_CUSTOM,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_NORMAL,
    TargetingSpec,
)


class TargetingPayload(BaseModel):
    """Audience selection; exactly one mode must be populated."""

    all_users: bool = False
    branch_id: UUID | None = None
    semester: int | None = None
    year: int | None = None
    user_ids: list[str] | None = None

    def to_spec(self) -> TargetingSpec:
        return TargetingSpec(
            all_users=self.all_users,
            branch_id=self.branch_id,
            semester=self.semester,
            year=self.year,
            user_ids=tuple(self.user_ids) if self.user_ids else None,
        )


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    category: str = CATEGORY_CUSTOM
    priority: str = PRIORITY_NORMAL
    targeting: TargetingPayload
    expires_at: datetime | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    is_published: bool = True

    @model_validator(mode="after")
    def _validate_choices(self) -> "NotificationCreate":
        if self.category not in NOTIFICATION_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(NOTIFICATION_CATEGORIES)}")
        if self.priority not in NOTIFICATION_PRIORITIES:
            raise ValueError(f"priority must be one of: {', '.join(NOTIFICATION_PRIORITIES)}")
        return self


class NotificationUpdate(BaseModel):
    """Only the publication flag and the expiry may change after publishing."""

    is_published: bool | None = None
    expires_at: datetime | None = None

    model_config = ConfigDict(extra="forbid")


class RedeliverRequest(BaseModel):
    targeting: TargetingPayload


class FanOutRead(BaseModel):
    notification_id: UUID
    delivered_count: int


class NotificationRead(BaseModel):
    """Representation of a notification as authored."""

    id: UUID
    title: str
    body: str
    category: str
    priority: str
    payload: dict[str, Any] = Field(default_factory=dict)
    targeting: dict[str, Any] = Field(default_factory=dict)
    is_published: bool
    expires_at: datetime | None = None
    send_count: int = 0
    related_resource_type: str | None = None
    related_resource_id: UUID | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FeedEntryRead(BaseModel):
    """One notification as seen by its recipient."""

    id: UUID
    title: str
    body: str
    category: str
    priority: str
    payload: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime | None = None
    created_at: datetime | None = None
    is_read: bool
    read_at: datetime | None = None


class UnreadCountRead(BaseModel):
    unread_count: int


class ReadStatusRead(BaseModel):
    status: str


class MarkAllReadRead(BaseModel):
    marked_count: int


__all__ = [
    "FanOutRead",
    "FeedEntryRead",
    "MarkAllReadRead",
    "NotificationCreate",
    "NotificationRead",
    "NotificationUpdate",
    "ReadStatusRead",
    "RedeliverRequest",
    "TargetingPayload",
    "UnreadCountRead",
]
