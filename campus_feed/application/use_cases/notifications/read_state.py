"""Per-recipient read state and the unread/feed queries built on it."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import FeedEntry
from campus_feed.domain.exceptions import NotFound
from campus_feed.domain.expiration import is_live
from campus_feed.infrastructure.repositories import NotificationRepository
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone


def mark_read(session: Session, notification_id: UUID, recipient_id: UUID) -> bool:
    """Mark the delivery read and report whether anything changed.

    Marking an already read delivery is a no-op returning ``False``; there is no
    way back to unread.
    """

    repository = NotificationRepository(session)
    if repository.get_delivery(notification_id, recipient_id) is None:
        raise NotFound(f"Notification {notification_id} was not delivered to {recipient_id}")
    return repository.mark_as_read([notification_id], recipient_id=recipient_id) > 0


def mark_all_read(session: Session, recipient_id: UUID, now: datetime | None = None) -> int:
    """Mark every unread live delivery of ``recipient_id`` read and return how many."""

    entries = _live_entries(session, recipient_id, unread_only=True, now=now)
    repository = NotificationRepository(session)
    return repository.mark_as_read(
        [entry.notification.id for entry in entries], recipient_id=recipient_id
    )


def dismiss(session: Session, notification_id: UUID, recipient_id: UUID) -> bool:
    repository = NotificationRepository(session)
    if repository.get_delivery(notification_id, recipient_id) is None:
        raise NotFound(f"Notification {notification_id} was not delivered to {recipient_id}")
    return repository.dismiss(notification_id, recipient_id=recipient_id)


def unread_count(session: Session, recipient_id: UUID, now: datetime | None = None) -> int:
    return len(_live_entries(session, recipient_id, unread_only=True, now=now))


def unread_feed(
    session: Session,
    recipient_id: UUID,
    limit: int = 20,
    offset: int = 0,
    now: datetime | None = None,
) -> list[FeedEntry]:
    """Return the unread live entries for ``recipient_id``, most recent first."""

    entries = _live_entries(session, recipient_id, unread_only=True, now=now)
    return _paginate(entries, limit=limit, offset=offset)


def notification_feed(
    session: Session,
    recipient_id: UUID,
    limit: int = 20,
    offset: int = 0,
    now: datetime | None = None,
) -> list[FeedEntry]:
    """Return read and unread live entries for ``recipient_id``, most recent first."""

    entries = _live_entries(session, recipient_id, unread_only=False, now=now)
    return _paginate(entries, limit=limit, offset=offset)


def _live_entries(
    session: Session,
    recipient_id: UUID,
    *,
    unread_only: bool,
    now: datetime | None,
) -> list[FeedEntry]:
    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    repository = NotificationRepository(session)
    entries = repository.list_entries_for_recipient(recipient_id, unread_only=unread_only)
    return [entry for entry in entries if is_live(entry.notification, moment)]


def _paginate(entries: list[FeedEntry], *, limit: int, offset: int) -> list[FeedEntry]:
    if limit < 0 or offset < 0:
        raise ValueError("limit and offset must not be negative")
    return entries[offset : offset + limit]


__all__ = [
    "dismiss",
    "mark_all_read",
    "mark_read",
    "notification_feed",
    "unread_count",
    "unread_feed",
]
