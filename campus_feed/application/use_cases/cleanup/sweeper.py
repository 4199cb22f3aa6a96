"""Periodic removal of expired notifications, events and opportunities."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_feed.domain.expiration import is_expired
from campus_feed.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    OpportunityRepository,
)
from campus_feed.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

SWEEP_NOTIFICATIONS = "notification"
SWEEP_EVENTS = "event"
SWEEP_OPPORTUNITIES = "opportunity"


@dataclass
class SweepResult:
    deleted: dict[str, int] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)

    @property
    def total_deleted(self) -> int:
        return sum(self.deleted.values())


@dataclass(frozen=True)
class _SweepTarget:
    kind: str
    load: Callable[[Session], Iterable]
    delete: Callable[[Session, list[UUID], Callable], int]


_TARGETS = (
    _SweepTarget(
        kind=SWEEP_NOTIFICATIONS,
        load=lambda session: NotificationRepository(session).list_all(),
        delete=lambda session, ids, recheck: NotificationRepository(
            session
        ).delete_with_deliveries(ids, recheck=recheck),
    ),
    _SweepTarget(
        kind=SWEEP_EVENTS,
        load=lambda session: EventRepository(session).list(),
        delete=lambda session, ids, recheck: EventRepository(session).delete_many(
            ids, recheck=recheck
        ),
    ),
    _SweepTarget(
        kind=SWEEP_OPPORTUNITIES,
        load=lambda session: OpportunityRepository(session).list(),
        delete=lambda session, ids, recheck: OpportunityRepository(session).delete_many(
            ids, recheck=recheck
        ),
    ),
)


def sweep(session: Session, now: datetime | None = None) -> SweepResult:
    """Delete every expired item together with the rows that depend on it.

    Each kind is swept in its own transaction. A store failure while sweeping one
    kind is logged and reported in ``failed`` without stopping the others. The
    candidates are checked against the expiration policy a second time while
    locked, so an item whose window was extended after it was selected survives.
    Rows are deleted by id so a sweep running twice, or concurrently with another
    one, simply deletes nothing the second time.
    """

    moment = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    def still_expired(item) -> bool:
        return is_expired(item, moment)

    result = SweepResult()
    for target in _TARGETS:
        try:
            expired_ids = [item.id for item in target.load(session) if still_expired(item)]
            deleted = target.delete(session, expired_ids, still_expired)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Sweeping expired %s rows failed", target.kind)
            result.failed.append(target.kind)
            continue
        result.deleted[target.kind] = deleted
        if deleted:
            logger.info("Swept %s expired %s rows", deleted, target.kind)

    logger.info(
        "Sweep finished: %s rows deleted, %s kinds failed",
        result.total_deleted,
        len(result.failed),
    )
    return result


def run_scheduled_sweep() -> SweepResult:
    """Run a sweep with its own session; used by the timer and startup hook."""

    from campus_feed.infrastructure.database import SessionLocal

    session = SessionLocal()
    try:
        return sweep(session)
    finally:
        session.close()


__all__ = [
    "SWEEP_EVENTS",
    "SWEEP_NOTIFICATIONS",
    "SWEEP_OPPORTUNITIES",
    "SweepResult",
    "run_scheduled_sweep",
    "sweep",
]
