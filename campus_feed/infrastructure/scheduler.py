"""Background timer that runs the cleanup sweep periodically."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from apscheduler.schedulers.background import BackgroundScheduler

from campus_feed.config import Settings, get_settings
from campus_feed.utils import get_app_timezone

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "sweep_expired_content"

# Guards against starting a second scheduler in the same process.
_scheduler: BackgroundScheduler | None = None


def start_sweeper(
    job: Callable[[], Any], settings: Settings | None = None
) -> BackgroundScheduler | None:
    """Schedule ``job`` every ``SWEEP_INTERVAL_HOURS`` hours and return the scheduler.

    Returns ``None`` when the timer is disabled through ``ENABLE_SWEEPER``.
    """

    global _scheduler

    settings = settings or get_settings()
    if not settings.enable_sweeper:
        logger.info("Sweeper disabled via settings (ENABLE_SWEEPER=false)")
        return None

    if _scheduler is not None:
        logger.info("Sweeper already running, skipping initialization")
        return _scheduler

    scheduler = BackgroundScheduler(timezone=get_app_timezone())
    scheduler.add_job(
        job,
        trigger="interval",
        hours=settings.sweep_interval_hours,
        id=SWEEP_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    _scheduler = scheduler

    logger.info("Sweeper started: running every %s hours", settings.sweep_interval_hours)
    return scheduler


def shutdown_sweeper() -> None:
    global _scheduler

    if _scheduler is None:
        return
    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("Sweeper stopped")


def get_sweeper() -> BackgroundScheduler | None:
    return _scheduler


__all__ = ["SWEEP_JOB_ID", "get_sweeper", "shutdown_sweeper", "start_sweeper"]
