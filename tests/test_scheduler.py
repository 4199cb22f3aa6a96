"""Tests for the background sweeper timer."""

from __future__ import annotations

from datetime import timedelta

import pytest

from campus_feed.config import Settings
from campus_feed.infrastructure.scheduler import (
    SWEEP_JOB_ID,
    get_sweeper,
    shutdown_sweeper,
    start_sweeper,
)


@pytest.fixture(autouse=True)
def stop_sweeper():
    yield
    shutdown_sweeper()


def _noop() -> None:
    return None


def test_disabled_sweeper_is_not_started() -> None:
    assert start_sweeper(_noop, Settings(enable_sweeper=False)) is None
    assert get_sweeper() is None


def test_sweeper_schedules_single_interval_job() -> None:
    scheduler = start_sweeper(_noop, Settings(enable_sweeper=True, sweep_interval_hours=6))

    assert scheduler is not None
    assert scheduler.running
    job = scheduler.get_job(SWEEP_JOB_ID)
    assert job is not None
    assert job.trigger.interval == timedelta(hours=6)
    assert job.max_instances == 1
    assert job.coalesce is True


def test_second_start_reuses_running_scheduler() -> None:
    settings = Settings(enable_sweeper=True)
    first = start_sweeper(_noop, settings)

    assert start_sweeper(_noop, settings) is first
    assert len(first.get_jobs()) == 1


def test_shutdown_clears_the_scheduler() -> None:
    start_sweeper(_noop, Settings(enable_sweeper=True))

    shutdown_sweeper()

    assert get_sweeper() is None
    shutdown_sweeper()
