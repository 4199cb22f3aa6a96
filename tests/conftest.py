"""Shared fixtures for the campus feed test-suite."""

from __future__ import annotations

import os
import sys
from datetime import timedelta
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(__file__).parent / "test_campus_feed.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ENABLE_SWEEPER"] = "false"
os.environ["SWEEP_ON_STARTUP"] = "false"

from campus_feed.config import reset_settings_cache  # noqa: E402
from campus_feed.utils import reset_timezone_cache  # noqa: E402

# Drop anything cached before the test environment was applied.
reset_settings_cache()
reset_timezone_cache()

from campus_feed.application.use_cases.content import create_event, create_opportunity  # noqa: E402
from campus_feed.application.use_cases.taxonomy import seed_branch  # noqa: E402
from campus_feed.application.use_cases.users import create_user  # noqa: E402
from campus_feed.infrastructure import database  # noqa: E402
from campus_feed.utils import now_in_app_timezone  # noqa: E402


@pytest.fixture(autouse=True)
def setup_database():
    """Prepare a fresh database for every test."""

    from campus_feed.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def now():
    return now_in_app_timezone()


@pytest.fixture()
def branch(session):
    return seed_branch(session, code="CSE", name="Computer Science", display_order=1)


@pytest.fixture()
def make_user(session):
    """Return a factory creating students with unique email addresses."""

    counter = {"value": 0}

    def _make_user(**overrides):
        counter["value"] += 1
        values = {
            "name": f"Student {counter['value']}",
            "email": f"student{counter['value']}@example.com",
        }
        values.update(overrides)
        return create_user(session, **values)

    return _make_user


@pytest.fixture()
def admin(make_user):
    return make_user(name="Admin", email="admin@example.com", is_admin=True)


@pytest.fixture()
def make_event(session, now):
    def _make_event(**overrides):
        values = {
            "title": "Tech Talk",
            "event_date": (now + timedelta(days=3)).date(),
            "location": "Main Hall",
            "announce": False,
        }
        values.update(overrides)
        return create_event(session, **values)

    return _make_event


@pytest.fixture()
def make_opportunity(session, now):
    def _make_opportunity(**overrides):
        values = {
            "title": "Backend Intern",
            "opportunity_type": "Internship",
            "description": "Work on the campus platform",
            "company_name": "Acme",
            "deadline": now + timedelta(days=14),
            "announce": False,
        }
        values.update(overrides)
        return create_opportunity(session, **values)

    return _make_opportunity
