"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from campus_feed.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""

    url = make_url(settings.database_url)
    connect_args: dict[str, object] = {}
    if url.get_backend_name() == "sqlite":
        # Request handlers and the sweeper thread share the same file.
        connect_args["check_same_thread"] = False

    built = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    if built.dialect.name == "sqlite":
        event.listen(built, "connect", _enable_sqlite_foreign_keys)
    logger.debug("Database engine created for dialect '%s'", built.dialect.name)
    return built


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


engine = _build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from campus_feed.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
