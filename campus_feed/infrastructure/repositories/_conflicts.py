"""Insert helpers that silently skip rows violating a uniqueness constraint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session


def insert_ignoring_conflicts(
    session: Session,
    model: type,
    rows: Sequence[dict[str, Any]],
    *,
    conflict_columns: Sequence[str],
) -> int:
    """Insert ``rows`` into ``model`` and return how many were actually written.

    Rows that collide with the unique constraint over ``conflict_columns`` are
    skipped by the database itself (``ON CONFLICT DO NOTHING``) so a retry racing
    with a first attempt never produces duplicates nor errors. Dialects without
    that clause fall back to one savepoint per row. The session is committed on
    success and rolled back before re-raising on any other store error.
    """

    if not rows:
        return 0

    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = pg_insert(model).values(list(rows)).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
    elif dialect == "sqlite":
        stmt = sqlite_insert(model).values(list(rows)).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
    else:
        return _insert_with_savepoints(session, model, rows)

    try:
        result = session.execute(stmt)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    return max(result.rowcount or 0, 0)


def _insert_with_savepoints(
    session: Session, model: type, rows: Sequence[dict[str, Any]]
) -> int:
    inserted = 0
    try:
        for row in rows:
            try:
                with session.begin_nested():
                    session.execute(insert(model).values(**row))
            except IntegrityError:
                continue
            inserted += 1
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    return inserted


__all__ = ["insert_ignoring_conflicts"]
