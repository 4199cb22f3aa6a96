"""Resolve a targeting specification into a concrete set of recipients."""

from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import TARGET_ALL_USERS, TARGET_FILTERS, TargetingSpec
from campus_feed.infrastructure.repositories import UserRepository


def resolve_audience(session: Session, spec: TargetingSpec) -> set[UUID]:
    """Return the identifiers of every existing user selected by ``spec``.

    Explicitly listed identifiers that do not belong to an existing account are
    dropped silently. An ambiguous or empty specification raises
    :class:`~campus_feed.domain.exceptions.InvalidSpec`.
    """

    mode = spec.mode()
    repository = UserRepository(session)
    if mode == TARGET_ALL_USERS:
        return repository.list_ids()
    if mode == TARGET_FILTERS:
        return repository.list_ids(
            branch_id=spec.branch_id,
            semester=spec.semester,
            year=spec.year,
        )
    return repository.existing_ids(spec.explicit_ids())
