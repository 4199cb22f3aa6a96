"""Targeting specification describing who receives a notification."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from campus_feed.domain.exceptions import InvalidSpec

TARGET_ALL_USERS = "all_users"
TARGET_FILTERS = "filters"
TARGET_EXPLICIT = "explicit"

_YEAR_RANGE = range(1, 5)
_SEMESTER_RANGE = range(1, 9)


@dataclass(frozen=True)
class TargetingSpec:
    """Exactly one of three mutually exclusive audience selections.

    * ``all_users``: every existing account.
    * filters: any combination of ``branch_id``, ``semester`` and ``year``; the
      present filters are combined with AND.
    * ``user_ids``: an explicit list of recipient identifiers.

    Populating more than one mode, or none, is rejected by :meth:`mode` instead of
    being resolved by precedence.
    """

    all_users: bool = False
    branch_id: UUID | None = None
    semester: int | None = None
    year: int | None = None
    user_ids: tuple[Any, ...] | None = None

    @classmethod
    def everyone(cls) -> "TargetingSpec":
        return cls(all_users=True)

    @classmethod
    def matching(
        cls,
        *,
        branch_id: UUID | None = None,
        semester: int | None = None,
        year: int | None = None,
    ) -> "TargetingSpec":
        return cls(branch_id=branch_id, semester=semester, year=year)

    @classmethod
    def recipients(cls, user_ids: Iterable[Any]) -> "TargetingSpec":
        return cls(user_ids=tuple(user_ids))

    @property
    def has_filters(self) -> bool:
        return any(value is not None for value in (self.branch_id, self.semester, self.year))

    @property
    def has_explicit_ids(self) -> bool:
        return bool(self.user_ids)

    def populated_modes(self) -> list[str]:
        modes: list[str] = []
        if self.all_users:
            modes.append(TARGET_ALL_USERS)
        if self.has_filters:
            modes.append(TARGET_FILTERS)
        if self.has_explicit_ids:
            modes.append(TARGET_EXPLICIT)
        return modes

    def mode(self) -> str:
        """Return the single active targeting mode or raise :class:`InvalidSpec`."""

        modes = self.populated_modes()
        if not modes:
            raise InvalidSpec("The targeting specification does not select any audience")
        if len(modes) > 1:
            raise InvalidSpec(
                "The targeting specification is ambiguous: " + ", ".join(modes) + " are all set"
            )

        mode = modes[0]
        if mode == TARGET_FILTERS:
            if self.year is not None and self.year not in _YEAR_RANGE:
                raise InvalidSpec(f"Year filter must be between 1 and 4, got {self.year}")
            if self.semester is not None and self.semester not in _SEMESTER_RANGE:
                raise InvalidSpec(f"Semester filter must be between 1 and 8, got {self.semester}")
        elif mode == TARGET_EXPLICIT:
            self.explicit_ids()
        return mode

    def explicit_ids(self) -> set[UUID]:
        """Return the explicit recipient identifiers parsed as UUIDs."""

        parsed: set[UUID] = set()
        for raw in self.user_ids or ():
            if isinstance(raw, UUID):
                parsed.add(raw)
                continue
            try:
                parsed.add(UUID(str(raw)))
            except (TypeError, ValueError) as exc:
                raise InvalidSpec(f"'{raw}' is not a valid recipient identifier") from exc
        return parsed

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot stored alongside the notification."""

        mode = self.mode()
        if mode == TARGET_ALL_USERS:
            return {"mode": mode}
        if mode == TARGET_FILTERS:
            return {
                "mode": mode,
                "branch_id": str(self.branch_id) if self.branch_id else None,
                "semester": self.semester,
                "year": self.year,
            }
        return {"mode": mode, "user_ids": sorted(str(user_id) for user_id in self.explicit_ids())}


__all__ = [
    "TARGET_ALL_USERS",
    "TARGET_EXPLICIT",
    "TARGET_FILTERS",
    "TargetingSpec",
]
