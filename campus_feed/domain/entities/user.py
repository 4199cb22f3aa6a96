"""Domain entity representing a recipient account."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """Core attributes describing an application user."""

    id: UUID | None
    name: str
    email: str
    branch_id: UUID | None = None
    year: int | None = None
    semester: int | None = None
    is_admin: bool = False
    created_at: datetime | None = None

    def matches(
        self,
        *,
        branch_id: UUID | None = None,
        year: int | None = None,
        semester: int | None = None,
    ) -> bool:
        """Return ``True`` when every provided filter equals the user's value."""

        if branch_id is not None and self.branch_id != branch_id:
            return False
        if year is not None and self.year != year:
            return False
        if semester is not None and self.semester != semester:
            return False
        return True


__all__ = ["User"]
