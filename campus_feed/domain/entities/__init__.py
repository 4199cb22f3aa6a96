"""Domain entities exposed by the application."""

from .content import (
    CONTENT_KIND_EVENT,
    CONTENT_KIND_OPPORTUNITY,
    ActiveContentItem,
    Bookmark,
    Event,
    EventRsvp,
    Opportunity,
)
from .notification import (
    CATEGORY_ANNOUNCEMENT,
    CATEGORY_CUSTOM,
    CATEGORY_EVENT,
    CATEGORY_EXAM_REMINDER,
    CATEGORY_OPPORTUNITY,
    CATEGORY_TIMETABLE_UPDATE,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    PRIORITY_URGENT,
    DeliveryRecord,
    FeedEntry,
    Notification,
)
from .targeting import TARGET_ALL_USERS, TARGET_EXPLICIT, TARGET_FILTERS, TargetingSpec
from .taxonomy import (
    TAXONOMY_BRANCH,
    TAXONOMY_KINDS,
    TAXONOMY_SEMESTER,
    TAXONOMY_YEAR,
    Branch,
    BranchSemester,
    BranchYear,
    CombinationStatus,
)
from .user import User

__all__ = [
    "CONTENT_KIND_EVENT",
    "CONTENT_KIND_OPPORTUNITY",
    "ActiveContentItem",
    "Bookmark",
    "Event",
    "EventRsvp",
    "Opportunity",
    "CATEGORY_ANNOUNCEMENT",
    "CATEGORY_CUSTOM",
    "CATEGORY_EVENT",
    "CATEGORY_EXAM_REMINDER",
    "CATEGORY_OPPORTUNITY",
    "CATEGORY_TIMETABLE_UPDATE",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "PRIORITY_URGENT",
    "DeliveryRecord",
    "FeedEntry",
    "Notification",
    "TARGET_ALL_USERS",
    "TARGET_EXPLICIT",
    "TARGET_FILTERS",
    "TargetingSpec",
    "TAXONOMY_BRANCH",
    "TAXONOMY_KINDS",
    "TAXONOMY_SEMESTER",
    "TAXONOMY_YEAR",
    "Branch",
    "BranchSemester",
    "BranchYear",
    "CombinationStatus",
    "User",
]
