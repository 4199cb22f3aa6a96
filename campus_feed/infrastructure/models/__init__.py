"""ORM models used by the application infrastructure."""

from .content import BookmarkModel, EventModel, EventRsvpModel, OpportunityModel
from .notification import DeliveryRecordModel, NotificationModel
from .taxonomy import BranchModel, BranchSemesterModel, BranchYearModel
from .user import UserModel

__all__ = [
    "BookmarkModel",
    "BranchModel",
    "BranchSemesterModel",
    "BranchYearModel",
    "DeliveryRecordModel",
    "EventModel",
    "EventRsvpModel",
    "NotificationModel",
    "OpportunityModel",
    "UserModel",
]
