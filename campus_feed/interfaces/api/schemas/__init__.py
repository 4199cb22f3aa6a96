from .content import (
    ActiveContentRead,
    EventCreate,
    EventRead,
    EventUpdate,
    MembershipStatusRead,
    OpportunityCreate,
    OpportunityRead,
    OpportunityUpdate,
)
from .maintenance import SweepResultRead
from .notification import (
    FanOutRead,
    FeedEntryRead,
    MarkAllReadRead,
    NotificationCreate,
    NotificationRead,
    NotificationUpdate,
    ReadStatusRead,
    RedeliverRequest,
    TargetingPayload,
    UnreadCountRead,
)
from .taxonomy import (
    ActivationUpdate,
    BranchRead,
    BranchSemesterRead,
    BranchYearRead,
    CombinationStatusRead,
)
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "ActivationUpdate",
    "ActiveContentRead",
    "BranchRead",
    "BranchSemesterRead",
    "BranchYearRead",
    "CombinationStatusRead",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "FanOutRead",
    "FeedEntryRead",
    "MarkAllReadRead",
    "MembershipStatusRead",
    "NotificationCreate",
    "NotificationRead",
    "NotificationUpdate",
    "OpportunityCreate",
    "OpportunityRead",
    "OpportunityUpdate",
    "ReadStatusRead",
    "RedeliverRequest",
    "SweepResultRead",
    "TargetingPayload",
    "UnreadCountRead",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
