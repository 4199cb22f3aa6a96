"""Repository implementations for infrastructure layer."""

from .event_repository import EventRepository
from .notification_repository import NotificationRepository
from .opportunity_repository import OpportunityRepository
from .taxonomy_repository import TaxonomyRepository
from .user_repository import UserRepository

__all__ = [
    "EventRepository",
    "NotificationRepository",
    "OpportunityRepository",
    "TaxonomyRepository",
    "UserRepository",
]
