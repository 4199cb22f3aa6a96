"""Use cases for events, opportunities and the unified active-content view."""

from .active_feed import FEED_KINDS, active_feed, project_event, project_opportunity
from .announce import announce_event, announce_opportunity
from .bookmarks import add_bookmark, list_bookmarks, remove_bookmark
from .events import create_event, delete_event, get_event, list_events, update_event
from .opportunities import (
    OPPORTUNITY_TYPES,
    create_opportunity,
    delete_opportunity,
    get_opportunity,
    list_opportunities,
    update_opportunity,
)
from .rsvps import add_rsvp, cancel_rsvp, list_rsvps

__all__ = [
    "FEED_KINDS",
    "OPPORTUNITY_TYPES",
    "active_feed",
    "add_bookmark",
    "add_rsvp",
    "announce_event",
    "announce_opportunity",
    "cancel_rsvp",
    "create_event",
    "create_opportunity",
    "delete_event",
    "delete_opportunity",
    "get_event",
    "get_opportunity",
    "list_bookmarks",
    "list_events",
    "list_opportunities",
    "list_rsvps",
    "project_event",
    "project_opportunity",
    "remove_bookmark",
    "update_event",
    "update_opportunity",
]
