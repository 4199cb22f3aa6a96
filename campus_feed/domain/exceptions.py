"""Errors raised by the domain and application layers."""


class CampusFeedError(Exception):
    """Base class for errors the API layer knows how to translate."""


class InvalidSpec(CampusFeedError, ValueError):
    """The targeting specification is ambiguous, empty or malformed."""


class NotFound(CampusFeedError, LookupError):
    """The referenced notification, content item or recipient does not exist."""


class Conflict(CampusFeedError):
    """A natural-key uniqueness rule or capacity limit prevents the operation."""


__all__ = ["CampusFeedError", "InvalidSpec", "NotFound", "Conflict"]
