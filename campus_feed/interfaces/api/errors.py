"""Translate domain errors into HTTP responses."""

from fastapi import HTTPException, status

from campus_feed.domain.exceptions import Conflict, NotFound

DOMAIN_ERRORS = (NotFound, Conflict, ValueError)


def to_http_exception(exc: Exception) -> HTTPException:
    """Return the :class:`HTTPException` matching one of ``DOMAIN_ERRORS``.

    Invalid targeting specifications are ``ValueError`` subclasses and map to 400.
    """

    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, Conflict):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
