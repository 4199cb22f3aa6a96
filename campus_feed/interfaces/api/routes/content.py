"""Routes for events, opportunities, RSVPs, bookmarks and the active feed."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from campus_feed.application.use_cases.content import (
    active_feed as active_feed_uc,
    add_bookmark as add_bookmark_uc,
    add_rsvp as add_rsvp_uc,
    cancel_rsvp as cancel_rsvp_uc,
    create_event as create_event_uc,
    create_opportunity as create_opportunity_uc,
    delete_event as delete_event_uc,
    delete_opportunity as delete_opportunity_uc,
    get_event as get_event_uc,
    get_opportunity as get_opportunity_uc,
    list_bookmarks as list_bookmarks_uc,
    list_events as list_events_uc,
    list_opportunities as list_opportunities_uc,
    remove_bookmark as remove_bookmark_uc,
    update_event as update_event_uc,
    update_opportunity as update_opportunity_uc,
)
from campus_feed.domain.entities import User
from campus_feed.infrastructure.database import get_db
from campus_feed.interfaces.api.dependencies import get_current_user, require_admin
from campus_feed.interfaces.api.errors import DOMAIN_ERRORS, to_http_exception
from campus_feed.interfaces.api.schemas import (
    ActiveContentRead,
    EventCreate,
    EventRead,
    EventUpdate,
    MembershipStatusRead,
    OpportunityCreate,
    OpportunityRead,
    OpportunityUpdate,
)

router = APIRouter(prefix="/content", tags=["content"])


def _ensure_can_see_hidden(include_hidden: bool, current_user: User) -> None:
    if include_hidden and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")


@router.get("/feed", response_model=list[ActiveContentRead])
def read_active_feed(
    kind: str = Query("all", pattern="^(all|event|opportunity)$"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Return live events and opportunities ordered by their effective date."""

    items = active_feed_uc(db, kind=kind)
    return [ActiveContentRead.model_validate(item) for item in items]


@router.post("/events", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        event = create_event_uc(db, created_by=current_user.id, **event_in.model_dump())
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.get("/events", response_model=list[EventRead])
def list_events(
    include_hidden: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_can_see_hidden(include_hidden, current_user)
    events = list_events_uc(db, include_hidden=include_hidden)
    return [EventRead.model_validate(event) for event in events]


@router.get("/events/{event_id}", response_model=EventRead)
def read_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the event; unpublished or expired events are only visible to administrators."""

    try:
        event = get_event_uc(db, event_id, include_hidden=current_user.is_admin)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.patch("/events/{event_id}", response_model=EventRead)
def update_event(
    event_id: UUID,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        event = update_event_uc(db, event_id, **event_in.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        delete_event_uc(db, event_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/events/{event_id}/rsvp", response_model=MembershipStatusRead)
def rsvp_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        changed = add_rsvp_uc(db, event_id, current_user.id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MembershipStatusRead(changed=changed)


@router.delete("/events/{event_id}/rsvp", response_model=MembershipStatusRead)
def cancel_event_rsvp(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return MembershipStatusRead(changed=cancel_rsvp_uc(db, event_id, current_user.id))


@router.post(
    "/opportunities", response_model=OpportunityRead, status_code=status.HTTP_201_CREATED
)
def create_opportunity(
    opportunity_in: OpportunityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        opportunity = create_opportunity_uc(
            db, created_by=current_user.id, **opportunity_in.model_dump()
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return OpportunityRead.model_validate(opportunity)


@router.get("/opportunities", response_model=list[OpportunityRead])
def list_opportunities(
    opportunity_type: str | None = None,
    include_hidden: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_can_see_hidden(include_hidden, current_user)
    opportunities = list_opportunities_uc(
        db, include_hidden=include_hidden, opportunity_type=opportunity_type
    )
    return [OpportunityRead.model_validate(opportunity) for opportunity in opportunities]


@router.get("/opportunities/{opportunity_id}", response_model=OpportunityRead)
def read_opportunity(
    opportunity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        opportunity = get_opportunity_uc(
            db, opportunity_id, include_hidden=current_user.is_admin
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return OpportunityRead.model_validate(opportunity)


@router.patch("/opportunities/{opportunity_id}", response_model=OpportunityRead)
def update_opportunity(
    opportunity_id: UUID,
    opportunity_in: OpportunityUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        opportunity = update_opportunity_uc(
            db, opportunity_id, **opportunity_in.model_dump(exclude_unset=True)
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return OpportunityRead.model_validate(opportunity)


@router.delete("/opportunities/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_opportunity(
    opportunity_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        delete_opportunity_uc(db, opportunity_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/opportunities/{opportunity_id}/bookmark", response_model=MembershipStatusRead)
def bookmark_opportunity(
    opportunity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        changed = add_bookmark_uc(db, opportunity_id, current_user.id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MembershipStatusRead(changed=changed)


@router.delete("/opportunities/{opportunity_id}/bookmark", response_model=MembershipStatusRead)
def remove_opportunity_bookmark(
    opportunity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return MembershipStatusRead(changed=remove_bookmark_uc(db, opportunity_id, current_user.id))


@router.get("/bookmarks", response_model=list[OpportunityRead])
def list_bookmarks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the caller's bookmarked opportunities that are still open."""

    opportunities = list_bookmarks_uc(db, current_user.id)
    return [OpportunityRead.model_validate(opportunity) for opportunity in opportunities]
