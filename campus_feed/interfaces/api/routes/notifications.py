"""Endpoints and websocket handler for campus notifications."""

from __future__ import annotations

from uuid import UUID

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from campus_feed.application.use_cases.notifications import (
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    dismiss as dismiss_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_read as mark_all_read_uc,
    mark_read as mark_read_uc,
    notification_feed as notification_feed_uc,
    redeliver as redeliver_uc,
    unread_count as unread_count_uc,
    unread_feed as unread_feed_uc,
    update_notification as update_notification_uc,
)
from campus_feed.domain.entities import FeedEntry, User
from campus_feed.infrastructure.database import SessionLocal, get_db
from campus_feed.infrastructure.notifications import notification_manager, serialize_notification
from campus_feed.infrastructure.repositories import NotificationRepository
from campus_feed.interfaces.api.dependencies import get_current_user, require_admin, resolve_user
from campus_feed.interfaces.api.errors import DOMAIN_ERRORS, to_http_exception
from campus_feed.interfaces.api.schemas import (
    FanOutRead,
    FeedEntryRead,
    MarkAllReadRead,
    NotificationCreate,
    NotificationRead,
    NotificationUpdate,
    ReadStatusRead,
    RedeliverRequest,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _entry_to_schema(entry: FeedEntry) -> FeedEntryRead:
    notification = entry.notification
    return FeedEntryRead(
        id=notification.id,
        title=notification.title,
        body=notification.body,
        category=notification.category,
        priority=notification.priority,
        payload=notification.payload or {},
        expires_at=notification.expires_at,
        created_at=notification.created_at,
        is_read=entry.delivery.is_read,
        read_at=entry.delivery.read_at,
    )


@router.post("/", response_model=FanOutRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> FanOutRead:
    """Author a notification and deliver it to the selected audience."""

    try:
        result = create_notification_uc(
            db,
            title=notification_in.title,
            body=notification_in.body,
            targeting=notification_in.targeting.to_spec(),
            category=notification_in.category,
            priority=notification_in.priority,
            expires_at=notification_in.expires_at,
            payload=notification_in.payload,
            created_by=current_user.id,
            is_published=notification_in.is_published,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return FanOutRead(
        notification_id=result.notification_id, delivered_count=result.delivered_count
    )


@router.get("/", response_model=list[FeedEntryRead])
def list_feed(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FeedEntryRead]:
    """Return read and unread live notifications of the caller, newest first."""

    entries = notification_feed_uc(db, current_user.id, limit=limit, offset=offset)
    return [_entry_to_schema(entry) for entry in entries]


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=unread_count_uc(db, current_user.id))


@router.get("/unread", response_model=list[FeedEntryRead])
def list_unread(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FeedEntryRead]:
    entries = unread_feed_uc(db, current_user.id, limit=limit, offset=offset)
    return [_entry_to_schema(entry) for entry in entries]


@router.post("/read-all", response_model=MarkAllReadRead)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadRead:
    return MarkAllReadRead(marked_count=mark_all_read_uc(db, current_user.id))


@router.get("/sent", response_model=list[NotificationRead])
def list_sent(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Return authored notifications for administrators, newest first."""

    notifications = list_notifications_uc(db, skip=skip, limit=limit)
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/{notification_id}/read", response_model=ReadStatusRead)
def mark_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReadStatusRead:
    """Mark a delivered notification read; repeated calls report ``no-op``."""

    try:
        changed = mark_read_uc(db, notification_id, current_user.id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return ReadStatusRead(status="success" if changed else "no-op")


@router.post("/{notification_id}/dismiss", response_model=ReadStatusRead)
def dismiss(
    notification_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReadStatusRead:
    try:
        changed = dismiss_uc(db, notification_id, current_user.id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return ReadStatusRead(status="success" if changed else "no-op")


@router.get("/{notification_id}", response_model=NotificationRead)
def get_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationRead:
    try:
        notification = get_notification_uc(db, notification_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


@router.patch("/{notification_id}", response_model=NotificationRead)
def update_notification(
    notification_id: UUID,
    notification_in: NotificationUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationRead:
    """Change the publication flag or the expiry of a notification."""

    changes = notification_in.model_dump(exclude_unset=True)
    try:
        notification = update_notification_uc(db, notification_id, **changes)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_notification_uc(db, notification_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/redeliver", response_model=FanOutRead)
def redeliver(
    notification_id: UUID,
    request: RedeliverRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> FanOutRead:
    """Re-run fan-out; recipients that already have the notification are skipped."""

    try:
        result = redeliver_uc(db, notification_id, request.targeting.to_spec())
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return FanOutRead(
        notification_id=result.notification_id, delivered_count=result.delivered_count
    )


def _parse_ids(raw_ids: list) -> list[UUID]:
    parsed: list[UUID] = []
    for raw in raw_ids:
        try:
            parsed.append(UUID(str(raw)))
        except ValueError:
            continue
    return parsed


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams new notifications to the connected user."""

    session = SessionLocal()
    try:
        user = resolve_user(websocket.query_params.get("user_id"), session)
        pending = unread_feed_uc(session, user.id, limit=100)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(entry.notification) for entry in pending],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_as_read(
                            _parse_ids(ids), recipient_id=user.id
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user.id, websocket)
    except Exception:  # pragma: no cover - unexpected socket failure
        notification_manager.disconnect(user.id, websocket)
        raise
