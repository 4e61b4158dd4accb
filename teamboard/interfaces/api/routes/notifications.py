"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from teamboard.config import get_settings
from teamboard.domain.entities import Notification, User
from teamboard.infrastructure import database
from teamboard.infrastructure.database import get_db
from teamboard.infrastructure.notifications import notification_manager
from teamboard.infrastructure.repositories import NotificationRepository
from teamboard.interfaces.api.dependencies import get_current_user, resolve_current_user
from teamboard.interfaces.api.schemas import (
    NotificationActionResponse,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

_NOT_FOUND = "Notification not found"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    read: bool | None = Query(None, description="Only return read or unread notifications"),
    limit: int | None = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id,
        read=read,
        limit=limit or get_settings().notification_list_limit,
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    """Return how many notifications the user has not read yet."""

    return UnreadCountRead(count=NotificationRepository(db).count_unread(current_user.id))


@router.patch("/read-all", response_model=NotificationActionResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationActionResponse:
    """Mark every notification of the user as read."""

    updated = NotificationRepository(db).mark_all_as_read(current_user.id)
    return NotificationActionResponse(
        message="All notifications marked as read", updated=updated
    )


@router.patch("/{notification_id}/read", response_model=NotificationActionResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationActionResponse:
    """Mark a single notification owned by the user as read."""

    notification = NotificationRepository(db).mark_as_read(
        notification_id, user_id=current_user.id
    )
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return NotificationActionResponse(
        message="Notification marked as read",
        notification=_notification_to_schema(notification),
    )


@router.delete("/{notification_id}", response_model=NotificationActionResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationActionResponse:
    """Delete a notification owned by the user."""

    if not NotificationRepository(db).delete(notification_id, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return NotificationActionResponse(message="Notification deleted")


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    session = database.SessionLocal()
    try:
        user = resolve_current_user(token, session)
        pending_notifications = NotificationRepository(session).list_unread_for_user(user.id)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    finally:
        session.close()

    try:
        await notification_manager.subscribe(user.id, websocket, pending_notifications)
        while True:
            try:
                message = await websocket.receive_json()
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
                    ack_session = database.SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_many_as_read(
                            [i for i in ids if isinstance(i, int)], user_id=user.id
                        )
                    finally:
                        ack_session.close()
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.unsubscribe(user.id, websocket)
