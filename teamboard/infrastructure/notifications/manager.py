"""Websocket subscriptions used for realtime notification delivery."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from fastapi import WebSocket

from teamboard.domain.entities import Notification

logger = logging.getLogger(__name__)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "title": notification.title,
        "message": notification.message,
        "severity": notification.severity,
        "link": notification.link,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


class NotificationConnectionManager:
    """Track the sockets subscribed to each user's notifications.

    A user may hold several sockets at once (one per open client). Every
    notification is sent to all of its recipient's sockets; a socket that
    fails to receive it is unsubscribed.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, list[WebSocket]] = {}

    async def subscribe(
        self,
        user_id: int,
        websocket: WebSocket,
        backlog: Iterable[Notification] = (),
    ) -> None:
        """Accept ``websocket`` for ``user_id`` and send it the unread backlog."""

        await websocket.accept()
        self._subscribers.setdefault(user_id, []).append(websocket)
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in backlog]}
        )

    def unsubscribe(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._subscribers.get(user_id)
        if not sockets:
            return
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            del self._subscribers[user_id]

    def wants(self, notification: Notification) -> bool:
        """Return whether the recipient of ``notification`` has a live socket."""

        return bool(self._subscribers.get(notification.recipient_id))

    async def deliver(self, notification: Notification) -> int:
        """Push ``notification`` to its recipient and return how many sockets got it."""

        frame = {"type": "notification", "data": serialize_notification(notification)}
        delivered = 0
        for websocket in list(self._subscribers.get(notification.recipient_id, ())):
            try:
                await websocket.send_json(frame)
            except Exception:
                logger.debug(
                    "Unsubscribing broken websocket of user %s",
                    notification.recipient_id,
                    exc_info=True,
                )
                self.unsubscribe(notification.recipient_id, websocket)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "serialize_notification",
]
