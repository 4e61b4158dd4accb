"""Hand saved notifications to the websocket manager from any thread."""

from __future__ import annotations

import asyncio
import logging

from anyio import from_thread

from teamboard.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Schedule realtime delivery of notifications written by the notifier.

    Notifications are written either inside request handlers running on the
    event loop or inside worker threads started by the reminder scheduler.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        if not self._manager.wants(notification):
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.deliver, notification)
            except RuntimeError:
                logger.debug(
                    "No event loop available, skipping realtime delivery of notification %s",
                    notification.id,
                )
        else:
            loop.create_task(self._manager.deliver(notification))


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
]
