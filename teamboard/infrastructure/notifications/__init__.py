"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    NotificationConnectionManager,
    notification_manager,
    serialize_notification,
)
from .publisher import NotificationPublisher, dispatch_notification, notification_publisher

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "serialize_notification",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
]
