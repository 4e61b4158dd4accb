from .notification import NotificationActionResponse, NotificationRead, UnreadCountRead

__all__ = [
    "NotificationActionResponse",
    "NotificationRead",
    "UnreadCountRead",
]
