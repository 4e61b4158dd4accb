"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

NOTIFICATION_SEVERITY_INFO = "info"
NOTIFICATION_SEVERITY_WARNING = "warning"
NOTIFICATION_SEVERITY_SUCCESS = "success"
NOTIFICATION_SEVERITY_ERROR = "error"

NOTIFICATION_SEVERITIES = frozenset(
    {
        NOTIFICATION_SEVERITY_INFO,
        NOTIFICATION_SEVERITY_WARNING,
        NOTIFICATION_SEVERITY_SUCCESS,
        NOTIFICATION_SEVERITY_ERROR,
    }
)


@dataclass
class Notification:
    """Information message delivered to a single recipient."""

    id: int | None
    recipient_id: int
    title: str
    message: str
    severity: str = NOTIFICATION_SEVERITY_INFO
    link: str | None = None
    read: bool = False
    created_at: datetime | None = None


@dataclass
class FanOutResult:
    """Outcome of delivering one message to a set of recipients.

    Delivery is best-effort per recipient, so a result can carry both
    delivered notifications and the recipients whose write failed.
    """

    notifications: list[Notification] = field(default_factory=list)
    failed_recipient_ids: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_recipient_ids

    @property
    def recipient_ids(self) -> list[int]:
        return [notification.recipient_id for notification in self.notifications]

    def __len__(self) -> int:
        return len(self.notifications)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self.notifications)


__all__ = [
    "FanOutResult",
    "Notification",
    "NOTIFICATION_SEVERITIES",
    "NOTIFICATION_SEVERITY_ERROR",
    "NOTIFICATION_SEVERITY_INFO",
    "NOTIFICATION_SEVERITY_SUCCESS",
    "NOTIFICATION_SEVERITY_WARNING",
]
