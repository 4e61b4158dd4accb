"""Domain entities exposed by the application."""

from .event import Event
from .notification import (
    NOTIFICATION_SEVERITIES,
    NOTIFICATION_SEVERITY_ERROR,
    NOTIFICATION_SEVERITY_INFO,
    NOTIFICATION_SEVERITY_SUCCESS,
    NOTIFICATION_SEVERITY_WARNING,
    FanOutResult,
    Notification,
)
from .project import Project
from .task import (
    OPEN_TASK_STATUSES,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_PENDING,
    Task,
)
from .user import User

__all__ = [
    "Event",
    "FanOutResult",
    "Notification",
    "NOTIFICATION_SEVERITIES",
    "NOTIFICATION_SEVERITY_ERROR",
    "NOTIFICATION_SEVERITY_INFO",
    "NOTIFICATION_SEVERITY_SUCCESS",
    "NOTIFICATION_SEVERITY_WARNING",
    "OPEN_TASK_STATUSES",
    "Project",
    "Task",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_PENDING",
    "User",
]
