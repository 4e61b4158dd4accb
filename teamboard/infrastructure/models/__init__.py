"""ORM models used by the application infrastructure."""

from .user import UserModel
from .project import ProjectModel
from .task import TaskModel, task_assignee_table
from .event import EventModel
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "ProjectModel",
    "TaskModel",
    "task_assignee_table",
    "EventModel",
    "NotificationModel",
]
