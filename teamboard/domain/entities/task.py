"""Domain entity representing a project task."""

from dataclasses import dataclass, field
from datetime import datetime

TASK_STATUS_PENDING = "pending"
TASK_STATUS_IN_PROGRESS = "in_progress"
TASK_STATUS_COMPLETED = "completed"

OPEN_TASK_STATUSES = (TASK_STATUS_PENDING, TASK_STATUS_IN_PROGRESS)


@dataclass
class Task:
    """Unit of work that can be assigned to one or more users."""

    id: int | None
    title: str
    status: str
    created_by: int | None
    due_date: datetime | None = None
    project_id: int | None = None
    project_name: str | None = None
    assigned_to: int | None = None
    assigned_user_ids: list[int] = field(default_factory=list)
    updated_at: datetime | None = None

    def recipient_ids(self) -> list[int]:
        """Return every assignee once, multi-assignees first."""

        recipients: list[int] = []
        for user_id in [*self.assigned_user_ids, self.assigned_to]:
            if user_id is not None and user_id not in recipients:
                recipients.append(user_id)
        return recipients


__all__ = [
    "Task",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
    "OPEN_TASK_STATUSES",
]
