"""Read-only queries over tasks used by the reminder checks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from teamboard.domain.entities import Task
from teamboard.infrastructure.models import TaskModel
from teamboard.utils import ensure_app_naive_datetime, ensure_app_timezone


class TaskRepository:
    """Look up tasks by status, due date window and assignment."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: int) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def list_tasks(
        self,
        *,
        statuses: Iterable[str],
        due_before: datetime | None = None,
        due_from: datetime | None = None,
        due_until: datetime | None = None,
        updated_since: datetime | None = None,
        require_assignment: bool = False,
    ) -> Sequence[Task]:
        """Return tasks matching every provided filter.

        ``due_before`` is exclusive while ``due_from`` and ``due_until`` are
        inclusive bounds. Any due date filter excludes tasks without a due date.
        """

        query = self.session.query(TaskModel).filter(TaskModel.status.in_(list(statuses)))
        if due_before is not None:
            query = query.filter(TaskModel.due_date < ensure_app_naive_datetime(due_before))
        if due_from is not None:
            query = query.filter(TaskModel.due_date >= ensure_app_naive_datetime(due_from))
        if due_until is not None:
            query = query.filter(TaskModel.due_date <= ensure_app_naive_datetime(due_until))
        if updated_since is not None:
            query = query.filter(
                TaskModel.updated_at >= ensure_app_naive_datetime(updated_since)
            )
        if require_assignment:
            query = query.filter(
                or_(TaskModel.assigned_to.is_not(None), TaskModel.assignees.any())
            )
        query = query.order_by(TaskModel.due_date.asc(), TaskModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            status=model.status,
            created_by=model.created_by,
            due_date=ensure_app_timezone(model.due_date),
            project_id=model.project_id,
            project_name=model.project.name if model.project else None,
            assigned_to=model.assigned_to,
            assigned_user_ids=[assignee.id for assignee in model.assignees],
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TaskRepository"]
