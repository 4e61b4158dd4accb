"""Time based reminder checks run by the reminder scheduler.

Each check evaluates the current state of tasks and events, creates the
matching notifications and returns how many were created. Checks keep no
state between runs, so a task that stays overdue is reported on every pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from teamboard.config import get_settings
from teamboard.domain.entities import (
    NOTIFICATION_SEVERITY_INFO,
    NOTIFICATION_SEVERITY_SUCCESS,
    NOTIFICATION_SEVERITY_WARNING,
    OPEN_TASK_STATUSES,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_PENDING,
    Task,
)
from teamboard.infrastructure.repositories import (
    EventRepository,
    TaskRepository,
    UserRepository,
)
from teamboard.utils import (
    ensure_app_timezone,
    format_date,
    format_time,
    next_local_midnight,
    now_in_app_timezone,
)

from .notifier import Notifier

logger = logging.getLogger(__name__)

TASKS_LINK = "/tasks"


def group_tasks_by_recipient(tasks: Iterable[Task]) -> dict[int, list[Task]]:
    """Map every assignee to the tasks they hold, in first-seen order."""

    grouped: dict[int, list[Task]] = {}
    for task in tasks:
        for user_id in task.recipient_ids():
            grouped.setdefault(user_id, []).append(task)
    return grouped


def check_overdue_tasks(session: Session, *, now: datetime | None = None) -> int:
    """Warn the assignees of every open task whose due date has passed."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    tasks = TaskRepository(session).list_tasks(statuses=OPEN_TASK_STATUSES, due_before=now)
    notifier = Notifier(session)

    created = 0
    for task in tasks:
        recipients = task.recipient_ids()
        if not recipients:
            continue
        result = notifier.notify_many(
            recipients,
            "Task Overdue",
            f'The task "{task.title}"{_in_project(task)} was due on '
            f"{format_date(task.due_date)} and is still pending.",
            NOTIFICATION_SEVERITY_WARNING,
            _task_link(task),
        )
        created += len(result)

    if tasks:
        logger.info("Checked %d overdue tasks", len(tasks))
    return created


def check_tasks_due_soon(session: Session, *, now: datetime | None = None) -> int:
    """Remind assignees of open tasks due before the next local midnight."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    tasks = TaskRepository(session).list_tasks(
        statuses=OPEN_TASK_STATUSES,
        due_from=now,
        due_until=next_local_midnight(now),
    )
    notifier = Notifier(session)

    created = 0
    for task in tasks:
        recipients = task.recipient_ids()
        if not recipients:
            continue
        result = notifier.notify_many(
            recipients,
            "Task Due Soon",
            f'The task "{task.title}"{_in_project(task)} is due on '
            f"{format_date(task.due_date)} at {format_time(task.due_date)}.",
            NOTIFICATION_SEVERITY_INFO,
            _task_link(task),
        )
        created += len(result)

    if tasks:
        logger.info("Checked %d tasks due soon", len(tasks))
    return created


def check_pending_tasks(session: Session, *, now: datetime | None = None) -> int:
    """Send each assignee one digest of their pending tasks with a future due date."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    tasks = TaskRepository(session).list_tasks(statuses=(TASK_STATUS_PENDING,), due_from=now)
    grouped = group_tasks_by_recipient(tasks)
    notifier = Notifier(session)

    created = 0
    for user_id, user_tasks in grouped.items():
        count = len(user_tasks)
        result = notifier.notify_many(
            [user_id],
            "Pending Tasks Reminder",
            f"You have {count} pending task{_plural(count)}{_in_project(user_tasks[0])}. "
            "Check your tasks to stay on track.",
            NOTIFICATION_SEVERITY_INFO,
            TASKS_LINK,
        )
        created += len(result)

    if tasks:
        logger.info("Checked %d pending tasks for %d users", len(tasks), len(grouped))
    return created


def summarize_assigned_tasks(tasks: list[Task], *, now: datetime) -> tuple[str, str]:
    """Return ``(message, severity)`` for one user's assigned-task digest."""

    midnight = next_local_midnight(now)
    overdue = sum(1 for task in tasks if task.due_date is not None and task.due_date < now)
    due_soon = sum(
        1 for task in tasks if task.due_date is not None and now <= task.due_date <= midnight
    )

    message = f"You have {len(tasks)} assigned task{_plural(len(tasks))}"
    if overdue:
        message += f" ({overdue} overdue)"
    elif due_soon:
        message += f" ({due_soon} due soon)"
    message += ". Check your tasks to stay on track."

    severity = NOTIFICATION_SEVERITY_WARNING if overdue else NOTIFICATION_SEVERITY_INFO
    return message, severity


def check_assigned_tasks(session: Session, *, now: datetime | None = None) -> int:
    """Send each assignee one digest of their open tasks."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    tasks = TaskRepository(session).list_tasks(
        statuses=OPEN_TASK_STATUSES, require_assignment=True
    )
    grouped = group_tasks_by_recipient(tasks)
    notifier = Notifier(session)

    created = 0
    for user_id, user_tasks in grouped.items():
        message, severity = summarize_assigned_tasks(user_tasks, now=now)
        result = notifier.notify_many(
            [user_id], "Your Assigned Tasks", message, severity, TASKS_LINK
        )
        created += len(result)

    if tasks:
        logger.info("Checked %d assigned tasks for %d users", len(tasks), len(grouped))
    return created


def check_upcoming_events(session: Session, *, now: datetime | None = None) -> int:
    """Broadcast every event starting before the next local midnight to all users."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    events = EventRepository(session).list_starting_between(now, next_local_midnight(now))
    if not events:
        return 0

    user_ids = UserRepository(session).list_ids()
    if not user_ids:
        return 0

    notifier = Notifier(session)
    created = 0
    for event in events:
        project = f" in {event.project_name}" if event.project_name else ""
        result = notifier.notify_many(
            user_ids,
            "Upcoming Event",
            f'"{event.title}"{project} is happening on {format_date(event.start_date)} '
            f"at {format_time(event.start_date)} {event.location_label()}.",
            NOTIFICATION_SEVERITY_INFO,
            f"/events/{event.id}",
        )
        created += len(result)

    logger.info("Checked %d upcoming events", len(events))
    return created


def check_completed_tasks(session: Session, *, now: datetime | None = None) -> int:
    """Tell task creators about tasks completed within the look-back window."""

    now = ensure_app_timezone(now) or now_in_app_timezone()
    window = timedelta(minutes=get_settings().completed_task_window_minutes)
    tasks = TaskRepository(session).list_tasks(
        statuses=(TASK_STATUS_COMPLETED,), updated_since=now - window
    )
    notifier = Notifier(session)

    created = 0
    for task in tasks:
        if task.created_by is None:
            continue
        result = notifier.notify_many(
            [task.created_by],
            "Task Completed",
            f'The task "{task.title}"{_in_project(task)} has been marked as completed.',
            NOTIFICATION_SEVERITY_SUCCESS,
            _task_link(task),
        )
        created += len(result)

    if tasks:
        logger.info("Checked %d completed tasks", len(tasks))
    return created


def _in_project(task: Task) -> str:
    return f" in {task.project_name}" if task.project_name else ""


def _task_link(task: Task) -> str:
    return f"/tasks/{task.id}"


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


SHORT_CYCLE_CHECKS = (
    check_overdue_tasks,
    check_tasks_due_soon,
    check_upcoming_events,
    check_completed_tasks,
)
DAILY_CYCLE_CHECKS = (
    check_pending_tasks,
    check_assigned_tasks,
)


__all__ = [
    "DAILY_CYCLE_CHECKS",
    "SHORT_CYCLE_CHECKS",
    "check_assigned_tasks",
    "check_completed_tasks",
    "check_overdue_tasks",
    "check_pending_tasks",
    "check_tasks_due_soon",
    "check_upcoming_events",
    "group_tasks_by_recipient",
    "summarize_assigned_tasks",
]
