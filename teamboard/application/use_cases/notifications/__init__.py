"""Public helpers for emitting domain notifications."""

from .events import (
    notify_chat_message_sent,
    notify_event_created,
    notify_project_created,
    notify_task_assignees_added,
    notify_task_created,
)
from .notifier import Notifier
from .reminders import (
    DAILY_CYCLE_CHECKS,
    SHORT_CYCLE_CHECKS,
    check_assigned_tasks,
    check_completed_tasks,
    check_overdue_tasks,
    check_pending_tasks,
    check_tasks_due_soon,
    check_upcoming_events,
    group_tasks_by_recipient,
)

__all__ = [
    "Notifier",
    "notify_chat_message_sent",
    "notify_event_created",
    "notify_project_created",
    "notify_task_assignees_added",
    "notify_task_created",
    "DAILY_CYCLE_CHECKS",
    "SHORT_CYCLE_CHECKS",
    "check_assigned_tasks",
    "check_completed_tasks",
    "check_overdue_tasks",
    "check_pending_tasks",
    "check_tasks_due_soon",
    "check_upcoming_events",
    "group_tasks_by_recipient",
]
