"""Notifications emitted right after a business write commits.

Every helper is best-effort: errors are logged and an empty
:class:`FanOutResult` is returned so the triggering operation still succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from functools import wraps
from typing import TypeVar

from sqlalchemy.orm import Session

from teamboard.domain.entities import (
    NOTIFICATION_SEVERITY_INFO,
    NOTIFICATION_SEVERITY_SUCCESS,
    Event,
    FanOutResult,
    Project,
    Task,
)
from teamboard.infrastructure.repositories import UserRepository
from teamboard.utils import format_date

from .notifier import Notifier

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR = "Someone"
CHAT_PREVIEW_LENGTH = 50

_F = TypeVar("_F", bound=Callable[..., FanOutResult])


def _best_effort(func: _F) -> _F:
    @wraps(func)
    def wrapper(session: Session, *args, **kwargs) -> FanOutResult:
        try:
            return func(session, *args, **kwargs)
        except Exception:
            logger.exception("Failed to emit notifications in %s", func.__name__)
            session.rollback()
            return FanOutResult()

    return wrapper  # type: ignore[return-value]


def _actor_name(session: Session, actor_id: int | None) -> str:
    return UserRepository(session).get_name(actor_id) or UNKNOWN_ACTOR


def _everyone_except(session: Session, excluded_id: int | None) -> list[int]:
    return [user_id for user_id in UserRepository(session).list_ids() if user_id != excluded_id]


def _log_result(kind: str, entity_id: int | None, result: FanOutResult) -> FanOutResult:
    if result.ok:
        logger.info("%s %s: notified %d users", kind, entity_id, len(result))
    else:
        logger.warning(
            "%s %s: notified %d users, %d failed",
            kind,
            entity_id,
            len(result),
            len(result.failed_recipient_ids),
        )
    return result


@_best_effort
def notify_project_created(session: Session, *, project: Project, actor_id: int | None) -> FanOutResult:
    """Tell every other user that ``project`` was created."""

    recipients = _everyone_except(session, actor_id)
    if not recipients:
        return FanOutResult()

    result = Notifier(session).notify_many(
        recipients,
        "New project created",
        f'{_actor_name(session, actor_id)} created a new project: "{project.name}"',
        NOTIFICATION_SEVERITY_SUCCESS,
        f"/projects/{project.id}",
    )
    return _log_result("Project created", project.id, result)


@_best_effort
def notify_task_created(session: Session, *, task: Task, actor_id: int | None) -> FanOutResult:
    """Tell the assignees of a new task about it, except the creator."""

    recipients = [user_id for user_id in task.recipient_ids() if user_id != actor_id]
    if not recipients:
        return FanOutResult()

    result = Notifier(session).notify_many(
        recipients,
        "New task assigned",
        f'{_actor_name(session, actor_id)} assigned you a new task: "{task.title}"'
        f"{_in_project(task.project_name)}",
        NOTIFICATION_SEVERITY_INFO,
        f"/tasks/{task.id}",
    )
    return _log_result("Task created", task.id, result)


def added_assignees(task: Task, previous_assignee_ids: Iterable[int | None]) -> list[int]:
    """Return the assignees of ``task`` that were not assigned before."""

    previous = {user_id for user_id in previous_assignee_ids if user_id is not None}
    return [user_id for user_id in task.recipient_ids() if user_id not in previous]


@_best_effort
def notify_task_assignees_added(
    session: Session,
    *,
    task: Task,
    previous_assignee_ids: Iterable[int | None],
    actor_id: int | None,
) -> FanOutResult:
    """Notify only the users newly assigned by an update of ``task``."""

    recipients = [
        user_id for user_id in added_assignees(task, previous_assignee_ids) if user_id != actor_id
    ]
    if not recipients:
        return FanOutResult()

    result = Notifier(session).notify_many(
        recipients,
        "Task assigned to you",
        f'{_actor_name(session, actor_id)} added you to the task "{task.title}"'
        f"{_in_project(task.project_name)}",
        NOTIFICATION_SEVERITY_INFO,
        f"/tasks/{task.id}",
    )
    return _log_result("Task updated", task.id, result)


@_best_effort
def notify_event_created(session: Session, *, event: Event, actor_id: int | None) -> FanOutResult:
    """Tell every other user that ``event`` was scheduled."""

    recipients = _everyone_except(session, actor_id)
    if not recipients:
        return FanOutResult()

    actor = _actor_name(session, actor_id)
    event_date = format_date(event.start_date)
    if event.project_name:
        title = f"New event in {event.project_name}"
        message = f'{actor} created event "{event.title}" in {event.project_name} on {event_date}'
    else:
        title = "New event created"
        message = f'{actor} created event "{event.title}" on {event_date}'

    result = Notifier(session).notify_many(
        recipients, title, message, NOTIFICATION_SEVERITY_INFO, f"/events/{event.id}"
    )
    return _log_result("Event created", event.id, result)


def chat_preview(message: str | None, file_url: str | None = None) -> str:
    """Summarize a chat message for the notification body."""

    if file_url:
        return "Shared an image"
    text = (message or "").strip()
    if not text:
        return "Sent a message"
    if len(text) > CHAT_PREVIEW_LENGTH:
        return text[:CHAT_PREVIEW_LENGTH] + "..."
    return text


@_best_effort
def notify_chat_message_sent(
    session: Session,
    *,
    sender_id: int,
    message: str | None,
    file_url: str | None = None,
) -> FanOutResult:
    """Tell every team member except the sender about a new team chat message."""

    recipients = _everyone_except(session, sender_id)
    if not recipients:
        return FanOutResult()

    result = Notifier(session).notify_many(
        recipients,
        "New team chat message",
        f"{_actor_name(session, sender_id)}: {chat_preview(message, file_url)}",
        NOTIFICATION_SEVERITY_INFO,
        "/team-chat",
    )
    return _log_result("Chat message from", sender_id, result)


def _in_project(project_name: str | None) -> str:
    return f" in {project_name}" if project_name else ""


__all__ = [
    "added_assignees",
    "chat_preview",
    "notify_chat_message_sent",
    "notify_event_created",
    "notify_project_created",
    "notify_task_assignees_added",
    "notify_task_created",
]
