"""Tests for notifications emitted after business writes."""

from __future__ import annotations

from datetime import timedelta

from teamboard.application.use_cases.notifications import (
    Notifier,
    notify_chat_message_sent,
    notify_event_created,
    notify_project_created,
    notify_task_assignees_added,
    notify_task_created,
)
from teamboard.application.use_cases.notifications.events import added_assignees, chat_preview
from teamboard.domain.entities import FanOutResult, Project
from teamboard.infrastructure.repositories import EventRepository, TaskRepository


def _as_project(model) -> Project:
    return Project(id=model.id, name=model.name, created_by=model.created_by)


def test_project_creation_notifies_everyone_but_the_creator(session, factory, notifications):
    alice = factory.user("Alice")
    others = [factory.user("Bob"), factory.user("Carol"), factory.user("Dan")]
    project = _as_project(factory.project("Apollo", created_by=alice))

    result = notify_project_created(session, project=project, actor_id=alice.id)

    assert len(result) == 3
    assert notifications(alice) == []
    for user in others:
        (notification,) = notifications(user)
        assert notification.title == "New project created"
        assert notification.message == 'Alice created a new project: "Apollo"'
        assert notification.severity == "success"
        assert notification.link == f"/projects/{project.id}"


def test_task_update_only_notifies_added_assignees(session, factory, notifications):
    manager, u1, u2, u3 = (factory.user(name) for name in ("Manager", "U1", "U2", "U3"))
    model = factory.task("Design review", created_by=manager, assignees=[u1, u2, u3])
    task = TaskRepository(session).get(model.id)

    result = notify_task_assignees_added(
        session, task=task, previous_assignee_ids=[u1.id], actor_id=manager.id
    )

    assert sorted(result.recipient_ids) == sorted([u2.id, u3.id])
    assert notifications(u1) == []
    (notification,) = notifications(u2)
    assert notification.title == "Task assigned to you"
    assert notification.message == 'Manager added you to the task "Design review"'
    assert notification.link == f"/tasks/{task.id}"


def test_task_update_does_not_notify_the_updater(session, factory, notifications):
    u1, u2 = factory.user("U1"), factory.user("U2")
    task = TaskRepository(session).get(factory.task("Self", created_by=u1, assignees=[u1, u2]).id)

    result = notify_task_assignees_added(session, task=task, previous_assignee_ids=[], actor_id=u2.id)

    assert result.recipient_ids == [u1.id]
    assert notifications(u2) == []


def test_added_assignees_includes_legacy_assignee(session, factory):
    owner, u1, u2 = factory.user("Owner"), factory.user("U1"), factory.user("U2")
    task = TaskRepository(session).get(
        factory.task("Legacy", created_by=owner, assignees=[u1], assigned_to=u2).id
    )

    assert added_assignees(task, [u1.id, None]) == [u2.id]


def test_task_creation_skips_the_creator(session, factory, notifications):
    owner, helper = factory.user("Owner"), factory.user("Helper")
    project = factory.project("Apollo", created_by=owner)
    task = TaskRepository(session).get(
        factory.task("Plan", created_by=owner, assignees=[owner, helper], project=project).id
    )

    result = notify_task_created(session, task=task, actor_id=owner.id)

    assert result.recipient_ids == [helper.id]
    (notification,) = notifications(helper)
    assert notification.message == 'Owner assigned you a new task: "Plan" in Apollo'
    assert notifications(owner) == []


def test_event_creation_mentions_project(session, factory, notifications, now):
    host, guest = factory.user("Host"), factory.user("Guest")
    project = factory.project("Apollo", created_by=host)
    event = EventRepository(session).get(
        factory.event("Kickoff", start_date=now + timedelta(days=2), created_by=host, project=project).id
    )

    notify_event_created(session, event=event, actor_id=host.id)

    (notification,) = notifications(guest)
    assert notification.title == "New event in Apollo"
    assert notification.message == 'Host created event "Kickoff" in Apollo on 2026-03-12'
    assert notification.link == f"/events/{event.id}"
    assert notifications(host) == []


def test_unknown_actor_falls_back_to_someone(session, factory, notifications, now):
    host, guest = factory.user("Host"), factory.user("Guest")
    event = EventRepository(session).get(
        factory.event("Retro", start_date=now + timedelta(days=1), created_by=host).id
    )

    notify_event_created(session, event=event, actor_id=9999)

    for user in (host, guest):
        (notification,) = notifications(user)
        assert notification.title == "New event created"
        assert notification.message.startswith('Someone created event "Retro"')


def test_chat_message_notifies_everyone_but_the_sender(session, factory, notifications):
    sender, reader = factory.user("Sender"), factory.user("Reader")

    result = notify_chat_message_sent(session, sender_id=sender.id, message="  x" * 30)

    assert result.recipient_ids == [reader.id]
    (notification,) = notifications(reader)
    assert notification.link == "/team-chat"
    assert notification.message.startswith("Sender: x  x")
    assert notification.message.endswith("...")
    assert notifications(sender) == []


def test_chat_preview_variants():
    assert chat_preview("hello") == "hello"
    assert chat_preview("   ") == "Sent a message"
    assert chat_preview(None, file_url="/uploads/cat.png") == "Shared an image"
    assert chat_preview("a" * 51) == "a" * 50 + "..."


def test_notification_failures_never_reach_the_caller(session, factory, monkeypatch):
    alice, bob = factory.user("Alice"), factory.user("Bob")
    project = _as_project(factory.project("Apollo", created_by=alice))

    def explode(self, *args, **kwargs):
        raise RuntimeError("notification store down")

    monkeypatch.setattr(Notifier, "notify_many", explode)

    result = notify_project_created(session, project=project, actor_id=alice.id)

    assert isinstance(result, FanOutResult)
    assert len(result) == 0
