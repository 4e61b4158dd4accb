"""Tests for the notification fan-out primitive."""

from __future__ import annotations

import pytest

from teamboard.application.use_cases.notifications import Notifier
from teamboard.domain.entities import FanOutResult
from teamboard.infrastructure.repositories import NotificationRepository


class FlakyNotificationRepository(NotificationRepository):
    """Repository whose writes fail for a chosen set of recipients."""

    def __init__(self, session, failing_ids) -> None:
        super().__init__(session)
        self.failing_ids = set(failing_ids)
        self.attempts: list[int] = []

    def create(self, notification):
        self.attempts.append(notification.recipient_id)
        if notification.recipient_id in self.failing_ids:
            raise RuntimeError("database is unavailable")
        return super().create(notification)


def test_notify_many_creates_one_record_per_distinct_recipient(session, factory, notifications):
    alice, bob, carol = factory.user("Alice"), factory.user("Bob"), factory.user("Carol")

    result = Notifier(session, publish=None).notify_many(
        [alice.id, bob.id, alice.id, None, carol.id],
        "Heads up",
        "Something happened",
        "info",
        "/tasks/1",
    )

    assert isinstance(result, FanOutResult)
    assert result.ok
    assert len(result) == 3
    assert result.recipient_ids == [alice.id, bob.id, carol.id]
    for user in (alice, bob, carol):
        stored = notifications(user)
        assert len(stored) == 1
        assert stored[0].title == "Heads up"
        assert stored[0].link == "/tasks/1"
        assert stored[0].read is False
        assert stored[0].created_at is not None


def test_notify_many_with_no_recipients_writes_nothing(session):
    repository = FlakyNotificationRepository(session, failing_ids=())

    result = Notifier(session, repository=repository, publish=None).notify_many(
        set(), "Nothing", "to see", "info"
    )

    assert list(result) == []
    assert result.failed_recipient_ids == []
    assert repository.attempts == []


def test_notify_many_keeps_going_when_one_recipient_fails(session, factory, notifications):
    alice, bob, carol = factory.user("Alice"), factory.user("Bob"), factory.user("Carol")
    repository = FlakyNotificationRepository(session, failing_ids={bob.id})

    result = Notifier(session, repository=repository, publish=None).notify_many(
        [alice.id, bob.id, carol.id], "Batch", "Partial failure", "warning"
    )

    assert not result.ok
    assert result.failed_recipient_ids == [bob.id]
    assert result.recipient_ids == [alice.id, carol.id]
    assert repository.attempts == [alice.id, bob.id, carol.id]
    assert len(notifications(alice)) == 1
    assert notifications(bob) == []
    assert len(notifications(carol)) == 1


def test_notify_many_never_raises_when_every_write_fails(session, factory):
    alice, bob = factory.user("Alice"), factory.user("Bob")
    repository = FlakyNotificationRepository(session, failing_ids={alice.id, bob.id})

    result = Notifier(session, repository=repository, publish=None).notify_many(
        [alice.id, bob.id], "Batch", "All failing", "info"
    )

    assert len(result) == 0
    assert result.failed_recipient_ids == [alice.id, bob.id]


def test_notify_one_returns_persisted_notification(session, factory):
    alice = factory.user("Alice")

    notification = Notifier(session, publish=None).notify_one(
        alice.id, "Task Completed", "Done", "success", "/tasks/9"
    )

    assert notification.id is not None
    assert notification.recipient_id == alice.id
    assert notification.severity == "success"
    assert notification.read is False
    assert NotificationRepository(session).count_unread(alice.id) == 1


def test_notify_one_propagates_store_errors(session, factory):
    alice = factory.user("Alice")
    repository = FlakyNotificationRepository(session, failing_ids={alice.id})

    with pytest.raises(RuntimeError):
        Notifier(session, repository=repository, publish=None).notify_one(
            alice.id, "Title", "Message"
        )


def test_unknown_severity_fails_the_batch_without_writing(session, factory):
    alice, bob = factory.user("Alice"), factory.user("Bob")
    repository = FlakyNotificationRepository(session, failing_ids=())
    notifier = Notifier(session, repository=repository, publish=None)

    result = notifier.notify_many([alice.id, bob.id], "Title", "Message", "critical")

    assert len(result) == 0
    assert result.failed_recipient_ids == [alice.id, bob.id]
    assert repository.attempts == []


def test_notify_one_rejects_unknown_severity(session, factory):
    alice = factory.user("Alice")
    repository = FlakyNotificationRepository(session, failing_ids=())

    with pytest.raises(ValueError):
        Notifier(session, repository=repository, publish=None).notify_one(
            alice.id, "Title", "Message", "critical"
        )
    assert repository.attempts == []


def test_saved_notifications_are_published(session, factory):
    alice, bob = factory.user("Alice"), factory.user("Bob")
    published = []

    result = Notifier(session, publish=published.append).notify_many(
        [alice.id, bob.id], "Hello", "World", "info"
    )

    assert [n.id for n in published] == [n.id for n in result]


def test_publish_failures_do_not_affect_delivery(session, factory, notifications):
    alice = factory.user("Alice")

    def broken_publish(_notification):
        raise RuntimeError("websocket gone")

    result = Notifier(session, publish=broken_publish).notify_many(
        [alice.id], "Hello", "World", "info"
    )

    assert result.ok
    assert len(notifications(alice)) == 1
