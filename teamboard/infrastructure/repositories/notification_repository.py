"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from teamboard.domain.entities import Notification
from teamboard.infrastructure.models import NotificationModel
from teamboard.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide create, read-state and delete operations for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        return self.list_for_user(user_id, read=False, limit=limit)

    def count_unread(self, user_id: int) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = self._get_owned_model(notification_id, user_id=user_id)
        if model is None:
            return None
        model.read = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_many_as_read(self, notification_ids: Sequence[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated)

    def delete(self, notification_id: int, *, user_id: int) -> bool:
        model = self._get_owned_model(notification_id, user_id=user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_owned_model(self, notification_id: int, *, user_id: int) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .one_or_none()
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.recipient_id
        model.title = notification.title
        model.message = notification.message
        model.severity = notification.severity
        model.link = notification.link
        model.read = bool(notification.read)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            title=model.title,
            message=model.message,
            severity=model.severity,
            link=model.link,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
