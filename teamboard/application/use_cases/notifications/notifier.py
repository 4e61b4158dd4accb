"""Fan-out primitive that turns one message into per-recipient notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from sqlalchemy.orm import Session

from teamboard.domain.entities import NOTIFICATION_SEVERITIES, FanOutResult, Notification
from teamboard.infrastructure.notifications import dispatch_notification
from teamboard.infrastructure.repositories import NotificationRepository
from teamboard.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class Notifier:
    """Persist notifications and push them to connected clients.

    ``notify_many`` writes every recipient independently: a failed write is
    rolled back and reported in the returned :class:`FanOutResult` while the
    rest of the batch is still delivered. It never raises, so the business
    operation that triggered it is never affected.
    """

    def __init__(
        self,
        session: Session,
        *,
        repository: NotificationRepository | None = None,
        publish: Callable[[Notification], None] | None = dispatch_notification,
    ) -> None:
        self._session = session
        self._repository = repository or NotificationRepository(session)
        self._publish = publish

    def notify_one(
        self,
        recipient_id: int,
        title: str,
        message: str,
        severity: str = "info",
        link: str | None = None,
    ) -> Notification:
        """Create a single notification; store errors propagate to the caller."""

        _validate_severity(severity)
        saved = self._repository.create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                title=title,
                message=message,
                severity=severity,
                link=link,
                read=False,
                created_at=now_in_app_timezone(),
            )
        )
        self._push(saved)
        return saved

    def notify_many(
        self,
        recipient_ids: Iterable[int | None],
        title: str,
        message: str,
        severity: str = "info",
        link: str | None = None,
    ) -> FanOutResult:
        """Create one notification per distinct recipient."""

        result = FanOutResult()
        recipients = list(dict.fromkeys(r for r in recipient_ids if r is not None))
        if not recipients:
            logger.debug("No recipients for notification %r", title)
            return result

        try:
            _validate_severity(severity)
        except ValueError:
            logger.exception("Rejected notification %r for users %s", title, recipients)
            result.failed_recipient_ids.extend(recipients)
            return result

        created_at = now_in_app_timezone()
        for recipient_id in recipients:
            try:
                saved = self._repository.create(
                    Notification(
                        id=None,
                        recipient_id=recipient_id,
                        title=title,
                        message=message,
                        severity=severity,
                        link=link,
                        read=False,
                        created_at=created_at,
                    )
                )
            except Exception:
                logger.exception(
                    "Could not create notification %r for user %s", title, recipient_id
                )
                self._session.rollback()
                result.failed_recipient_ids.append(recipient_id)
                continue
            result.notifications.append(saved)
            self._push(saved)

        if result.ok:
            logger.info(
                "Created %d notifications %r for users %s", len(result), title, result.recipient_ids
            )
        else:
            logger.warning(
                "Created %d of %d notifications %r; failed recipients: %s",
                len(result),
                len(recipients),
                title,
                result.failed_recipient_ids,
            )
        return result

    def _push(self, notification: Notification) -> None:
        if self._publish is None:
            return
        try:
            self._publish(notification)
        except Exception:
            logger.exception("Realtime delivery failed for notification %s", notification.id)


def _validate_severity(severity: str) -> None:
    if severity not in NOTIFICATION_SEVERITIES:
        allowed = ", ".join(sorted(NOTIFICATION_SEVERITIES))
        raise ValueError(f"Unknown notification severity '{severity}' (expected one of: {allowed})")


__all__ = ["Notifier"]
