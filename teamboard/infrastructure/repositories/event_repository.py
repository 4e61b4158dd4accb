"""Read-only queries over calendar events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from teamboard.domain.entities import Event
from teamboard.infrastructure.models import EventModel
from teamboard.utils import ensure_app_naive_datetime, ensure_app_timezone


class EventRepository:
    """Look up events by start date."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def list_starting_between(self, start: datetime, end: datetime) -> Sequence[Event]:
        """Return events with ``start <= start_date < end`` ordered by start."""

        query = (
            self.session.query(EventModel)
            .filter(EventModel.start_date >= ensure_app_naive_datetime(start))
            .filter(EventModel.start_date < ensure_app_naive_datetime(end))
            .order_by(EventModel.start_date.asc(), EventModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            title=model.title,
            start_date=ensure_app_timezone(model.start_date),
            end_date=ensure_app_timezone(model.end_date),
            created_by=model.created_by,
            is_online=bool(model.is_online),
            online_platform=model.online_platform,
            location=model.location,
            project_id=model.project_id,
            project_name=model.project.name if model.project else None,
        )


__all__ = ["EventRepository"]
