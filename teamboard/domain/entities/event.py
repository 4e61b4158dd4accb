"""Domain entity representing a calendar event."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Event:
    """Scheduled meeting, either physical or on an online platform."""

    id: int | None
    title: str
    start_date: datetime
    created_by: int | None
    end_date: datetime | None = None
    is_online: bool = False
    online_platform: str | None = None
    location: str | None = None
    project_id: int | None = None
    project_name: str | None = None

    def location_label(self) -> str:
        """Return the human readable place where the event happens."""

        if self.is_online:
            return f"on {self.online_platform or 'online platform'}"
        return self.location or "location TBD"


__all__ = ["Event"]
