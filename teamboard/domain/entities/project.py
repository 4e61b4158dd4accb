"""Domain entity representing a project."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Project:
    """Container grouping tasks and events."""

    id: int | None
    name: str
    created_by: int | None
    created_at: datetime | None = None


__all__ = ["Project"]
