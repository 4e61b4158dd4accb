"""SQLAlchemy model for calendar events."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from teamboard.infrastructure.database import Base


class EventModel(Base):
    """Database representation of a calendar event."""

    __tablename__ = "event"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=True)
    is_online = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    online_platform = Column(String(50), nullable=True)
    location = Column(String(200), nullable=True)
    project_id = Column(Integer, ForeignKey("project.id"), nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)

    project = relationship("ProjectModel", lazy="joined")


__all__ = ["EventModel"]
