"""SQLAlchemy model for projects."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from teamboard.infrastructure.database import Base


class ProjectModel(Base):
    """Database representation of a project."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ProjectModel"]
