"""SQLAlchemy models for tasks and their assignees."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import relationship

from teamboard.infrastructure.database import Base
from teamboard.utils import now_in_app_naive_datetime

task_assignee_table = Table(
    "task_assignee",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
)


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    due_date = Column(DateTime, nullable=True, index=True)
    project_id = Column(Integer, ForeignKey("project.id"), nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("user.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
        index=True,
    )

    project = relationship("ProjectModel", lazy="joined")
    assignees = relationship(
        "UserModel",
        secondary=task_assignee_table,
        lazy="selectin",
        order_by="UserModel.id",
    )


__all__ = ["TaskModel", "task_assignee_table"]
