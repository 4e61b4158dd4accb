"""Shared fixtures: a throw-away SQLite database and model factories."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ENABLE_SCHEDULER"] = "false"

# Tuesday morning, far from any DST transition.
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


class ModelFactory:
    """Insert domain rows directly, standing in for the CRUD collaborators."""

    def __init__(self, session) -> None:
        self.session = session
        self._emails = 0

    def user(self, name: str = "User"):
        from teamboard.infrastructure.models import UserModel

        self._emails += 1
        model = UserModel(name=name, email=f"user{self._emails}@example.com")
        return self._save(model)

    def project(self, name: str, *, created_by):
        from teamboard.infrastructure.models import ProjectModel

        return self._save(ProjectModel(name=name, created_by=created_by.id))

    def task(
        self,
        title: str,
        *,
        created_by,
        status: str = "pending",
        due_date: datetime | None = None,
        assignees=(),
        assigned_to=None,
        project=None,
        updated_at: datetime | None = None,
    ):
        from teamboard.infrastructure.models import TaskModel
        from teamboard.utils import ensure_app_naive_datetime

        model = TaskModel(
            title=title,
            status=status,
            due_date=ensure_app_naive_datetime(due_date),
            created_by=created_by.id,
            assigned_to=assigned_to.id if assigned_to is not None else None,
            project_id=project.id if project is not None else None,
            updated_at=ensure_app_naive_datetime(updated_at or NOW),
        )
        model.assignees = list(assignees)
        return self._save(model)

    def event(
        self,
        title: str,
        *,
        start_date: datetime,
        created_by,
        is_online: bool = False,
        online_platform: str | None = None,
        location: str | None = None,
        project=None,
    ):
        from teamboard.infrastructure.models import EventModel
        from teamboard.utils import ensure_app_naive_datetime

        model = EventModel(
            title=title,
            start_date=ensure_app_naive_datetime(start_date),
            created_by=created_by.id,
            is_online=is_online,
            online_platform=online_platform,
            location=location,
            project_id=project.id if project is not None else None,
        )
        return self._save(model)

    def _save(self, model):
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model


@pytest.fixture()
def session():
    """Yield a session bound to freshly created tables."""

    from teamboard.infrastructure import database

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
        database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture()
def factory(session) -> ModelFactory:
    return ModelFactory(session)


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


def notifications_for(session, user) -> list:
    from teamboard.infrastructure.repositories import NotificationRepository

    return list(NotificationRepository(session).list_for_user(user.id, limit=None))


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def notifications(session):
    """Return a helper listing every notification of a user, newest first."""

    def _list(user) -> list:
        return notifications_for(session, user)

    return _list
