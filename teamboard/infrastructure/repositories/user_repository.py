"""Identity lookups for notification recipients."""

from __future__ import annotations

from sqlalchemy.orm import Session

from teamboard.domain.entities import User
from teamboard.infrastructure.models import UserModel
from teamboard.utils import ensure_app_timezone


class UserRepository:
    """Resolve user identities and enumerate recipients for broadcasts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_name(self, user_id: int | None) -> str | None:
        if user_id is None:
            return None
        name = (
            self.session.query(UserModel.name)
            .filter(UserModel.id == user_id)
            .scalar()
        )
        return name or None

    def list_ids(self) -> list[int]:
        rows = self.session.query(UserModel.id).order_by(UserModel.id.asc()).all()
        return [row.id for row in rows]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
