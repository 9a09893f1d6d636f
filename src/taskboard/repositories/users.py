"""Repository for interacting with user persistence models."""

from __future__ import annotations

from uuid import UUID

from sqlmodel import select

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Concrete repository for CRUD operations on ``User`` entities."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Return a user matching the supplied (already lowercased) email if it exists."""
        result = await self.session.exec(select(User).where(User.email == email))
        return result.first()

    async def exists(self, user_id: UUID) -> bool:
        result = await self.session.exec(select(User.id).where(User.id == user_id))
        return result.first() is not None
