"""Repository for User entity."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskboard.models import User
from src.taskboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_many(self, ids: Iterable[UUID]) -> list[User]:
        """Fetch the users that exist among ``ids``; missing ids are ignored."""
        id_list = list(ids)
        if not id_list:
            return []
        result = await self.session.execute(select(User).where(User.id.in_(id_list)))  # type: ignore[attr-defined]
        return list(result.scalars().all())

    async def list_by_name(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    async def count_by_role(self) -> dict[str, int]:
        result = await self.session.execute(
            select(User.role, func.count()).group_by(User.role)
        )
        return {role: count for role, count in result.all()}
