from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.security import hash_password
from src.taskboard.models import User
from src.taskboard.models.base import utc_now
from src.taskboard.repositories import UserRepository
from src.taskboard.schemas.user import UserUpdate


class UserService:
    """User profile and directory service."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def list_directory(self) -> list[User]:
        """All users ordered by name, for team management screens."""
        return await self.user_repo.list_by_name()

    async def update(self, user: User, data: UserUpdate) -> User:
        """Update user with provided data."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if "password" in update_data:
            update_data["hashed_password"] = hash_password(update_data.pop("password"))

        for field, value in update_data.items():
            setattr(user, field, value)

        user.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(user)
        return user
