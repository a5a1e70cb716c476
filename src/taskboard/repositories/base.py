"""Shared data access for the taskboard tables."""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Lookup, listing and staging for one table.

    Nothing here commits. Services own the transaction so a task change and
    its activity entry land together.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        return await self.session.get(self.model, id)

    def add(self, entity: ModelType) -> None:
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def list_all(self) -> list[ModelType]:
        """Every row, newest first."""
        statement = select(self.model).order_by(self.model.created_at.desc())  # type: ignore[attr-defined]
        return list((await self.session.execute(statement)).scalars().all())

    async def count(self) -> int:
        statement = select(func.count()).select_from(self.model)
        return (await self.session.execute(statement)).scalar_one()
