"""Repository for ActivityLog entity (append-only)."""

from uuid import UUID

from sqlmodel import select

from src.taskboard.core.exceptions import ConflictError
from src.taskboard.models import ActivityLog
from src.taskboard.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Write and query activity entries.

    Entries are never updated or deleted through this repository.
    """

    model = ActivityLog

    async def delete(self, entity: ActivityLog) -> None:
        raise ConflictError("Activity log entries cannot be deleted")

    async def list_for_project(
        self,
        project_id: UUID,
        entity_type: str,
        limit: int,
    ) -> list[ActivityLog]:
        """Most recent entries of one entity type for a project, newest first."""
        result = await self.session.execute(
            select(ActivityLog)
            .where(
                ActivityLog.project_id == project_id,
                ActivityLog.entity_type == entity_type,
            )
            .order_by(ActivityLog.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
