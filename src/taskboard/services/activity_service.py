"""Activity logging service - append-only trail of domain mutations."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger
from src.taskboard.models import ActivityEntityType, ActivityLog
from src.taskboard.repositories import ActivityLogRepository, UserRepository
from src.taskboard.schemas.activity import ActivityRead
from src.taskboard.schemas.user import UserSummary

logger = get_logger(__name__)


class ActivityService:
    """Records and reads activity entries.

    Logging failures never block the mutation that triggered them. Each entry
    is written inside a savepoint, so a failed insert is rolled back on its
    own and leaves the rest of the session untouched.
    """

    def __init__(
        self,
        activity_repo: ActivityLogRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.activity_repo = activity_repo
        self.user_repo = user_repo
        self.session = session

    async def log_action(
        self,
        action: str,
        entity_type: ActivityEntityType,
        entity_id: UUID,
        user_id: UUID,
        project_id: UUID | None = None,
        details: dict[str, Any] | None = None,
    ) -> ActivityLog | None:
        """Append an activity entry.

        Returns:
            The created ActivityLog, or None if recording failed
        """
        entry = ActivityLog(
            action=action,
            entity_type=entity_type.value,
            entity_id=entity_id,
            project_id=project_id,
            details=details,
            user_id=user_id,
        )
        try:
            async with self.session.begin_nested():
                self.activity_repo.add(entry)
            await self.session.commit()

            logger.debug(
                "Activity recorded",
                action=action,
                entity_type=entity_type.value,
                entity_id=str(entity_id),
            )
            return entry

        except Exception as e:
            logger.warning(
                "Failed to record activity",
                action=action,
                entity_type=entity_type.value,
                entity_id=str(entity_id),
                error=str(e),
            )
            return None

    async def list_task_activity(
        self, project_id: UUID, limit: int | None = None
    ) -> list[ActivityRead]:
        """Most recent task activity for a project, newest first, actors resolved."""
        if limit is None:
            limit = get_settings().activity_feed_limit

        entries = await self.activity_repo.list_for_project(
            project_id, ActivityEntityType.TASK.value, limit
        )
        actors = {
            user.id: UserSummary.model_validate(user)
            for user in await self.user_repo.get_many({e.user_id for e in entries})
        }
        return [
            ActivityRead(
                id=entry.id,
                action=entry.action,
                entity_type=entry.entity_type,
                entity_id=entry.entity_id,
                project_id=entry.project_id,
                details=entry.details,
                user=actors.get(entry.user_id),
                created_at=entry.created_at,
            )
            for entry in entries
        ]
