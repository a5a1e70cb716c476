"""Admin service - global listings, role changes, hard deletes and analytics."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import NotFoundError
from src.taskboard.core.logging import get_logger
from src.taskboard.models import TaskStatus, User, UserRole
from src.taskboard.models.base import utc_now
from src.taskboard.repositories import (
    BaseRepository,
    ProjectRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from src.taskboard.schemas.admin import AnalyticsResponse

logger = get_logger(__name__)


class AdminService:
    """Operations restricted to the admin role.

    Deletes remove only the addressed row. References held elsewhere
    (memberships, assignees, projects of a team, tasks of a project) are
    left in place and readers skip the ones that no longer resolve.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        team_repo: TeamRepository,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.team_repo = team_repo
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.session = session

    async def list_users(self) -> list[User]:
        return await self.user_repo.list_all()

    async def update_role(self, user_id: UUID, role: UserRole) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        old_role = user.role
        user.role = role.value
        user.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(user)

        logger.info("User role changed", user_id=str(user.id), old_role=old_role, new_role=role.value)
        return user

    async def delete_user(self, user_id: UUID) -> None:
        await self._delete(self.user_repo, user_id, "User")

    async def delete_team(self, team_id: UUID) -> None:
        await self._delete(self.team_repo, team_id, "Team")

    async def delete_project(self, project_id: UUID) -> None:
        await self._delete(self.project_repo, project_id, "Project")

    async def delete_task(self, task_id: UUID) -> None:
        await self._delete(self.task_repo, task_id, "Task")

    async def analytics(self) -> AnalyticsResponse:
        """Global entity counts plus task/user breakdowns.

        Every known status and role is present in the breakdowns, zero-filled.
        """
        tasks_by_status = {s.value: 0 for s in TaskStatus}
        tasks_by_status.update(await self.task_repo.count_by_status())
        users_by_role = {r.value: 0 for r in UserRole}
        users_by_role.update(await self.user_repo.count_by_role())

        return AnalyticsResponse(
            total_users=await self.user_repo.count(),
            total_teams=await self.team_repo.count(),
            total_projects=await self.project_repo.count(),
            total_tasks=await self.task_repo.count(),
            tasks_by_status=tasks_by_status,
            users_by_role=users_by_role,
        )

    async def _delete(self, repo: BaseRepository, entity_id: UUID, label: str) -> None:
        entity = await repo.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{label} not found")
        await repo.delete(entity)
        await self.session.commit()
        logger.info("Entity deleted", entity_type=label.lower(), entity_id=str(entity_id))
