"""Project service - creation and team-scoped reads."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import NotFoundError
from src.taskboard.core.logging import get_logger
from src.taskboard.models import ActivityAction, ActivityEntityType, Project, User
from src.taskboard.repositories import ProjectRepository, TeamRepository
from src.taskboard.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
)
from src.taskboard.schemas.user import UserSummary
from src.taskboard.services.activity_service import ActivityService
from src.taskboard.services.task_service import TaskService

logger = get_logger(__name__)


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        team_repo: TeamRepository,
        task_service: TaskService,
        activity_service: ActivityService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.team_repo = team_repo
        self.task_service = task_service
        self.activity_service = activity_service
        self.session = session

    async def create(self, data: ProjectCreate, acting_user: User) -> ProjectRead:
        """Create a project under an existing team.

        Raises:
            NotFoundError: If the team does not exist
        """
        team = await self.team_repo.get_by_id(data.team_id)
        if team is None:
            raise NotFoundError("Team not found")

        project = Project(
            name=data.name,
            description=data.description,
            status=data.status.value,
            team_id=team.id,
        )
        self.project_repo.add(project)
        await self.session.commit()

        result = ProjectRead.model_validate(project)
        logger.info("Project created", project_id=str(project.id), team_id=str(team.id))

        await self.activity_service.log_action(
            action=ActivityAction.PROJECT_CREATED,
            entity_type=ActivityEntityType.PROJECT,
            entity_id=project.id,
            user_id=acting_user.id,
            project_id=project.id,
            details={"projectName": project.name},
        )
        return result

    async def list_for_user(self, user: User) -> list[ProjectListItem]:
        """Projects of the teams the user created or belongs to."""
        return await self._list_items(await self.project_repo.list_for_user(user.id))

    async def list_all(self) -> list[ProjectListItem]:
        return await self._list_items(await self.project_repo.list_all())

    async def get(self, project_id: UUID) -> ProjectDetail:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        team = await self.team_repo.get_by_id(project.team_id)
        members = await self.team_repo.list_members(project.team_id) if team else []
        return ProjectDetail(
            **ProjectRead.model_validate(project).model_dump(),
            team_name=team.name if team else None,
            members=[UserSummary.model_validate(m) for m in members],
            tasks=await self.task_service.list_for_project(project.id),
        )

    async def _list_items(self, projects: list[Project]) -> list[ProjectListItem]:
        team_ids = list({p.team_id for p in projects})
        team_names = {}
        for team_id in team_ids:
            team = await self.team_repo.get_by_id(team_id)
            if team is not None:
                team_names[team_id] = team.name
        task_counts = await self.project_repo.count_tasks([p.id for p in projects])
        return [
            ProjectListItem(
                **ProjectRead.model_validate(p).model_dump(),
                team_name=team_names.get(p.team_id),
                task_count=task_counts.get(p.id, 0),
            )
            for p in projects
        ]
