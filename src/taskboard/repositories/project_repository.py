"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.taskboard.models import Project, Task, Team, TeamMember
from src.taskboard.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_for_team(self, team_id: UUID) -> list[Project]:
        result = await self.session.execute(
            select(Project)
            .where(Project.team_id == team_id)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """Projects whose team the user created or belongs to."""
        member_of = select(TeamMember.team_id).where(TeamMember.user_id == user_id)
        visible_teams = select(Team.id).where(
            or_(Team.created_by_id == user_id, Team.id.in_(member_of))  # type: ignore[attr-defined]
        )
        result = await self.session.execute(
            select(Project)
            .where(Project.team_id.in_(visible_teams))  # type: ignore[attr-defined]
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_names(self, project_ids: list[UUID]) -> dict[UUID, str]:
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(Project.id, Project.name).where(Project.id.in_(project_ids))  # type: ignore[attr-defined]
        )
        return {project_id: name for project_id, name in result.all()}

    async def count_tasks(self, project_ids: list[UUID]) -> dict[UUID, int]:
        """Number of tasks per project; projects with none are absent."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(Task.project_id, func.count())
            .where(Task.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .group_by(Task.project_id)
        )
        return {project_id: count for project_id, count in result.all()}
