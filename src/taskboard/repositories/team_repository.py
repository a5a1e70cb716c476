"""Repository for Team entity and team membership."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.taskboard.models import Project, Team, TeamMember, User
from src.taskboard.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    model = Team

    def add_member(self, team_id: UUID, user_id: UUID) -> None:
        self.session.add(TeamMember(team_id=team_id, user_id=user_id))

    async def list_members(self, team_id: UUID) -> list[User]:
        """Members of a team that still exist, ordered by name."""
        result = await self.session.execute(
            select(User)
            .join(TeamMember, TeamMember.user_id == User.id)  # type: ignore[arg-type]
            .where(TeamMember.team_id == team_id)
            .order_by(User.name)
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID) -> list[Team]:
        """Teams the user created or is a member of, newest first."""
        member_of = select(TeamMember.team_id).where(TeamMember.user_id == user_id)
        result = await self.session.execute(
            select(Team)
            .where(or_(Team.created_by_id == user_id, Team.id.in_(member_of)))  # type: ignore[attr-defined]
            .order_by(Team.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_projects(self, team_ids: list[UUID]) -> dict[UUID, int]:
        """Number of projects per team; teams with none are absent."""
        if not team_ids:
            return {}
        result = await self.session.execute(
            select(Project.team_id, func.count())
            .where(Project.team_id.in_(team_ids))  # type: ignore[attr-defined]
            .group_by(Project.team_id)
        )
        return {team_id: count for team_id, count in result.all()}
