"""Team service - creation and membership-scoped reads."""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import NotFoundError
from src.taskboard.core.logging import get_logger
from src.taskboard.models import Team, User
from src.taskboard.repositories import ProjectRepository, TeamRepository, UserRepository
from src.taskboard.schemas.team import (
    TeamCreate,
    TeamDetail,
    TeamListItem,
    TeamProjectSummary,
    TeamRead,
)
from src.taskboard.schemas.user import UserSummary

logger = get_logger(__name__)

ReadT = TypeVar("ReadT", bound=TeamRead)


class TeamService:
    def __init__(
        self,
        team_repo: TeamRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.team_repo = team_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session

    async def create(self, data: TeamCreate, creator: User) -> TeamRead:
        """Create a team owned by ``creator``.

        Member ids that do not resolve to a user are skipped.
        """
        requested = list(dict.fromkeys(data.member_ids))
        members = await self.user_repo.get_many(requested)
        if len(members) < len(requested):
            found = {m.id for m in members}
            logger.warning(
                "Skipping unknown team members",
                missing=[str(i) for i in requested if i not in found],
            )

        team = Team(name=data.name, description=data.description, created_by_id=creator.id)
        self.team_repo.add(team)
        for member in members:
            self.team_repo.add_member(team.id, member.id)
        await self.session.commit()

        logger.info("Team created", team_id=str(team.id), member_count=len(members))
        return self._to_read(TeamRead, team, sorted(members, key=lambda m: m.name))

    async def list_for_user(self, user: User) -> list[TeamListItem]:
        """Teams the user created or is a member of, with project counts."""
        return await self._list_items(await self.team_repo.list_for_user(user.id))

    async def list_all(self) -> list[TeamListItem]:
        return await self._list_items(await self.team_repo.list_all())

    async def get(self, team_id: UUID) -> TeamDetail:
        team = await self.team_repo.get_by_id(team_id)
        if team is None:
            raise NotFoundError("Team not found")

        projects = await self.project_repo.list_for_team(team.id)
        return self._to_read(
            TeamDetail,
            team,
            await self.team_repo.list_members(team.id),
            projects=[TeamProjectSummary.model_validate(p) for p in projects],
        )

    async def _list_items(self, teams: list[Team]) -> list[TeamListItem]:
        project_counts = await self.team_repo.count_projects([t.id for t in teams])
        items = []
        for team in teams:
            members = await self.team_repo.list_members(team.id)
            items.append(
                self._to_read(
                    TeamListItem, team, members, project_count=project_counts.get(team.id, 0)
                )
            )
        return items

    @staticmethod
    def _to_read(
        schema: type[ReadT], team: Team, members: list[User], **extra: Any
    ) -> ReadT:
        return schema(
            id=team.id,
            name=team.name,
            description=team.description,
            created_by_id=team.created_by_id,
            created_at=team.created_at,
            members=[UserSummary.model_validate(m) for m in members],
            **extra,
        )
