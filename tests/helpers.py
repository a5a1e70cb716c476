"""Test helper functions for common data creation patterns."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.security import create_access_token
from src.taskboard.models import (
    Project,
    Task,
    TaskAssignee,
    Team,
    TeamMember,
    User,
    UserRole,
)
from tests.factories import ProjectFactory, TaskFactory, TeamFactory, UserFactory


class RecordingConnection:
    """Stands in for a WebSocket: records every message sent to it."""

    def __init__(self, fail: bool = False):
        self.messages: list[Any] = []
        self.fail = fail

    async def send_json(self, data: Any, mode: str = "text") -> None:
        if self.fail:
            raise ConnectionError("socket closed")
        self.messages.append(data)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header carrying a fresh access token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


async def create_user(
    session: AsyncSession,
    role: UserRole = UserRole.TEAM_MEMBER,
    **user_kwargs,
) -> User:
    user = UserFactory.build(role=role.value, **user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_team(
    session: AsyncSession,
    creator: User,
    members: list[User] | None = None,
    **team_kwargs,
) -> Team:
    """Create a team owned by ``creator`` with the given members."""
    team = TeamFactory.build(created_by_id=creator.id, **team_kwargs)
    session.add(team)
    for member in members or []:
        session.add(TeamMember(team_id=team.id, user_id=member.id))
    await session.commit()
    return team


async def create_project(session: AsyncSession, team: Team, **project_kwargs) -> Project:
    project = ProjectFactory.build(team_id=team.id, **project_kwargs)
    session.add(project)
    await session.commit()
    return project


async def create_task(
    session: AsyncSession,
    project: Project,
    assignees: list[User] | None = None,
    **task_kwargs,
) -> Task:
    """Create a task in ``project`` assigned to ``assignees``."""
    task = TaskFactory.build(project_id=project.id, **task_kwargs)
    session.add(task)
    for user in assignees or []:
        session.add(TaskAssignee(task_id=task.id, user_id=user.id))
    await session.commit()
    return task
