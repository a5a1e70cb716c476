"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.db import DBSession
from src.taskboard.repositories import (
    ActivityLogRepository,
    ProjectRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_team_repository(session: DBSession) -> TeamRepository:
    return TeamRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_activity_repository(session: DBSession) -> ActivityLogRepository:
    return ActivityLogRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TeamRepo = Annotated[TeamRepository, Depends(get_team_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
ActivityRepo = Annotated[ActivityLogRepository, Depends(get_activity_repository)]
