"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.db import DBSession
from src.taskboard.api.dependencies.repositories import (
    ActivityRepo,
    ProjectRepo,
    TaskRepo,
    TeamRepo,
    UserRepo,
)
from src.taskboard.core.realtime import FanoutHub, get_fanout_hub
from src.taskboard.services import (
    ActivityService,
    AdminService,
    AuthService,
    ProjectService,
    TaskService,
    TeamService,
    UserService,
)

Hub = Annotated[FanoutHub, Depends(get_fanout_hub)]


def get_auth_service(user_repo: UserRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, session)


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_activity_service(
    activity_repo: ActivityRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> ActivityService:
    """Activity service sharing the request session.

    Entries are written after the mutation's own commit, each inside a
    savepoint, so a failed entry rolls back only that savepoint.
    """
    return ActivityService(activity_repo, user_repo, session)


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]


def get_task_service(
    task_repo: TaskRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    activity_service: ActivityServiceDep,
    session: DBSession,
    hub: Hub,
) -> TaskService:
    return TaskService(task_repo, project_repo, user_repo, activity_service, session, hub)


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


def get_team_service(
    team_repo: TeamRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> TeamService:
    return TeamService(team_repo, project_repo, user_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    team_repo: TeamRepo,
    task_service: TaskServiceDep,
    activity_service: ActivityServiceDep,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, team_repo, task_service, activity_service, session)


def get_admin_service(
    user_repo: UserRepo,
    team_repo: TeamRepo,
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> AdminService:
    return AdminService(user_repo, team_repo, project_repo, task_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
