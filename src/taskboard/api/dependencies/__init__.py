"""FastAPI dependency injection definitions."""

from src.taskboard.api.dependencies.auth import (
    AdminUser,
    CurrentUser,
    ManagerUser,
    extract_bearer_token,
    get_current_user,
    require_roles,
)
from src.taskboard.api.dependencies.db import DBSession, get_db_session
from src.taskboard.api.dependencies.repositories import (
    ActivityRepo,
    ProjectRepo,
    TaskRepo,
    TeamRepo,
    UserRepo,
)
from src.taskboard.api.dependencies.services import (
    ActivityServiceDep,
    AdminServiceDep,
    AuthServiceDep,
    Hub,
    ProjectServiceDep,
    TaskServiceDep,
    TeamServiceDep,
    UserServiceDep,
    get_auth_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminUser",
    "CurrentUser",
    "ManagerUser",
    "extract_bearer_token",
    "get_current_user",
    "require_roles",
    # Repositories
    "ActivityRepo",
    "ProjectRepo",
    "TaskRepo",
    "TeamRepo",
    "UserRepo",
    # Services
    "ActivityServiceDep",
    "AdminServiceDep",
    "AuthServiceDep",
    "Hub",
    "ProjectServiceDep",
    "TaskServiceDep",
    "TeamServiceDep",
    "UserServiceDep",
    "get_auth_service",
]
