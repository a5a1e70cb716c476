from src.taskboard.schemas.activity import ActivityRead
from src.taskboard.schemas.admin import AnalyticsResponse, MessageResponse
from src.taskboard.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from src.taskboard.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
)
from src.taskboard.schemas.task import AssignedTaskRead, TaskCreate, TaskRead, TaskStatusUpdate
from src.taskboard.schemas.team import TeamCreate, TeamDetail, TeamListItem, TeamRead
from src.taskboard.schemas.user import RoleUpdate, UserRead, UserSummary, UserUpdate

__all__ = [
    "ActivityRead",
    "AnalyticsResponse",
    "AssignedTaskRead",
    "LoginRequest",
    "MessageResponse",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectListItem",
    "ProjectRead",
    "RegisterRequest",
    "RoleUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskStatusUpdate",
    "TeamCreate",
    "TeamDetail",
    "TeamListItem",
    "TeamRead",
    "TokenResponse",
    "UserRead",
    "UserSummary",
    "UserUpdate",
]
