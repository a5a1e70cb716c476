from src.taskboard.services.activity_service import ActivityService
from src.taskboard.services.admin_service import AdminService
from src.taskboard.services.auth_service import AuthService
from src.taskboard.services.project_service import ProjectService
from src.taskboard.services.task_service import (
    StatusTransitionPolicy,
    TaskService,
    permit_any_transition,
)
from src.taskboard.services.team_service import TeamService
from src.taskboard.services.user_service import UserService

__all__ = [
    "ActivityService",
    "AdminService",
    "AuthService",
    "ProjectService",
    "StatusTransitionPolicy",
    "TaskService",
    "TeamService",
    "UserService",
    "permit_any_transition",
]
