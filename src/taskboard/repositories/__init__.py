"""Repository layer - data access abstraction."""

from src.taskboard.repositories.activity_repository import ActivityLogRepository
from src.taskboard.repositories.base import BaseRepository
from src.taskboard.repositories.project_repository import ProjectRepository
from src.taskboard.repositories.task_repository import TaskRepository
from src.taskboard.repositories.team_repository import TeamRepository
from src.taskboard.repositories.user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
