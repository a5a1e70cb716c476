"""Database models.

Import from here so every table is registered on SQLModel.metadata.
"""

from src.taskboard.models.activity import ActivityAction, ActivityLog
from src.taskboard.models.enums import (
    ActivityEntityType,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    UserRole,
)
from src.taskboard.models.project import Project
from src.taskboard.models.task import Task, TaskAssignee
from src.taskboard.models.team import Team, TeamMember
from src.taskboard.models.user import User

__all__ = [
    # Enums
    "ActivityEntityType",
    "ProjectStatus",
    "TaskPriority",
    "TaskStatus",
    "UserRole",
    # Models
    "ActivityAction",
    "ActivityLog",
    "Project",
    "Task",
    "TaskAssignee",
    "Team",
    "TeamMember",
    "User",
]
