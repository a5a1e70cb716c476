"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Static roles; every user holds exactly one."""

    TEAM_MEMBER = "team_member"
    PROJECT_MANAGER = "project_manager"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class TaskStatus(str, Enum):
    """Task board columns. Any status may follow any other."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActivityEntityType(str, Enum):
    TASK = "task"
    PROJECT = "project"
    TEAM = "team"
    USER = "user"
