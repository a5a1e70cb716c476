"""Task schemas for API request/response."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.taskboard.models import TaskPriority, TaskStatus
from src.taskboard.schemas.user import UserSummary


class TaskCreate(BaseModel):
    """Schema for creating a task.

    ``status`` is accepted for client compatibility but ignored: new tasks
    always start in ``todo``.
    """

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    project_id: UUID
    assigned_user_ids: list[UUID] = Field(default_factory=list)
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty or whitespace only")
        return v


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskRead(BaseModel):
    id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None
    project_id: UUID
    assigned_users: list[UserSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssignedTaskRead(TaskRead):
    """Task in the caller's personal list, with its project name."""

    project_name: str | None = None
