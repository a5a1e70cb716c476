"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.taskboard.models import ProjectStatus
from src.taskboard.schemas.task import TaskRead
from src.taskboard.schemas.user import UserSummary


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    team_id: UUID
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str | None
    status: ProjectStatus
    team_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectListItem(ProjectRead):
    team_name: str | None = None
    task_count: int = 0


class ProjectDetail(ProjectRead):
    team_name: str | None = None
    members: list[UserSummary] = Field(default_factory=list)
    tasks: list[TaskRead] = Field(default_factory=list)
