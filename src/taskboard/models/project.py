"""Project model - every project belongs to exactly one team."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    team_id: UUID = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
