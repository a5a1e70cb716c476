"""Team schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.taskboard.schemas.user import UserSummary


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    member_ids: list[UUID] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Team name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class TeamRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    created_by_id: UUID
    created_at: datetime
    members: list[UserSummary] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class TeamListItem(TeamRead):
    project_count: int = 0


class TeamProjectSummary(BaseModel):
    id: UUID
    name: str
    status: str

    model_config = {"from_attributes": True}


class TeamDetail(TeamRead):
    projects: list[TeamProjectSummary] = Field(default_factory=list)
