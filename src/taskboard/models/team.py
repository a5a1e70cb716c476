"""Team model and its membership link table.

References are plain indexed columns without foreign-key constraints:
deleting a user or team leaves dangling references rather than cascading.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now


class Team(SQLModel, table=True):
    __tablename__ = "teams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    # The creator always has access, listed in team_members or not
    created_by_id: UUID = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TeamMember(SQLModel, table=True):
    __tablename__ = "team_members"

    team_id: UUID = Field(primary_key=True)
    user_id: UUID = Field(primary_key=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
