"""Activity log model - append-only audit trail of domain mutations."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now


class ActivityAction:
    """Action labels written to ActivityLog.action."""

    TASK_CREATED = "Task Created"
    TASK_STATUS_UPDATED = "Task Status Updated"
    PROJECT_CREATED = "Project Created"


class ActivityLog(SQLModel, table=True):
    """One recorded mutation. Rows are never updated or deleted."""

    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_project_entity_created", "project_id", "entity_type", "created_at"),
        Index("ix_activity_logs_entity", "entity_type", "entity_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    action: str = Field(max_length=100)
    entity_type: str = Field(max_length=20)  # ActivityEntityType value
    entity_id: UUID  # not a foreign key
    project_id: UUID | None = Field(default=None)
    details: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True),
    )
    user_id: UUID = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
