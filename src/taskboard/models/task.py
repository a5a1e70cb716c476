"""Task model and its assignee link table."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20, index=True)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=10)
    due_date: date | None = Field(default=None)
    project_id: UUID = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TaskAssignee(SQLModel, table=True):
    __tablename__ = "task_assignees"

    task_id: UUID = Field(primary_key=True)
    user_id: UUID = Field(primary_key=True, index=True)
