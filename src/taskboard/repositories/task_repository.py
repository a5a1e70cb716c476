"""Repository for Task entity and task assignees."""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.taskboard.models import Task, TaskAssignee, User
from src.taskboard.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    model = Task

    def add_assignee(self, task_id: UUID, user_id: UUID) -> None:
        self.session.add(TaskAssignee(task_id=task_id, user_id=user_id))

    async def list_assignees(self, task_id: UUID) -> list[User]:
        """Assigned users that still exist."""
        assignees = await self.list_assignees_for([task_id])
        return assignees.get(task_id, [])

    async def list_assignees_for(self, task_ids: list[UUID]) -> dict[UUID, list[User]]:
        """Batch assignee lookup keyed by task id.

        Joins on users, so assignees whose account was deleted drop out.
        """
        if not task_ids:
            return {}
        result = await self.session.execute(
            select(TaskAssignee.task_id, User)
            .join(User, User.id == TaskAssignee.user_id)  # type: ignore[arg-type]
            .where(TaskAssignee.task_id.in_(task_ids))  # type: ignore[attr-defined]
            .order_by(User.name)
        )
        by_task: dict[UUID, list[User]] = defaultdict(list)
        for task_id, user in result.all():
            by_task[task_id].append(user)
        return dict(by_task)

    async def list_for_project(self, project_id: UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_assignee(self, user_id: UUID) -> list[Task]:
        assigned = select(TaskAssignee.task_id).where(TaskAssignee.user_id == user_id)
        result = await self.session.execute(
            select(Task)
            .where(Task.id.in_(assigned))  # type: ignore[attr-defined]
            .order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[str, int]:
        result = await self.session.execute(
            select(Task.status, func.count()).group_by(Task.status)
        )
        return {status: count for status, count in result.all()}
