"""Task lifecycle service - create and status-change orchestration.

A mutation commits first. The side effects then run in a fixed order, each
inside its own failure boundary:

1. activity log entry
2. email to each assignee
3. real-time publish on the project channel

A failing side effect is logged and never reaches the caller or the side
effects after it. The returned payload is snapshotted right after the commit.
"""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import NotFoundError, NotificationError, StorageError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.notifications import (
    send_status_update_email,
    send_task_assignment_email,
)
from src.taskboard.core.realtime import TASK_CREATED, TASK_UPDATED, FanoutHub, project_channel
from src.taskboard.models import ActivityAction, ActivityEntityType, Task, TaskStatus, User
from src.taskboard.models.base import utc_now
from src.taskboard.repositories import ProjectRepository, TaskRepository, UserRepository
from src.taskboard.schemas.task import AssignedTaskRead, TaskCreate, TaskRead
from src.taskboard.schemas.user import UserSummary
from src.taskboard.services.activity_service import ActivityService

logger = get_logger(__name__)

# Called with (old_status, new_status); raises ValidationError to refuse
StatusTransitionPolicy = Callable[[TaskStatus, TaskStatus], None]


def permit_any_transition(old_status: TaskStatus, new_status: TaskStatus) -> None:
    """Default policy: every transition is allowed, including same-state."""


def to_task_read(task: Task, assignees: Sequence[User]) -> TaskRead:
    return TaskRead.model_validate(task).model_copy(
        update={"assigned_users": [UserSummary.model_validate(u) for u in assignees]}
    )


def _recipients(users: Sequence[User]) -> list[tuple[UUID, str]]:
    return [(user.id, user.email) for user in users]


class TaskService:
    def __init__(
        self,
        task_repo: TaskRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        activity_service: ActivityService,
        session: AsyncSession,
        hub: FanoutHub,
        transition_policy: StatusTransitionPolicy = permit_any_transition,
    ):
        self.task_repo = task_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.activity_service = activity_service
        self.session = session
        self.hub = hub
        self.transition_policy = transition_policy

    async def create(self, data: TaskCreate, acting_user: User) -> TaskRead:
        """Create a task in ``todo`` and fan out the side effects.

        Raises:
            NotFoundError: If the project does not exist
            StorageError: If the task could not be committed
        """
        project = await self.project_repo.get_by_id(data.project_id)
        if project is None:
            raise NotFoundError("Project not found")

        assignees = await self._resolve_assignees(data.assigned_user_ids)

        task = Task(
            title=data.title,
            description=data.description,
            status=TaskStatus.TODO.value,
            priority=data.priority.value,
            due_date=data.due_date,
            project_id=project.id,
        )
        self.task_repo.add(task)
        for user in assignees:
            self.task_repo.add_assignee(task.id, user.id)
        await self._commit(task_id=task.id)

        # Side effects read only these values; ORM rows may be expired from here on
        snapshot = to_task_read(task, assignees)
        project_name = project.name
        actor_id = acting_user.id
        recipients = _recipients(assignees)
        logger.info(
            "Task created",
            task_id=str(snapshot.id),
            project_id=str(snapshot.project_id),
            assignee_count=len(recipients),
        )

        await self.activity_service.log_action(
            action=ActivityAction.TASK_CREATED,
            entity_type=ActivityEntityType.TASK,
            entity_id=snapshot.id,
            user_id=actor_id,
            project_id=snapshot.project_id,
            details={"taskTitle": snapshot.title, "projectId": str(snapshot.project_id)},
        )
        await self._send_emails(
            send_task_assignment_email, recipients, snapshot.id, snapshot.title, project_name
        )
        await self._publish(
            snapshot.project_id, TASK_CREATED, {"task": snapshot.model_dump(mode="json")}
        )
        return snapshot

    async def update_status(
        self, task_id: UUID, new_status: TaskStatus, acting_user: User
    ) -> TaskRead:
        """Move a task to ``new_status`` and fan out the side effects.

        Raises:
            NotFoundError: If the task does not exist
            ValidationError: If the transition policy refuses the change
            StorageError: If the change could not be committed
        """
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")

        old_status = TaskStatus(task.status)
        self.transition_policy(old_status, new_status)

        assignees = await self.task_repo.list_assignees(task.id)
        task.status = new_status.value
        task.updated_at = utc_now()
        await self._commit(task_id=task.id)

        snapshot = to_task_read(task, assignees)
        actor_id, actor_name = acting_user.id, acting_user.name
        recipients = _recipients(assignees)
        logger.info(
            "Task status updated",
            task_id=str(snapshot.id),
            old_status=old_status.value,
            new_status=new_status.value,
        )

        await self.activity_service.log_action(
            action=ActivityAction.TASK_STATUS_UPDATED,
            entity_type=ActivityEntityType.TASK,
            entity_id=snapshot.id,
            user_id=actor_id,
            project_id=snapshot.project_id,
            details={
                "oldStatus": old_status.value,
                "newStatus": new_status.value,
                "taskTitle": snapshot.title,
            },
        )
        await self._send_emails(
            send_status_update_email, recipients, snapshot.id, snapshot.title, new_status.value
        )
        await self._publish(
            snapshot.project_id,
            TASK_UPDATED,
            {
                "taskId": str(snapshot.id),
                "status": new_status.value,
                "updatedBy": actor_name,
            },
        )
        return snapshot

    async def get(self, task_id: UUID) -> TaskRead:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return to_task_read(task, await self.task_repo.list_assignees(task.id))

    async def list_all(self) -> list[TaskRead]:
        tasks = await self.task_repo.list_all()
        assignees = await self.task_repo.list_assignees_for([t.id for t in tasks])
        return [to_task_read(t, assignees.get(t.id, [])) for t in tasks]

    async def list_for_project(self, project_id: UUID) -> list[TaskRead]:
        tasks = await self.task_repo.list_for_project(project_id)
        assignees = await self.task_repo.list_assignees_for([t.id for t in tasks])
        return [to_task_read(t, assignees.get(t.id, [])) for t in tasks]

    async def list_for_assignee(self, user: User) -> list[AssignedTaskRead]:
        """Tasks the user is assigned to, each with its project name."""
        tasks = await self.task_repo.list_for_assignee(user.id)
        task_ids = [t.id for t in tasks]
        assignees = await self.task_repo.list_assignees_for(task_ids)
        project_names = await self.project_repo.get_names(list({t.project_id for t in tasks}))
        return [
            AssignedTaskRead.model_validate(
                to_task_read(t, assignees.get(t.id, [])).model_dump()
                | {"project_name": project_names.get(t.project_id)}
            )
            for t in tasks
        ]

    async def _resolve_assignees(self, user_ids: Sequence[UUID]) -> list[User]:
        """Deduplicate ids in first-seen order and drop those with no user."""
        requested = list(dict.fromkeys(user_ids))
        found = {user.id: user for user in await self.user_repo.get_many(requested)}

        assignees = []
        for user_id in requested:
            user = found.get(user_id)
            if user is None:
                logger.warning("Skipping unknown assignee", user_id=str(user_id))
                continue
            assignees.append(user)
        return assignees

    async def _commit(self, task_id: UUID) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Task commit failed", task_id=str(task_id), error=str(e))
            raise StorageError("Failed to save task") from e

    async def _send_emails(
        self,
        send: Callable[..., bool],
        recipients: Sequence[tuple[UUID, str]],
        task_id: UUID,
        *args: Any,
    ) -> None:
        """Send one email per recipient concurrently; each failure is logged and skipped."""

        async def deliver(user_id: UUID, email: str) -> None:
            try:
                sent = await asyncio.to_thread(send, email, *args)
                if not sent:
                    raise NotificationError("Email provider rejected the message")
            except Exception as e:
                logger.warning(
                    "Task email not delivered",
                    task_id=str(task_id),
                    user_id=str(user_id),
                    error=str(e),
                )

        await asyncio.gather(*(deliver(user_id, email) for user_id, email in recipients))

    async def _publish(self, project_id: UUID, event: str, payload: dict[str, Any]) -> None:
        try:
            await self.hub.publish(project_channel(project_id), event, payload)
        except Exception as e:
            logger.warning(
                "Real-time publish failed",
                project_id=str(project_id),
                event_name=event,
                error=str(e),
            )
