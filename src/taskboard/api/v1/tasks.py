"""Task endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import ActivityServiceDep, CurrentUser, TaskServiceDep
from src.taskboard.schemas.activity import ActivityRead
from src.taskboard.schemas.task import AssignedTaskRead, TaskCreate, TaskRead, TaskStatusUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])

_TASK_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Write launch checklist",
    "description": None,
    "status": "todo",
    "priority": "high",
    "due_date": "2024-02-01",
    "project_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
    "assigned_users": [{"id": "9b2f9c1e-1c9b-4f0c-8a3e-2f1d5b7c4e21", "name": "Ada Lovelace"}],
    "created_at": "2024-01-15T10:30:00Z",
    "updated_at": "2024-01-15T10:30:00Z",
}


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Task created in todo; assignees notified",
            "content": {"application/json": {"example": _TASK_EXAMPLE}},
        },
        401: {"description": "Not authenticated"},
        404: {"description": "Project not found"},
    },
)
async def create_task(data: TaskCreate, user: CurrentUser, service: TaskServiceDep) -> TaskRead:
    """Create a task.

    The task always starts in ``todo``. Unknown assignee ids are skipped.
    Subscribers of the project channel receive ``task-created``.
    """
    return await service.create(data, user)


# Registered before /{task_id} so the literal paths win
@router.get(
    "/my-tasks",
    response_model=list[AssignedTaskRead],
    responses={401: {"description": "Not authenticated"}},
)
async def list_my_tasks(user: CurrentUser, service: TaskServiceDep) -> list[AssignedTaskRead]:
    return await service.list_for_assignee(user)


@router.get(
    "/activity/{project_id}",
    response_model=list[ActivityRead],
    responses={
        200: {
            "description": "Most recent task activity for the project, newest first",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "1b4e28ba-2fa1-11d2-883f-0016d3cca427",
                            "action": "Task Status Updated",
                            "entity_type": "task",
                            "entity_id": "550e8400-e29b-41d4-a716-446655440000",
                            "project_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                            "details": {
                                "oldStatus": "todo",
                                "newStatus": "in_progress",
                                "taskTitle": "Write launch checklist",
                            },
                            "user": {
                                "id": "9b2f9c1e-1c9b-4f0c-8a3e-2f1d5b7c4e21",
                                "name": "Ada Lovelace",
                            },
                            "created_at": "2024-01-15T11:00:00Z",
                        }
                    ]
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def list_project_activity(
    project_id: UUID, user: CurrentUser, service: ActivityServiceDep
) -> list[ActivityRead]:
    return await service.list_task_activity(project_id)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Task not found"},
    },
)
async def get_task(task_id: UUID, user: CurrentUser, service: TaskServiceDep) -> TaskRead:
    return await service.get(task_id)


@router.patch(
    "/{task_id}/status",
    response_model=TaskRead,
    responses={
        200: {
            "description": "Status changed; assignees notified",
            "content": {"application/json": {"example": _TASK_EXAMPLE | {"status": "in_progress"}}},
        },
        400: {"description": "Invalid status"},
        401: {"description": "Not authenticated"},
        404: {"description": "Task not found"},
    },
)
async def update_task_status(
    task_id: UUID, data: TaskStatusUpdate, user: CurrentUser, service: TaskServiceDep
) -> TaskRead:
    """Move a task to any status.

    Subscribers of the project channel receive ``task-updated``.
    """
    return await service.update_status(task_id, data.status, user)
