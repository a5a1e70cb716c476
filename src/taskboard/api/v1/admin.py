"""Admin endpoints - global listings, role changes, deletes and analytics.

Every route requires the admin role.
"""

from uuid import UUID

from fastapi import APIRouter

from src.taskboard.api.dependencies import (
    AdminServiceDep,
    AdminUser,
    ProjectServiceDep,
    TaskServiceDep,
    TeamServiceDep,
)
from src.taskboard.schemas.admin import AnalyticsResponse, MessageResponse
from src.taskboard.schemas.project import ProjectListItem
from src.taskboard.schemas.task import TaskRead
from src.taskboard.schemas.team import TeamListItem
from src.taskboard.schemas.user import RoleUpdate, UserRead

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Requires admin role"},
    },
)

_NOT_FOUND = {404: {"description": "Not found"}}


@router.get("/users", response_model=list[UserRead])
async def list_users(admin: AdminUser, service: AdminServiceDep) -> list[UserRead]:
    return [UserRead.model_validate(u) for u in await service.list_users()]


@router.patch("/users/{user_id}/role", response_model=UserRead, responses=_NOT_FOUND)
async def update_user_role(
    user_id: UUID, data: RoleUpdate, admin: AdminUser, service: AdminServiceDep
) -> UserRead:
    """Change a user's role. Takes effect on that user's next request."""
    return UserRead.model_validate(await service.update_role(user_id, data.role))


@router.delete("/users/{user_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_user(user_id: UUID, admin: AdminUser, service: AdminServiceDep) -> MessageResponse:
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/teams", response_model=list[TeamListItem])
async def list_teams(admin: AdminUser, service: TeamServiceDep) -> list[TeamListItem]:
    return await service.list_all()


@router.delete("/teams/{team_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_team(team_id: UUID, admin: AdminUser, service: AdminServiceDep) -> MessageResponse:
    await service.delete_team(team_id)
    return MessageResponse(message="Team deleted successfully")


@router.get("/projects", response_model=list[ProjectListItem])
async def list_projects(admin: AdminUser, service: ProjectServiceDep) -> list[ProjectListItem]:
    return await service.list_all()


@router.delete("/projects/{project_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_project(
    project_id: UUID, admin: AdminUser, service: AdminServiceDep
) -> MessageResponse:
    await service.delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(admin: AdminUser, service: TaskServiceDep) -> list[TaskRead]:
    return await service.list_all()


@router.delete("/tasks/{task_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_task(task_id: UUID, admin: AdminUser, service: AdminServiceDep) -> MessageResponse:
    await service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    responses={
        200: {
            "description": "Global counts",
            "content": {
                "application/json": {
                    "example": {
                        "total_users": 12,
                        "total_teams": 3,
                        "total_projects": 5,
                        "total_tasks": 48,
                        "tasks_by_status": {"todo": 20, "in_progress": 16, "completed": 12},
                        "users_by_role": {"team_member": 9, "project_manager": 2, "admin": 1},
                    }
                }
            },
        }
    },
)
async def get_analytics(admin: AdminUser, service: AdminServiceDep) -> AnalyticsResponse:
    return await service.analytics()
