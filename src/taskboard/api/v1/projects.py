"""Project endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentUser, ManagerUser, ProjectServiceDep
from src.taskboard.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectRead,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Project created",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Website relaunch",
                        "description": "Q3 marketing site",
                        "status": "active",
                        "team_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                        "created_at": "2024-01-15T10:30:00Z",
                        "updated_at": "2024-01-15T10:30:00Z",
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
        403: {"description": "Requires admin or project_manager role"},
        404: {"description": "Team not found"},
    },
)
async def create_project(
    data: ProjectCreate, user: ManagerUser, service: ProjectServiceDep
) -> ProjectRead:
    return await service.create(data, user)


@router.get(
    "",
    response_model=list[ProjectListItem],
    responses={401: {"description": "Not authenticated"}},
)
async def list_projects(user: CurrentUser, service: ProjectServiceDep) -> list[ProjectListItem]:
    """Projects of the teams the caller created or belongs to."""
    return await service.list_for_user(user)


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID, user: CurrentUser, service: ProjectServiceDep
) -> ProjectDetail:
    """Project with its team members and tasks."""
    return await service.get(project_id)
