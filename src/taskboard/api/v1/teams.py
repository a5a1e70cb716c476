"""Team endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentUser, ManagerUser, TeamServiceDep
from src.taskboard.schemas.team import TeamCreate, TeamDetail, TeamListItem, TeamRead

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post(
    "",
    response_model=TeamRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Team created; unknown member ids are skipped"},
        401: {"description": "Not authenticated"},
        403: {"description": "Requires admin or project_manager role"},
    },
)
async def create_team(data: TeamCreate, user: ManagerUser, service: TeamServiceDep) -> TeamRead:
    return await service.create(data, user)


@router.get(
    "",
    response_model=list[TeamListItem],
    responses={401: {"description": "Not authenticated"}},
)
async def list_teams(user: CurrentUser, service: TeamServiceDep) -> list[TeamListItem]:
    """Teams the caller created or belongs to."""
    return await service.list_for_user(user)


@router.get(
    "/{team_id}",
    response_model=TeamDetail,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Team not found"},
    },
)
async def get_team(team_id: UUID, user: CurrentUser, service: TeamServiceDep) -> TeamDetail:
    return await service.get(team_id)
