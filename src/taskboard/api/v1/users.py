"""User profile and directory endpoints."""

from fastapi import APIRouter

from src.taskboard.api.dependencies import CurrentUser, UserServiceDep
from src.taskboard.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/profile",
    response_model=UserRead,
    responses={
        200: {
            "description": "Current user profile",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "role": "project_manager",
                        "created_at": "2024-01-15T10:30:00Z",
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_profile(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch(
    "/me",
    response_model=UserRead,
    responses={
        401: {"description": "Not authenticated"},
        400: {"description": "Validation error"},
    },
)
async def update_current_user(
    data: UserUpdate,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> UserRead:
    """Update own name and/or password."""
    updated_user = await service.update(current_user, data)
    return UserRead.model_validate(updated_user)


@router.get(
    "",
    response_model=list[UserRead],
    responses={401: {"description": "Not authenticated"}},
)
async def list_users(current_user: CurrentUser, service: UserServiceDep) -> list[UserRead]:
    """User directory, used when picking team members and assignees."""
    return [UserRead.model_validate(u) for u in await service.list_directory()]
