"""Authentication endpoints - registration and login."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.taskboard.api.dependencies import AuthServiceDep
from src.taskboard.core.rate_limit import limiter
from src.taskboard.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from src.taskboard.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created with the team_member role",
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "role": "team_member",
                        "created_at": "2024-01-15T10:30:00Z",
                    }
                }
            },
        },
        400: {"description": "Invalid body or weak password"},
        409: {"description": "Email already registered"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit("3/minute")
async def register(request: Request, data: RegisterRequest, service: AuthServiceDep) -> UserRead:
    """Create an account. New users always start as team members."""
    user = await service.register(data)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit("5/minute")
async def login(request: Request, data: LoginRequest, service: AuthServiceDep) -> TokenResponse:
    """Exchange email and password for a bearer access token."""
    return await service.authenticate(data.email, data.password)
