"""Authentication and authorization dependencies.

Every protected route passes through ``get_current_user`` (token -> user)
and, where a capability set applies, ``require_roles`` (role check).
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Header

from src.taskboard.api.dependencies.services import AuthServiceDep
from src.taskboard.core.exceptions import AuthenticationError
from src.taskboard.core.logging import bind_user_context
from src.taskboard.models import User, UserRole
from src.taskboard.services import AuthService


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationError("Missing authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Invalid authorization header")
    return token.strip()


async def get_current_user(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the bearer token to an existing user and bind it to the log context."""
    user = await auth_service.resolve_token(extract_bearer_token(authorization))
    bind_user_context(user.id, user.role, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable[[User], Awaitable[User]]:
    """Build a dependency admitting only users whose role is in ``roles``.

    Raises AuthorizationError (403) otherwise.
    """

    async def dependency(user: CurrentUser) -> User:
        AuthService.authorize(user, roles)
        return user

    return dependency


AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
ManagerUser = Annotated[
    User, Depends(require_roles(UserRole.ADMIN, UserRole.PROJECT_MANAGER))
]
