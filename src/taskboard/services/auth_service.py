"""Authentication service - registration, login and bearer-token resolution."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.taskboard.models import User, UserRole
from src.taskboard.repositories import UserRepository
from src.taskboard.schemas.auth import RegisterRequest, TokenResponse

logger = get_logger(__name__)


class AuthService:
    """Issues and validates access tokens for users in the identity store."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def register(self, data: RegisterRequest) -> User:
        """Create a team_member account.

        Raises:
            ConflictError: If the email is already registered
        """
        email = data.email.lower()
        if await self.user_repo.exists_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            name=data.name,
            email=email,
            hashed_password=hash_password(data.password),
            role=UserRole.TEAM_MEMBER.value,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Concurrent registration won the unique index
            await self.session.rollback()
            raise ConflictError("Email already registered") from e

        logger.info("User registered", user_id=str(user.id))
        return user

    async def authenticate(self, email: str, password: str) -> TokenResponse:
        """Verify credentials and issue an access token.

        Raises:
            AuthenticationError: On unknown email or wrong password
        """
        user = await self.user_repo.get_by_email(email.lower())

        # Always verify so response timing does not reveal whether the email exists
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            logger.info("Login failed")
            raise AuthenticationError("Invalid email or password")

        logger.info("Login succeeded", user_id=str(user.id))
        return TokenResponse(access_token=create_access_token(user.id, user.role))

    async def resolve_token(self, token: str | None) -> User:
        """Resolve a bearer token to an existing user.

        The token must verify, be an access token, carry a UUID subject, and
        that user must still exist.

        Raises:
            AuthenticationError: On any of the above failing
        """
        if not token:
            raise AuthenticationError("Not authenticated")

        payload = decode_token(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            raise AuthenticationError("Invalid or expired token")

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as e:
            raise AuthenticationError("Invalid token subject") from e

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return user

    @staticmethod
    def authorize(user: User, roles: Iterable[UserRole | str]) -> None:
        """Check role membership. An empty capability set admits any user.

        Raises:
            AuthorizationError: If the user's role is not in ``roles``
        """
        allowed = {role.value if isinstance(role, UserRole) else role for role in roles}
        if allowed and user.role not in allowed:
            logger.info("Role check denied", user_id=str(user.id), role=user.role)
            raise AuthorizationError("Insufficient permissions")
