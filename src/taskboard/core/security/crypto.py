"""Argon2id password hashes and signed JWT access tokens."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from src.taskboard.core.config import get_settings

ACCESS_TOKEN_TYPE = "access"


@lru_cache
def _hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


# Login checks unknown emails against this so the timing matches a real user
DUMMY_PASSWORD_HASH = _hasher().hash("taskboard-timing-equaliser")


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """True only when ``password`` matches; malformed hashes count as a mismatch."""
    try:
        return _hasher().verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(
    subject: str | UUID,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign an access token for ``subject``.

    Claims: ``sub`` (user id), ``role`` (informational; authorization reads the
    stored role), ``type`` and ``exp``. Lifetime defaults to
    ``ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(subject),
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(UTC) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)  # type: ignore[no-any-return]


def decode_token(token: str) -> dict[str, Any] | None:
    """Verified claims of ``token``, or None if it is malformed, forged or expired."""
    settings = get_settings()
    try:
        claims: dict[str, Any] = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
    return claims
