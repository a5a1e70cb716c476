"""Security utilities - crypto, validators and headers.

Re-exports all security-related functions for convenience.
"""

from src.taskboard.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.taskboard.core.security.headers import SecurityHeadersMiddleware, csp_for_environment
from src.taskboard.core.security.validators import validate_password_strength

__all__ = [
    # Crypto
    "ACCESS_TOKEN_TYPE",
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
    "csp_for_environment",
    # Validators
    "validate_password_strength",
]
