from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRET = "change-this-to-a-secure-random-string"


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Taskboard API"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False
    app_url: str = "http://localhost:3000"  # SPA origin, linked from emails
    cors_origins: list[str] = ["http://localhost:3000"]
    shutdown_grace_period: int = 30

    # Persistence
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: Literal["disable", "prefer", "require", "verify-ca", "verify-full"] = "prefer"
    database_statement_cache_size: int = 100

    # Tokens and password hashing
    jwt_secret_key: str = Field(min_length=32)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Notifications; with no Resend key emails are logged instead of sent
    resend_api_key: str | None = None
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10

    activity_feed_limit: int = Field(default=50, ge=1)
    metrics_api_key: str | None = None
    log_user_emails: bool = False

    @field_validator("jwt_secret_key")
    @classmethod
    def reject_placeholder_secret(cls, v: str) -> str:
        if v == PLACEHOLDER_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY is still the example value. "
                "Generate one with: openssl rand -hex 32"
            )
        return v

    @field_validator("cors_origins")
    @classmethod
    def reject_wildcard_origin(cls, v: list[str]) -> list[str]:
        if "*" in v:
            raise ValueError("CORS_ORIGINS cannot contain '*'; list the allowed origins")
        return v

    @property
    def sync_database_url(self) -> str:
        """Same database through the synchronous driver, for Alembic."""
        return self.database_url.replace("+asyncpg", "").replace("+aiosqlite", "")


@lru_cache
def get_settings() -> Settings:
    return Settings()
