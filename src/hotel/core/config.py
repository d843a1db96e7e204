from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Grand Hotel Chat"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    log_level: str = "INFO"
    enable_openapi: bool = True

    # Security
    log_usernames: bool = False  # Only bind usernames to log context when enabled
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_migrations_url: str | None = None
    database_pool_size: int = 5
    database_max_overflow: int = 10

    auto_migrate: bool = False  # Run Alembic upgrade to head on startup

    # Shutdown
    shutdown_grace_period: int = 30

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    session_expire_hours: int = 24 * 7
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Visits
    # When enabled the API only lets the room's host (or an admin) answer visit requests.
    enforce_host_approval: bool = True

    # Chat
    hall_room_id: str = "hall"
    max_message_length: int = 4000
    max_avatar_bytes: int = 2 * 1024 * 1024

    # Admin
    active_user_window_minutes: int = 5
    seed_admin_username: str | None = None
    seed_admin_password: str | None = None
    seed_admin_display_name: str = "Administrator"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Redis (optional - app works without it)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10

    # Rate limiting
    login_rate_limit: str = "5/minute"
    register_rate_limit: str = "3/minute"
    inbox_rate_limit: str = "5/hour"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("hall_room_id")
    @classmethod
    def validate_hall_room_id(cls, v: str) -> str:
        if v.startswith("room_"):
            raise ValueError("HALL_ROOM_ID must not use the 'room_' prefix reserved for rooms")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
