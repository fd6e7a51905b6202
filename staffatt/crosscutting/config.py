"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Expose token, store and logging parameters to the composition root

Collaborators:
  - api/main.py: reads settings for CORS, pool init and startup validation
  - container.py: picks store backend, lock timeout, token issuer params
  - crosscutting/logger.py: log level and format

Constraints:
  - No business logic - pure configuration
  - Missing JWT secret/issuer/audience is NOT rejected here; the token issuer
    raises ConfigurationError when it is built (startup, via lifespan)

Notes:
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ACCESS_TOKEN_TTL_MINUTES = 30


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string (required for store_backend=postgres)
        store_backend: "postgres" or "memory"
        app_env: Application environment (local/development/test/production)
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level for the service logger
        log_json: Emit JSON log lines (default: True)
        jwt_secret: HMAC secret for signing access tokens
        jwt_issuer: "iss" claim written and enforced on every token
        jwt_audience: "aud" claim written and enforced on every token
        jwt_access_ttl_minutes: Access token TTL, fixed at 30 minutes
        password_min_length: Minimum length for new admin passwords
        store_timeout_seconds: Upper bound for waiting on a per-staff lock
        db_pool_timeout_seconds: Upper bound for checking out a pooled connection
        db_statement_timeout_ms: statement_timeout applied to every connection
    """

    # Storage
    database_url: str = ""
    store_backend: str = "postgres"

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Security - JWT
    jwt_secret: str = ""
    jwt_issuer: str = ""
    jwt_audience: str = ""
    jwt_access_ttl_minutes: int = ACCESS_TOKEN_TTL_MINUTES

    # Security - Password policy
    password_min_length: int = 8

    # Concurrency / timeouts
    store_timeout_seconds: float = 5.0

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
    db_statement_timeout_ms: int = 5000

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "Admin#1234"
    dev_seed_admin_display_name: str = "Local Administrator"

    @field_validator("store_backend")
    @classmethod
    def store_backend_valid(cls, v: str) -> str:
        backend = (v or "postgres").strip().lower()
        if backend not in {"postgres", "memory"}:
            raise ValueError("store_backend must be postgres or memory")
        return backend

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def access_ttl_is_fixed(cls, v: int) -> int:
        if v != ACCESS_TOKEN_TTL_MINUTES:
            raise ValueError(
                f"jwt_access_ttl_minutes is fixed at {ACCESS_TOKEN_TTL_MINUTES}"
            )
        return v

    @field_validator("password_min_length")
    @classmethod
    def password_min_length_positive(cls, v: int) -> int:
        if v < 6:
            raise ValueError("password_min_length must be >= 6")
        return v

    @field_validator("store_timeout_seconds", "db_pool_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be greater than 0")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_store_requirements(self):
        if self.store_backend == "postgres" and not self.database_url.strip():
            raise ValueError("DATABASE_URL is required when STORE_BACKEND=postgres")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if jwt_secret and len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.store_backend != "postgres":
            raise ValueError("STORE_BACKEND must be postgres in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
