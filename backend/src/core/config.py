"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Only accepted when environment == "development"
DEV_JWT_SECRET = "aurastream-development-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Runtime environment - drives the session cookie `secure` flag
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        validation_alias="NODE_ENV",
    )

    # Session tokens
    jwt_secret: str = Field(default=DEV_JWT_SECRET, validation_alias="JWT_SECRET")
    session_cookie_name: str = Field(
        default="jwt-aurastream",
        validation_alias="SESSION_COOKIE_NAME",
    )

    # Movie catalog (TMDB) used by search
    tmdb_api_key: str = Field(default="", validation_alias="TMDB_API_KEY")
    tmdb_base_url: str = Field(
        default="https://api.themoviedb.org/3",
        validation_alias="TMDB_BASE_URL",
    )
    tmdb_timeout: float = Field(default=10.0, validation_alias="TMDB_TIMEOUT")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """
        Prevent the development JWT secret from being used outside development.

        Anyone who knows the development secret can mint session cookies for any
        account, so it must never sign tokens in a deployed environment.
        """
        if self.environment != "development" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError(
                f"JWT_SECRET must be set when NODE_ENV is '{self.environment}'. "
                f"The development secret is only accepted in development.",
            )
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET cannot be empty")
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def cookie_secure(self) -> bool:
        """Session cookies are only sent over HTTPS outside development."""
        return self.environment != "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
