"""Application configuration using pydantic-settings."""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: str = "INFO"

    # SMTP transport
    email_host: str = "localhost"
    email_port: int = Field(default=587, ge=1, le=65535)
    email_secure: bool = False  # implicit TLS (port 465); otherwise STARTTLS when offered
    email_user: str | None = None
    email_password: str | None = None
    email_timeout: float = Field(default=30.0, gt=0)

    # Used when the submitted location has no dedicated recipient
    fallback_email: str | None = None

    # Frontend URL for CORS in production
    frontend_url: str = "http://localhost:3000"

    # Base URL the CLI client submits to
    api_url: str = "http://localhost:8000"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == Environment.DEVELOPMENT

    @property
    def email_configured(self) -> bool:
        """Check if sender credentials are present."""
        return bool(self.email_user and self.email_password)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
