"""
Application configuration module.

Provides centralized, environment-safe configuration management
with sensible defaults for local development and testing.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables
    (e.g. ``SECRET_KEY``, ``DATABASE_URL``) or a local ``.env`` file.

    Attributes:
        APP_NAME: Application name.
        APP_VERSION: Application version.
        ENVIRONMENT: Deployment environment (development, testing, production).
        DEBUG: Debug mode flag.
        SECRET_KEY: Signing key for access tokens.
        DATABASE_URL: SQLAlchemy database URL.
        LOG_LEVEL: Logging level.
        LOG_FORMAT: Log renderer, ``json`` or ``console``.
    """

    # Application metadata
    APP_NAME: str = Field(default="Saddle OMS API")
    APP_VERSION: str = Field(default="1.0.0")
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Token configuration
    SECRET_KEY: str = Field(default="change-me-in-production-use-at-least-32-chars")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1)
    ISSUER: str = Field(default="saddle-oms")
    AUDIENCE: str = Field(default="saddle-oms-clients")

    # Database configuration
    DATABASE_URL: str = Field(default="sqlite:///./oms.db")
    DB_CREATE_TABLES: bool = Field(default=True)

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    # CORS configuration
    CORS_ORIGINS: str = Field(default="http://localhost:3000")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # Order listing
    ORDERS_DEFAULT_PAGE_SIZE: int = Field(default=50, ge=1)
    ORDERS_MAX_PAGE_SIZE: int = Field(default=100, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origins_list(self) -> List[str]:
        """Comma separated CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance.
    """
    loaded = Settings()
    logger.info(
        "Settings loaded: app_name=%s, environment=%s, debug=%s",
        loaded.APP_NAME,
        loaded.ENVIRONMENT,
        loaded.DEBUG,
    )
    return loaded


settings = get_settings()
