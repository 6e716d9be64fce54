"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./nanobio.db"

    # Record store backend
    STORE_BACKEND: Literal["sql", "postgrest"] = "sql"
    STORE_TIMEOUT_SECONDS: float = 30.0

    # Supabase / PostgREST
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_KEY: str | None = None

    # Auth
    SUPABASE_JWT_SECRET: str = ""
    JWT_AUDIENCE: str = "authenticated"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Nanobio API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("SUPABASE_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        """Normalise the Supabase URL so paths can be appended."""
        return value.rstrip("/") if value else value

    @model_validator(mode="after")
    def validate_store_backend(self) -> "Settings":
        """Validate record store configuration."""
        if self.STORE_BACKEND == "postgrest" and not self.SUPABASE_URL:
            msg = "SUPABASE_URL is required when STORE_BACKEND is 'postgrest'"
            raise ValueError(msg)
        if self.STORE_BACKEND == "postgrest" and not self.SUPABASE_SERVICE_KEY:
            msg = "SUPABASE_SERVICE_KEY is required when STORE_BACKEND is 'postgrest'"
            raise ValueError(msg)
        return self


_LOG_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
    "production": logging.INFO,
}


def configure_logging(environment: str = "development") -> None:
    """
    Route structlog through stdlib logging.

    Production emits one JSON object per line; other environments get the
    coloured console renderer. Tests only see warnings and above.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_LOG_LEVELS.get(environment, logging.INFO),
    )

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
