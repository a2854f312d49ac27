"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Path constants - calculated once at module load
PACKAGE_ROOT = Path(__file__).parent.resolve()
TEMPLATES_DIR = PACKAGE_ROOT / "templates"


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime.

    Datetimes stay naive so they round-trip through SQLite, which doesn't
    store tz info.
    """
    return datetime.now(UTC).replace(tzinfo=None)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./flashdeck.db"

    # Identity (tokens are issued by the external auth provider)
    SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str | None = None
    JWT_AUDIENCE: str | None = None
    SESSION_COOKIE_NAME: str = "__session"
    SIGN_IN_URL: str = "/sign-in"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Flashdeck"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("SIGN_IN_URL", mode="after")
    @classmethod
    def strip_sign_in_url(cls, value: str) -> str:
        """Strip whitespace from the sign-in URL."""
        return value.strip()

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Require a token secret outside development and test."""
        if self.ENVIRONMENT not in ("development", "test") and not self.SECRET_KEY:
            msg = f"SECRET_KEY is required when ENVIRONMENT is {self.ENVIRONMENT!r}"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
