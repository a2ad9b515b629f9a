"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for application settings.
- Load and validate environment variables from `.env` or OS environment.

Covers:
- Database connection (SQLite locally, PostgreSQL in deployment)
- Admin token signing (JWT secret, algorithm, lifetime)
- Optional bootstrap admin account created at startup
- API behaviour knobs (history limit, admin page size, CORS origins)

This module does NOT:
- Execute any DB connections.
- Make external API calls.
- Modify runtime settings.
"""

from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: <root>/findiag/core/config.py
# .env should be at: <root>/.env
_CONFIG_DIR = Path(__file__).parent
_PROJECT_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _PROJECT_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: use relative path (pydantic will look in CWD)
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    Settings container for the diagnosis service.

    Every field can be overridden through an environment variable of the
    same name, e.g. `DATABASE_URL=postgresql://... uvicorn findiag.main:app`.
    """

    # Database
    DATABASE_URL: str = Field(
        "sqlite:///./findiag.db",
        description="SQLAlchemy connection URL (postgresql:// is rewritten to use psycopg v3)",
    )
    AUTO_CREATE_TABLES: bool = Field(
        True,
        description="Create missing tables on application startup",
    )

    # Admin authentication
    JWT_SECRET_KEY: str = Field(
        "change-me",
        description="Secret used to sign admin access tokens",
    )
    JWT_ALGORITHM: str = Field(
        "HS256",
        description="Signing algorithm for admin access tokens",
    )
    JWT_EXPIRE_MINUTES: int = Field(
        60,
        description="Lifetime of an admin access token (minutes)",
    )
    BOOTSTRAP_ADMIN_USERNAME: str = Field(
        "",
        description="If set together with BOOTSTRAP_ADMIN_PASSWORD, this admin is created at startup when missing",
    )
    BOOTSTRAP_ADMIN_PASSWORD: str = Field(
        "",
        description="Password for the bootstrap admin account",
    )

    # API behaviour
    HISTORY_LIMIT: int = Field(
        20,
        description="Number of diagnoses returned by the public history endpoint",
    )
    ADMIN_PAGE_SIZE_MAX: int = Field(
        100,
        description="Upper bound for page_size on admin listing endpoints",
    )
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins for /api/* routes",
    )

    # Logging
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("JWT_SECRET_KEY", "BOOTSTRAP_ADMIN_USERNAME", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> str:
        """Strip whitespace from secrets and names copied into .env files."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton: settings imported anywhere will reference same object.
settings = Settings()
