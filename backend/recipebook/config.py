"""
RecipeBook Backend: Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    PORT             Listening port for `python -m recipebook` (default 3000)
    HOST             Bind address (default 0.0.0.0)
    LOG_LEVEL        DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    STORAGE_BACKEND  memory | sql (default memory)
    DATABASE_URL     Async SQLAlchemy URL, only read by the sql backend
    CORS_ORIGINS     Comma-separated list of allowed origins
"""

from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development: the
    in-memory store, port 3000 and INFO logging.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # ── Storage ───────────────────────────────────────────────────────────
    # memory: volatile per-process lists, reset on restart
    # sql:    async SQLAlchemy against DATABASE_URL
    storage_backend: Literal["memory", "sql"] = Field(default="memory")

    # Format: <dialect>+<async driver>://...
    # e.g. sqlite+aiosqlite:///./recipebook.db or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./recipebook.db",
        description="Async SQLAlchemy connection URL for the sql storage backend",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
