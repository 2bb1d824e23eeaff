"""
RecipeBook Backend: Database Engine & Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory and schema bootstrap for the
       sql storage backend.
How:   `build_engine()` creates an async engine from DATABASE_URL;
       `build_session_factory()` wraps it in an async_sessionmaker used by
       the SQL repositories; `init_db()` creates missing tables at startup.
Who:   `recipebook.dependencies` (wiring), `recipebook.main` (lifespan) and
       the SQL repository tests.
When:  Only when STORAGE_BACKEND=sql. The memory backend never touches this
       module's engine helpers.

Supported URLs:
    sqlite+aiosqlite:///./recipebook.db        (default, single file)
    postgresql+asyncpg://user:pw@host/dbname   (requires the asyncpg extra)
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from recipebook.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model in `recipebook.models` registers its table on this
    metadata, which `init_db()` uses to create the schema.
    """
    pass


def build_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    SQL statements are echoed only when LOG_LEVEL=DEBUG.
    pool_pre_ping validates pooled connections before use (e.g. after a
    database restart).
    """
    url = database_url or settings.database_url
    return create_async_engine(
        url,
        pool_pre_ping=True,
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory handed to the SQL repositories.

    expire_on_commit=False keeps loaded attributes readable after commit,
    which the repositories rely on when converting rows to schemas.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Create every table registered on Base.metadata that does not exist yet.

    Existing tables are left untouched; there is no migration step.
    """
    # Register the models on Base.metadata
    from recipebook.models import category, ingredient, recipe  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
