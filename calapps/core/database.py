"""
Database configuration and session management.

Uses SQLAlchemy 2.0 async engine with asyncpg driver for PostgreSQL and
aiosqlite for local/test databases. Engines are built on demand so the
caller owns their lifetime and releases them with ``engine.dispose()``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from calapps.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


# Naming convention for constraints (Alembic auto-generation)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _build_connect_args(config: Settings, url: str) -> dict:
    """
    Build connection arguments for asyncpg.

    Handles SSL configuration for production environments.
    SQLite databases don't need special connect_args.
    """
    if url.startswith("sqlite"):
        return {}

    connect_args: dict = {"timeout": config.database_pool_timeout}

    if config.is_production or config.database_ssl_mode in ("require", "verify-ca", "verify-full"):
        # asyncpg uses 'ssl' parameter
        if config.database_ssl_mode == "disable":
            connect_args["ssl"] = False
        else:
            connect_args["ssl"] = "require"

    # PgBouncer compatibility: disable prepared statement cache
    connect_args["statement_cache_size"] = 0

    return connect_args


def build_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine for the app store database.

    Bound parameters are hidden from error messages since rows may carry
    integration secrets.
    """
    config = config or default_settings
    url = config.database_url
    logger.debug(f"Creating database engine (sqlite={url.startswith('sqlite')})")
    return create_async_engine(
        url,
        echo=config.should_echo_sql,
        pool_pre_ping=True,
        poolclass=NullPool,  # Use NullPool for PgBouncer compatibility
        hide_parameters=True,
        connect_args=_build_connect_args(config, url),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Async session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for a unit of work.

    Usage:
        async with session_scope(factory) as db:
            db.add(record)
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
