"""
Configuration Store backed by the ``App`` table.

``ConfigurationStore`` is the interface the seed check depends on;
``AppStore`` implements it over an async SQLAlchemy engine. Each operation
runs in its own session so a failed write never poisons a later read.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Protocol

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from calapps.core.config import Settings
from calapps.core.database import build_engine, build_session_factory, session_scope
from calapps.core.exceptions import StoreError
from calapps.models.app import App

logger = logging.getLogger(__name__)


class ConfigurationStore(Protocol):
    """Lookup and insert of app store records keyed by slug."""

    async def find(self, slug: str) -> Optional[App]: ...

    async def create(self, app: App) -> App: ...

    async def release(self) -> None: ...


def _driver_message(exc: SQLAlchemyError) -> str:
    # DBAPI error text only; the wrapped statement may embed bound values
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else exc.__class__.__name__


class AppStore:
    """SQLAlchemy implementation of ``ConfigurationStore``."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)
        self._released = False

    async def find(self, slug: str) -> Optional[App]:
        async with self._session_factory() as session:
            return await session.get(App, slug)

    async def create(self, app: App) -> App:
        """
        Insert ``app``.

        Raises:
            StoreError: on constraint violations (``STORE_CONSTRAINT``),
                connectivity failures (``STORE_UNAVAILABLE``) or any other
                database error (``STORE_ERROR``).
        """
        details = {"slug": app.slug}
        try:
            async with session_scope(self._session_factory) as session:
                session.add(app)
        except IntegrityError as exc:
            raise StoreError(
                _driver_message(exc), "create", code="STORE_CONSTRAINT", details=details
            ) from exc
        except OperationalError as exc:
            raise StoreError(
                _driver_message(exc), "create", code="STORE_UNAVAILABLE", details=details
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError(_driver_message(exc), "create", details=details) from exc

        logger.info(f"Created app record {app.slug}")
        return app

    async def release(self) -> None:
        if self._released:
            return
        self._released = True
        await self.engine.dispose()
        logger.debug("Database engine disposed")


@asynccontextmanager
async def open_app_store(config: Optional[Settings] = None) -> AsyncGenerator[AppStore, None]:
    """
    Open an ``AppStore`` and release it on every exit path.

    Usage:
        async with open_app_store() as store:
            app = await store.find("zoho-calendar")
    """
    store = AppStore(build_engine(config))
    try:
        yield store
    finally:
        await store.release()
