"""
Testing fixtures.
Provides an async engine, session and AppStore over SQLite in-memory.
"""
import os
from typing import AsyncGenerator, Callable, Dict, List, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set environment variables for testing BEFORE importing anything
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_FORMAT"] = "text"

from calapps.core.database import Base
from calapps.models import App
from calapps.services.app_store import AppStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_engine() -> AsyncEngine:
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        hide_parameters=True,
        echo=False,
    )


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with the schema created."""
    engine = make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def store(test_engine) -> AppStore:
    return AppStore(test_engine)


class RecordingStore:
    """Passes calls through to a real store and records create attempts."""

    def __init__(self, inner: AppStore):
        self.inner = inner
        self.created: List[str] = []
        self.released = 0

    async def find(self, slug: str) -> Optional[App]:
        return await self.inner.find(slug)

    async def create(self, app: App) -> App:
        self.created.append(app.slug)
        return await self.inner.create(app)

    async def release(self) -> None:
        self.released += 1


@pytest.fixture
def recording_store(store) -> RecordingStore:
    return RecordingStore(store)


@pytest.fixture
def make_env() -> Callable[..., Callable[[str], Optional[str]]]:
    """Build an environment lookup from keyword values."""

    def _make(**values: str) -> Callable[[str], Optional[str]]:
        env: Dict[str, str] = dict(values)
        return env.get

    return _make


@pytest.fixture
async def existing_zoho_app(test_db: AsyncSession) -> App:
    """A Zoho Calendar row seeded by some other process."""
    app = App(
        slug="zoho-calendar",
        dir_name="zohocalendar",
        categories=["calendar"],
        keys={"client_id": "stored-client-id", "client_secret": "stored-client-secret"},
        enabled=False,
    )
    test_db.add(app)
    await test_db.commit()
    return app


@pytest.fixture
async def bare_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database without any tables."""
    engine = make_engine()
    yield engine
    await engine.dispose()
