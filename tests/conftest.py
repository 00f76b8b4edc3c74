import os

# must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("INTERNAL_ADMIN_KEY", "test-internal")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Import Base + all models so metadata is complete
from app.models.base import Base
from app.models.recall import SafetyRecall  # noqa: F401
from app.models.recall_alias import SafetyRecallAlias  # noqa: F401
from app.models.listing_photo import ListingPhoto  # noqa: F401
from app.models.listing import Listing  # noqa: F401

from app.main import app
from app.services.container import Services, get_services
from app.services.listing_ingestion import ListingIngestionCoordinator
from app.services.recall_resolver import RecallResolver
from app.services.recall_store import RecallStore
from tests.helpers import FakeRegistry


def _test_db_url(tmp_path) -> str:
    return os.getenv("DATABASE_URL_TEST") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = create_async_engine(_test_db_url(tmp_path))

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_fks(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def sessions(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def store(sessions) -> RecallStore:
    return RecallStore(sessions)


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def resolver(store, registry) -> RecallResolver:
    return RecallResolver(store=store, registry=registry)


@pytest.fixture
def coordinator(sessions, resolver) -> ListingIngestionCoordinator:
    return ListingIngestionCoordinator(sessions=sessions, resolver=resolver, on_recall="block")


@pytest_asyncio.fixture
async def client(store, registry, resolver, coordinator):
    """
    HTTP client wired to the test database and the fake registry.
    """
    services = Services(registry=registry, store=store, resolver=resolver, coordinator=coordinator)
    app.dependency_overrides[get_services] = lambda: services

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
