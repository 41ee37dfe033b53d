"""Root conftest — environment, in-memory database, scripted upstream and API client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - No test reaches behtarzindagi.in: the HTTP client always runs on a MockTransport
    - Backoff sleeps are recorded, never slept
    - get_db and get_http_client are overridden for route tests; db_manager is patched for readiness

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the four gateway tables
    - One FakeUpstream per test: scripted replies per URL, full request log for assertions
"""

import os

# Must be set before bz_gateway.config is imported anywhere.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-access-secret-0123456789abcdef0123")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret-0123456789abcdef01")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import bz_gateway.infrastructure.database as db_module
import bz_gateway.models  # noqa: F401  registers tables
from bz_gateway.api.dependencies import get_http_client, get_token_service
from bz_gateway.db.base import Base
from bz_gateway.infrastructure.database import DatabaseSessionManager, get_db
from bz_gateway.infrastructure.http_client import ResilientHttpClient
from bz_gateway.main import app

from tests.fake_upstream import FakeUpstream


# ─── Database ────────────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine (skips pool configuration)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


# ─── Upstream ────────────────────────────────────────────────────

@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def make_http_client(upstream):
    """Factory for ResilientHttpClient on the fake upstream; sleeps go to client.sleeps."""
    clients: list[ResilientHttpClient] = []

    def _make(**kwargs) -> ResilientHttpClient:
        client = ResilientHttpClient(transport=upstream.transport(), **kwargs)
        client.sleeps = []

        async def _record_sleep(seconds: float) -> None:
            client.sleeps.append(seconds)

        client._sleep = _record_sleep
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
async def http_client(make_http_client):
    return make_http_client()


# ─── API client ──────────────────────────────────────────────────

@pytest.fixture
def tokens():
    return get_token_service()


@pytest.fixture
async def client(test_session_factory, fake_manager, http_client):
    """FastAPI test client with DB and upstream dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_client] = lambda: http_client

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def auth_headers(tokens):
    token = tokens.issue_access_token({
        "id": "00000000-0000-0000-0000-000000000001",
        "email": "admin@behtarzindagi.in",
        "firstName": "Admin",
        "lastName": "User",
        "role": "admin",
    })
    return {"Authorization": f"Bearer {token}"}
