"""
Shared test fixtures.

API tests run the FastAPI app in-process through httpx against a fresh
in-memory SQLite database per test.
"""

from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from racetracker.db.base import Base
from racetracker.db.session import get_async_db
from racetracker.features.users import models as _users  # noqa: F401
from racetracker.features.races import models as _races  # noqa: F401
from racetracker.features.users.service import ensure_admin_user
from racetracker.main import app
from racetracker.shared.clock import get_clock

TODAY = date(2025, 6, 15)

USER_PASSWORD = "Secret123"
ADMIN_EMAIL = "admin@racetracker.app"
ADMIN_PASSWORD = "Admin123"


def race_payload(**overrides) -> dict:
    """Valid create body; override any field."""
    payload = {
        "name": "City 10K",
        "date": "2025-03-01",
        "time": "08:00",
        "price": 50.0,
        "distance": 10.0,
        "registrationUrl": "https://example.org/city10k",
        "status": "registered",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Database
# =============================================================================

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# =============================================================================
# Application
# =============================================================================

@pytest_asyncio.fixture
async def client(session_factory):
    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def register(client: AsyncClient, name: str, email: str, password: str = USER_PASSWORD) -> str:
    """Register a user and return the bearer token."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(client):
    """Headers for a freshly registered regular user."""
    return bearer(await register(client, "Ana Runner", "ana@runmail.com"))


@pytest_asyncio.fixture
async def other_headers(client):
    """Headers for a second, unrelated user."""
    return bearer(await register(client, "Bruno Pace", "bruno@runmail.com"))


@pytest_asyncio.fixture
async def admin_headers(client, session_factory):
    """Headers for the bootstrap admin account."""
    async with session_factory() as session:
        await ensure_admin_user(session, ADMIN_EMAIL, ADMIN_PASSWORD, "Admin")

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return bearer(response.json()["data"]["token"])


@pytest.fixture
def create_race(client):
    """Factory: POST a race for the given headers and return its JSON."""
    async def _create(headers: dict, **overrides) -> dict:
        response = await client.post("/api/v1/races", json=race_payload(**overrides), headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["race"]

    return _create


@pytest.fixture
def make_payload():
    """Factory for valid race create bodies."""
    return race_payload


@pytest.fixture
def register_user(client):
    """Factory: register a user and return their auth headers."""
    async def _register(name: str, email: str, password: str = USER_PASSWORD) -> dict:
        return bearer(await register(client, name, email, password))

    return _register
