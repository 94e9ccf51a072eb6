"""
Database engine and per-request sessions.

The configured URL is the plain driver-less form (`sqlite:///...`,
`postgresql://...`) so alembic can use it as is; the app swaps in the
async driver.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from racetracker.config import settings

ASYNC_DRIVERS = {
    "sqlite://": "sqlite+aiosqlite://",
    "postgresql://": "postgresql+asyncpg://",
}


def to_async_url(url: str) -> str:
    """
    sqlite:///./racetracker.db   → sqlite+aiosqlite:///./racetracker.db
    postgresql://u:p@host/races  → postgresql+asyncpg://u:p@host/races

    URLs that already name a driver are returned unchanged.
    """
    for prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def build_engine(url: str) -> AsyncEngine:
    """Async engine with per-backend connection options."""
    async_url = to_async_url(url)
    if async_url.startswith("sqlite"):
        return create_async_engine(async_url, connect_args={"check_same_thread": False})
    if async_url.startswith("postgresql"):
        return create_async_engine(
            async_url,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,  # 30 minutes
            pool_pre_ping=True,
        )
    return create_async_engine(async_url)


async_engine = build_engine(settings.database_url)

AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db() -> None:
    """Create missing tables (alembic owns schema changes)."""
    from racetracker.db.base import Base
    # model modules register their tables on Base.metadata
    from racetracker.features.users import models as _users  # noqa: F401
    from racetracker.features.races import models as _races  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
