"""
Async SQLAlchemy engine for the per-device key/value table.

SQLite (aiosqlite) by default; PostgreSQL (asyncpg) when DATABASE_URL points
at one. Plain driver-less URLs are rewritten to their async driver.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import get_settings

logger = logging.getLogger(__name__)

_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def async_url(url: str) -> str:
    """'postgresql://…' → 'postgresql+asyncpg://…', 'sqlite://…' → 'sqlite+aiosqlite://…'."""
    for prefix, replacement in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def engine_options(url: str, echo: bool = False) -> dict:
    if url.startswith("sqlite"):
        # One file, many request tasks
        return {"echo": echo, "connect_args": {"check_same_thread": False}}
    return {"echo": echo, "pool_size": 5, "max_overflow": 5, "pool_pre_ping": True}


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        url = async_url(settings.database_url)
        _engine = create_async_engine(url, **engine_options(url, settings.debug))
        logger.info("Database engine created (%s)", url.split("://", 1)[0])
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


async def get_db() -> AsyncSession:
    """One session per request. Stores commit their own writes; this only cleans up."""
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the stored_items table if missing. Called on startup."""
    from ..models import stored_item  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready")


async def close_db():
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database engine disposed")
