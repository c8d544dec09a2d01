"""
FastAPI dependencies. Injected into route handlers.
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db as _get_db
from .storage import KeyValueStore, get_store
from ..orchestrator.registry import get_session_registry
from ..orchestrator.suggestion_session import SuggestionSession
from ..services.favorites import FavoritesStore
from ..services.identity_backend import IdentityBackend, get_identity_backend
from ..services.session_context import SessionContext

DEFAULT_DEVICE_ID = "local"


async def get_db() -> AsyncSession:
    """Yields an async DB session per request."""
    async for session in _get_db():
        yield session


def get_device_id(x_device_id: str = Header(default=DEFAULT_DEVICE_ID)) -> str:
    """All local state is scoped by the calling device."""
    return x_device_id.strip() or DEFAULT_DEVICE_ID


def get_store_dep(
    device_id: str = Depends(get_device_id),
    db: AsyncSession = Depends(get_db),
) -> KeyValueStore:
    return get_store(db, device_id)


async def get_session_context(
    store: KeyValueStore = Depends(get_store_dep),
) -> SessionContext:
    """Restored session context (current user + active favorites)."""
    ctx = SessionContext(store, FavoritesStore(store))
    await ctx.restore()
    return ctx


def get_backend_dep() -> IdentityBackend:
    return get_identity_backend()


def get_suggestion_session(
    device_id: str = Depends(get_device_id),
    backend: IdentityBackend = Depends(get_backend_dep),
) -> SuggestionSession:
    return get_session_registry().get_or_create(device_id, backend)
