"""Shared fixtures: a scriptable fake identity backend, stores and an API client."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from namer.core import dependencies as deps
from namer.core.database import Base
from namer.core.errors import GenerationFailed
from namer.core.storage import MemoryStore
from namer.domain import IdentityAnalysis, IdentityIdea
from namer.models import StoredItem  # noqa: F401
from namer.orchestrator.registry import get_session_registry
from namer.services.identity_backend import IdentityBackend


def make_idea(handle: str = "KnitCraft.io", **overrides) -> IdentityIdea:
    data = {
        "handle": handle,
        "style": "Cozy",
        "explanation": "Warm and crafty.",
        "vibe": "Friendly",
        "availabilityScore": 7,
        "category": "Creative",
    }
    data.update(overrides)
    return IdentityIdea.model_validate(data)


def make_batch(n: int = 8, prefix: str = "Knit") -> list[IdentityIdea]:
    return [make_idea(f"{prefix}{i}.io") for i in range(n)]


class FakeBackend(IdentityBackend):
    """In-memory backend with call counters and optional gates."""

    def __init__(
        self,
        ideas: Optional[list[IdentityIdea]] = None,
        generation_error: Optional[Exception] = None,
        analysis_error: Optional[Exception] = None,
        avatar: Optional[bytes] = b"\xff\xd8fake-jpeg",
    ) -> None:
        self.ideas = ideas if ideas is not None else make_batch()
        self.generation_error = generation_error
        self.analysis_error = analysis_error
        self.avatar = avatar
        self.generate_calls: list[str] = []
        self.analysis_calls: list[str] = []
        self.avatar_calls: list[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def generate_identities(self, prompt_text: str) -> list[IdentityIdea]:
        self.generate_calls.append(prompt_text)
        if self.gate is not None:
            await self.gate.wait()
        if self.generation_error is not None:
            raise self.generation_error
        if not self.ideas:
            raise GenerationFailed("AI returned no identity ideas. Please try again.")
        return list(self.ideas)

    async def check_identity_presence(self, handle: str) -> IdentityAnalysis:
        self.analysis_calls.append(handle)
        if self.gate is not None:
            await self.gate.wait()
        if self.analysis_error is not None:
            raise self.analysis_error
        return IdentityAnalysis(handle=handle, taken_on=["Twitter"], summary="Mostly free.")

    async def generate_avatar(self, handle: str, vibe: str, category: str = "Other") -> Optional[bytes]:
        self.avatar_calls.append(handle)
        if self.gate is not None:
            await self.gate.wait()
        return self.avatar


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def db_session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """In-memory SQLite shared across connections for the duration of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session_factory, backend) -> AsyncIterator[AsyncClient]:
    from main import app

    async def _override_db():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    get_session_registry().clear()
    app.dependency_overrides[deps.get_db] = _override_db
    app.dependency_overrides[deps.get_backend_dep] = lambda: backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http

    app.dependency_overrides.clear()
    get_session_registry().clear()
