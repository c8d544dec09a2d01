"""Tests for the non-verifying session context."""

import json

import pytest

from conftest import make_idea
from namer.core.storage import MemoryStore
from namer.domain import User
from namer.services.favorites import FavoritesStore, favorites_key
from namer.services.session_context import USER_KEY, SessionContext, namespace_for


def _context(store):
    return SessionContext(store, FavoritesStore(store))


class TestNamespaceFor:
    def test_guest_without_user(self):
        assert namespace_for(None) == "guest"

    def test_email_is_normalized(self):
        assert namespace_for(User(name="A", email="  A@B.com ")) == "a@b.com"


class TestSignIn:
    @pytest.mark.asyncio
    async def test_sign_in_derives_display_name(self, store):
        ctx = _context(store)
        user = await ctx.sign_in("knitter@example.com")
        assert user.name == "knitter"
        assert user.email == "knitter@example.com"

    @pytest.mark.asyncio
    async def test_sign_in_keeps_supplied_name(self, store):
        ctx = _context(store)
        user = await ctx.sign_in("knitter@example.com", "Kit Knitter")
        assert user.name == "Kit Knitter"

    @pytest.mark.asyncio
    async def test_sign_in_persists_session_record(self, store):
        ctx = _context(store)
        await ctx.sign_in("a@b.com")
        assert json.loads(await store.get_item(USER_KEY)) == {"name": "a", "email": "a@b.com"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["guest", " GUEST ", "   "])
    async def test_reserved_or_blank_email_is_refused(self, store, email):
        ctx = _context(store)
        await ctx.restore()

        with pytest.raises(ValueError):
            await ctx.sign_in(email)

        assert ctx.user is None
        assert await store.get_item(USER_KEY) is None

    @pytest.mark.asyncio
    async def test_restore_picks_up_persisted_user(self, store):
        await _context(store).sign_in("a@b.com")

        ctx = _context(store)
        user = await ctx.restore()
        assert user.email == "a@b.com"
        assert ctx.favorites.namespace == "a@b.com"

    @pytest.mark.asyncio
    async def test_restore_with_corrupt_record_is_guest(self):
        store = MemoryStore({USER_KEY: "not-json"})
        ctx = _context(store)
        assert await ctx.restore() is None
        assert ctx.namespace == "guest"

    @pytest.mark.asyncio
    async def test_restore_with_wrong_shape_is_guest(self):
        store = MemoryStore({USER_KEY: json.dumps({"email": "x@y.z"})})
        ctx = _context(store)
        assert await ctx.restore() is None


class TestNamespaceSwitching:
    @pytest.mark.asyncio
    async def test_guest_favorite_hidden_after_sign_in_and_back_after_sign_out(self, store):
        ctx = _context(store)
        await ctx.restore()
        await ctx.favorites.toggle(make_idea("KnitCraft.io"))

        await ctx.sign_in("a@b.com")
        assert not ctx.favorites.contains("KnitCraft.io")
        assert ctx.favorites.items == []

        await ctx.sign_out()
        assert [i.handle for i in ctx.favorites.items] == ["KnitCraft.io"]

    @pytest.mark.asyncio
    async def test_sign_out_keeps_user_favorites(self, store):
        ctx = _context(store)
        await ctx.sign_in("a@b.com")
        await ctx.favorites.toggle(make_idea("Mine.io"))
        await ctx.sign_out()

        assert await store.get_item(USER_KEY) is None
        assert await store.get_item(favorites_key("a@b.com")) is not None

        await ctx.sign_in("a@b.com")
        assert [i.handle for i in ctx.favorites.items] == ["Mine.io"]

    @pytest.mark.asyncio
    async def test_injected_namespace_function(self, store):
        ctx = SessionContext(store, FavoritesStore(store), namespace_fn=lambda u: "shared")
        await ctx.sign_in("a@b.com")
        assert ctx.favorites.namespace == "shared"
