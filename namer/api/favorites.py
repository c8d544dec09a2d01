"""
Favorites API. Operates on the namespace of the current session user.

GET  /v1/favorites         Saved ideas in the active namespace
POST /v1/favorites/toggle  Save / unsave an idea (by handle)
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .schemas import FavoritesOut, favorites_out
from ..core.dependencies import get_session_context
from ..domain import IdentityIdea
from ..services.session_context import SessionContext

logger = logging.getLogger(__name__)

favorites_router = APIRouter(prefix="/favorites", tags=["favorites"])


class ToggleRequest(BaseModel):
    idea: IdentityIdea


class ToggleResponse(BaseModel):
    handle: str
    saved: bool
    count: int


@favorites_router.get("", response_model=FavoritesOut)
async def list_favorites(ctx: SessionContext = Depends(get_session_context)):
    return favorites_out(ctx.favorites)


@favorites_router.post("/toggle", response_model=ToggleResponse)
async def toggle_favorite(
    request: ToggleRequest,
    ctx: SessionContext = Depends(get_session_context),
):
    saved = await ctx.favorites.toggle(request.idea)
    return ToggleResponse(handle=request.idea.handle, saved=saved, count=ctx.favorites.count)
