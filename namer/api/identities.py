"""
Suggestion session API.

GET  /v1/session                    Current session snapshot
POST /v1/identities/generate        Submit a prompt, wait for the batch
POST /v1/session/reset              Back to IDLE
POST /v1/session/saved              Switch to the saved-items view
POST /v1/cards/{handle}/analysis    Availability check (once per handle)
POST /v1/cards/{handle}/avatar      Preview image (once per handle, again after "no image")
GET  /v1/cards/{handle}/links       Copy / search / share links
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from .schemas import CardOut, SessionOut, card_out, session_out
from ..core.dependencies import get_session_context, get_suggestion_session
from ..domain import IdentityIdea
from ..orchestrator.suggestion_session import SuggestionSession
from ..services.session_context import SessionContext
from ..services.share import build_share_links

logger = logging.getLogger(__name__)

identities_router = APIRouter(tags=["identities"])


class GenerateRequest(BaseModel):
    prompt: str = ""


class LinksOut(BaseModel):
    handle: str
    copy_text: str
    search_url: str
    twitter_url: str
    facebook_url: str
    share_text: str


def _lookup_idea(handle: str, session: SuggestionSession, ctx: SessionContext) -> IdentityIdea:
    """A card exists for ideas in the current results or in favorites."""
    idea = session.find_idea(handle) or ctx.favorites.get(handle)
    if idea is None:
        raise HTTPException(status_code=404, detail=f"No identity idea with handle {handle!r}")
    return idea


@identities_router.get("/session", response_model=SessionOut)
async def get_session(
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    return session_out(session, ctx.favorites)


@identities_router.post("/identities/generate", response_model=SessionOut)
async def generate(
    request: GenerateRequest,
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    """Run one generation round. Failures come back as the ERROR state."""
    await session.submit(request.prompt)
    return session_out(session, ctx.favorites)


@identities_router.post("/session/reset", response_model=SessionOut)
async def reset_session(
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    session.reset()
    return session_out(session, ctx.favorites)


@identities_router.post("/session/saved", response_model=SessionOut)
async def show_saved(
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    session.show_saved()
    return session_out(session, ctx.favorites)


@identities_router.post("/cards/{handle}/analysis", response_model=CardOut)
async def analyze_card(
    handle: str,
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    idea = _lookup_idea(handle, session, ctx)
    card = await session.request_analysis(idea.handle)
    return card_out(card)


@identities_router.post("/cards/{handle}/avatar", response_model=CardOut)
async def create_avatar(
    handle: str,
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    idea = _lookup_idea(handle, session, ctx)
    # A "no image" outcome re-offers the action; anything else runs once
    card = await session.retry_avatar(idea)
    return card_out(card)


@identities_router.get("/cards/{handle}/links", response_model=LinksOut)
async def card_links(
    handle: str,
    session: SuggestionSession = Depends(get_suggestion_session),
    ctx: SessionContext = Depends(get_session_context),
):
    idea = _lookup_idea(handle, session, ctx)
    links = build_share_links(idea)
    return LinksOut(
        handle=idea.handle,
        copy_text=links.copy_text,
        search_url=links.search_url,
        twitter_url=links.twitter_url,
        facebook_url=links.facebook_url,
        share_text=links.share_text,
    )
