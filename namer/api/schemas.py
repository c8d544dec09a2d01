"""
Response models shared by the API routers.
"""

from typing import Optional

from pydantic import BaseModel

from ..core.config import get_settings
from ..domain import IdentityAnalysis, IdentityIdea, User
from ..orchestrator.suggestion_session import CardState, SubState, SuggestionSession
from ..services.favorites import FavoritesStore
from ..services.identity_backend import to_data_uri


class IdeaOut(BaseModel):
    idea: IdentityIdea
    saved: bool = False


class SessionOut(BaseModel):
    state: str
    prompt: str = ""
    error: Optional[str] = None
    results: list[IdeaOut] = []
    saved_count: int = 0


class CardOut(BaseModel):
    handle: str
    analysis_state: str
    analysis: Optional[IdentityAnalysis] = None
    avatar_state: str
    avatar_url: Optional[str] = None
    can_create_avatar: bool = True


class UserOut(BaseModel):
    signed_in: bool
    user: Optional[User] = None
    namespace: str


class FavoritesOut(BaseModel):
    namespace: str
    count: int
    items: list[IdentityIdea] = []


def session_out(session: SuggestionSession, favorites: FavoritesStore) -> SessionOut:
    return SessionOut(
        state=session.state.value,
        prompt=session.prompt,
        error=session.error,
        results=[IdeaOut(idea=i, saved=favorites.contains(i)) for i in session.results],
        saved_count=favorites.count,
    )


def card_out(card: CardState) -> CardOut:
    avatar_url = None
    if card.avatar:
        avatar_url = to_data_uri(card.avatar, get_settings().avatar_mime_type)
    return CardOut(
        handle=card.handle,
        analysis_state=card.analysis_state.value,
        analysis=card.analysis,
        avatar_state=card.avatar_state.value,
        avatar_url=avatar_url,
        can_create_avatar=card.avatar is None and card.avatar_state != SubState.PENDING,
    )


def favorites_out(favorites: FavoritesStore) -> FavoritesOut:
    return FavoritesOut(
        namespace=favorites.namespace,
        count=favorites.count,
        items=favorites.items,
    )
