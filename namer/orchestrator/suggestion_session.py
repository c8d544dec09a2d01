"""
SuggestionSession: one device's generation round plus per-card enrichment.

Top level:

    IDLE ──submit──▶ GENERATING ──ok──▶ RESULTS
      ▲                  │
      │                  └──fail──▶ ERROR
      └──reset── (any)        show_saved ──▶ SAVED

IDLE / RESULTS / ERROR / SAVED may all submit again. Nothing transitions
on its own; every edge is an explicit call.

Every submit mints a generation token. Only the outcome carrying the latest
token is applied; an older request that resolves late is discarded.

Per card (keyed by handle), independent of the top level and of each other:

    analysis: NOT_REQUESTED ─▶ PENDING ─▶ DONE(analysis)
    avatar:   NOT_REQUESTED ─▶ PENDING ─▶ DONE(image | None)

Requests made while PENDING or DONE are no-ops. A cancelled request goes
back to NOT_REQUESTED. Card failures never touch the top-level state.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..core.errors import GenerationFailed
from ..domain import (
    BACKEND_FAILED_SUMMARY,
    AppState,
    IdentityAnalysis,
    IdentityIdea,
    default_analysis,
)
from ..services.identity_backend import IdentityBackend

logger = logging.getLogger(__name__)

Notifier = Callable[[str, dict], Awaitable[None]]


class SubState(str, Enum):
    NOT_REQUESTED = "NOT_REQUESTED"
    PENDING = "PENDING"
    DONE = "DONE"


@dataclass
class CardState:
    """Enrichment state for one displayed idea."""

    handle: str
    analysis_state: SubState = SubState.NOT_REQUESTED
    analysis: Optional[IdentityAnalysis] = None
    avatar_state: SubState = SubState.NOT_REQUESTED
    avatar: Optional[bytes] = None               # None once DONE means "no image"

    @property
    def avatar_missing(self) -> bool:
        return self.avatar_state == SubState.DONE and self.avatar is None


@dataclass
class SuggestionSession:
    backend: IdentityBackend
    notifier: Optional[Notifier] = None

    state: AppState = AppState.IDLE
    prompt: str = ""
    results: list[IdentityIdea] = field(default_factory=list)
    error: Optional[str] = None
    token: int = 0
    cards: dict[str, CardState] = field(default_factory=dict)

    # ── Top-level transitions ────────────────────────────────────────

    def start(self, prompt: str) -> Optional[int]:
        """Enter GENERATING synchronously. Blank prompt → no-op, returns None."""
        if not prompt or not prompt.strip():
            return None
        self.prompt = prompt.strip()
        self.results = []
        self.error = None
        self.state = AppState.GENERATING
        self.token += 1
        logger.info("Generation #%d started: %s", self.token, self.prompt[:80])
        return self.token

    async def submit(self, prompt: str) -> AppState:
        token = self.start(prompt)
        if token is None:
            return self.state
        await self._notify("generation.started", {"token": token, "prompt": self.prompt})

        try:
            batch = await self.backend.generate_identities(self.prompt)
        except GenerationFailed as e:
            await self._finish(token, error=str(e) or "Something went wrong. Please try again.")
        except Exception as e:
            logger.error("Generation #%d crashed: %s", token, e)
            await self._finish(token, error=str(e) or "Something went wrong. Please try again.")
        else:
            await self._finish(token, results=batch)
        return self.state

    async def _finish(
        self,
        token: int,
        results: Optional[list[IdentityIdea]] = None,
        error: Optional[str] = None,
    ) -> bool:
        """Apply a generation outcome if it is still the latest one."""
        if token != self.token:
            logger.info("Discarding stale generation #%d (latest=#%d)", token, self.token)
            await self._notify("generation.discarded", {"token": token})
            return False

        if error is not None:
            self.results = []
            self.error = error
            self.state = AppState.ERROR
            logger.warning("Generation #%d failed: %s", token, error)
            await self._notify("generation.failed", {"token": token, "error": error})
        else:
            self.results = list(results or [])
            self.error = None
            self.state = AppState.RESULTS
            logger.info("Generation #%d produced %d ideas", token, len(self.results))
            await self._notify("generation.completed", {"token": token, "count": len(self.results)})
        return True

    def reset(self) -> None:
        """Back to IDLE. In-flight generations become stale."""
        self.state = AppState.IDLE
        self.prompt = ""
        self.results = []
        self.error = None
        self.token += 1

    def show_saved(self) -> None:
        self.state = AppState.SAVED

    # ── Per-card enrichment ──────────────────────────────────────────

    def card(self, handle: str) -> CardState:
        if handle not in self.cards:
            self.cards[handle] = CardState(handle=handle)
        return self.cards[handle]

    async def request_analysis(self, handle: str) -> CardState:
        card = self.card(handle)
        if card.analysis_state != SubState.NOT_REQUESTED:
            return card

        card.analysis_state = SubState.PENDING
        try:
            card.analysis = await self.backend.check_identity_presence(handle)
        except asyncio.CancelledError:
            card.analysis_state = SubState.NOT_REQUESTED
            raise
        except Exception as e:
            # Backends degrade instead of raising; this covers the ones that do not
            logger.warning("Availability check raised for %s: %s", handle, e)
            card.analysis = default_analysis(handle, BACKEND_FAILED_SUMMARY)
        card.analysis_state = SubState.DONE
        return card

    async def request_avatar(self, idea: IdentityIdea) -> CardState:
        card = self.card(idea.handle)
        if card.avatar_state != SubState.NOT_REQUESTED:
            return card

        card.avatar_state = SubState.PENDING
        try:
            card.avatar = await self.backend.generate_avatar(idea.handle, idea.vibe, idea.category)
        except asyncio.CancelledError:
            card.avatar_state = SubState.NOT_REQUESTED
            raise
        except Exception as e:
            logger.warning("Preview generation raised for %s: %s", idea.handle, e)
            card.avatar = None
        card.avatar_state = SubState.DONE
        return card

    async def retry_avatar(self, idea: IdentityIdea) -> CardState:
        """Re-offer the preview action after a "no image" outcome."""
        card = self.card(idea.handle)
        if card.avatar_missing:
            card.avatar_state = SubState.NOT_REQUESTED
        return await self.request_avatar(idea)

    def find_idea(self, handle: str) -> Optional[IdentityIdea]:
        return next((i for i in self.results if i.handle == handle), None)

    async def _notify(self, event_type: str, data: dict) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier(event_type, data)
        except Exception as e:
            logger.warning("Notifier failed for %s: %s", event_type, e)
