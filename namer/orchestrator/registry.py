"""
Suggestion-session registry. One live SuggestionSession per device.

Sessions are transient: they live in process memory only and are lost on
restart, like the browser tab state they stand in for. The registry is
bounded: idle sessions expire after SESSION_IDLE_TTL_SECONDS and the least
recently used one is evicted once SESSION_MAX_DEVICES is reached.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable, Optional

from .suggestion_session import SuggestionSession
from ..core.config import get_settings
from ..services.identity_backend import IdentityBackend
from ..services.realtime import notifier_for

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Central registry for per-device suggestion sessions."""

    def __init__(
        self,
        max_sessions: int = 1000,
        idle_ttl: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        # device_id -> (last_used, session), least recently used first
        self._sessions: OrderedDict[str, tuple[float, SuggestionSession]] = OrderedDict()

    def get_or_create(self, device_id: str, backend: IdentityBackend) -> SuggestionSession:
        now = self._clock()
        self._expire(now)

        entry = self._sessions.pop(device_id, None)
        if entry is None:
            session = SuggestionSession(backend=backend, notifier=notifier_for(device_id))
            while len(self._sessions) >= self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted suggestion session for %s (registry full)", evicted)
            logger.debug("Created suggestion session for %s (%d active)", device_id, len(self._sessions) + 1)
        else:
            session = entry[1]
            session.backend = backend
        self._sessions[device_id] = (now, session)
        return session

    def get(self, device_id: str) -> Optional[SuggestionSession]:
        entry = self._sessions.get(device_id)
        return entry[1] if entry else None

    def remove(self, device_id: str) -> None:
        self._sessions.pop(device_id, None)

    def clear(self) -> None:
        self._sessions.clear()

    def _expire(self, now: float) -> None:
        while self._sessions:
            device_id, (last_used, _) = next(iter(self._sessions.items()))
            if now - last_used < self.idle_ttl:
                break
            del self._sessions[device_id]
            logger.debug("Expired idle suggestion session for %s", device_id)

    def __len__(self) -> int:
        return len(self._sessions)


# ── Global registry ──────────────────────────────────────────────────

_registry: Optional[SessionRegistry] = None


def get_session_registry() -> SessionRegistry:
    """Get or create the global session registry."""
    global _registry
    if _registry is None:
        settings = get_settings()
        _registry = SessionRegistry(
            max_sessions=settings.session_max_devices,
            idle_ttl=settings.session_idle_ttl_seconds,
        )
    return _registry
