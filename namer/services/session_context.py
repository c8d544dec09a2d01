"""
Session context: who is "signed in" on this device.

Sign-in is a local, NON-VERIFYING session: any email is accepted and no
password or token is ever checked. Its only effect is choosing which
favorites namespace is visible.
"""

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..core.storage import KeyValueStore
from ..domain import User
from .favorites import GUEST_NAMESPACE, FavoritesStore

logger = logging.getLogger(__name__)

USER_KEY = "namer_user"


def namespace_for(user: Optional[User]) -> str:
    """Favorites namespace for a user. No user → the shared guest namespace."""
    if user is None:
        return GUEST_NAMESPACE
    return user.email.strip().lower()


def display_name_for(email: str) -> str:
    return email.split("@")[0]


class SessionContext:
    def __init__(
        self,
        store: KeyValueStore,
        favorites: FavoritesStore,
        namespace_fn: Callable[[Optional[User]], str] = namespace_for,
    ):
        self.store = store
        self.favorites = favorites
        self.namespace_fn = namespace_fn
        self.user: Optional[User] = None

    @property
    def namespace(self) -> str:
        return self.namespace_fn(self.user)

    async def restore(self) -> Optional[User]:
        """Load the persisted session (if any) and its favorites."""
        data = await self.store.read_json(USER_KEY)
        user = None
        if data is not None:
            try:
                user = User.model_validate(data)
            except ValidationError as e:
                logger.warning("Stored session user is invalid, signing out: %s", e)
        await self._set_user(user)
        return user

    async def sign_in(self, email: str, display_name: Optional[str] = None) -> User:
        """Never verifies. Only blank emails and the reserved guest namespace are refused."""
        email = email.strip()
        if not email:
            raise ValueError("email must not be blank")
        name = (display_name or "").strip() or display_name_for(email)
        user = User(name=name, email=email)
        if self.namespace_fn(user) == GUEST_NAMESPACE:
            raise ValueError(f"{email!r} is reserved for signed-out favorites")
        await self.store.write_json(USER_KEY, user.model_dump())
        await self._set_user(user)
        logger.info("Signed in %s (namespace=%s)", email, self.namespace)
        return user

    async def sign_out(self) -> None:
        """Forget the session user. Their favorites stay in storage."""
        previous = self.user
        await self.store.remove_item(USER_KEY)
        await self._set_user(None)
        if previous:
            logger.info("Signed out %s", previous.email)

    async def _set_user(self, user: Optional[User]) -> None:
        self.user = user
        await self.favorites.switch_namespace(self.namespace)
