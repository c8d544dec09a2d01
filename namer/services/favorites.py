"""
Favorites: saved identity ideas, one collection per namespace.

The active collection is held in memory and written through to the
key/value store on every mutation. Membership is by handle only.
"""

import logging
from typing import Union

from pydantic import ValidationError

from ..core.storage import KeyValueStore
from ..domain import IdentityIdea

logger = logging.getLogger(__name__)

FAVORITES_KEY_PREFIX = "namer_saved_ids_"
GUEST_NAMESPACE = "guest"


def favorites_key(namespace: str) -> str:
    return f"{FAVORITES_KEY_PREFIX}{namespace}"


def _handle_of(idea_or_handle: Union[IdentityIdea, str]) -> str:
    if isinstance(idea_or_handle, IdentityIdea):
        return idea_or_handle.handle
    return idea_or_handle


class FavoritesStore:
    """Favorites for one namespace at a time.

    Reads (items, count, contains) see the collection last loaded; call
    load() or switch_namespace() first. toggle() loads on its own.
    """

    def __init__(self, store: KeyValueStore, namespace: str = GUEST_NAMESPACE):
        self.store = store
        self.namespace = namespace
        self._items: list[IdentityIdea] = []
        self._loaded = False

    @property
    def items(self) -> list[IdentityIdea]:
        return list(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    def contains(self, idea_or_handle: Union[IdentityIdea, str]) -> bool:
        handle = _handle_of(idea_or_handle)
        return any(i.handle == handle for i in self._items)

    def get(self, handle: str):
        return next((i for i in self._items if i.handle == handle), None)

    async def switch_namespace(self, namespace: str) -> list[IdentityIdea]:
        """Replace the active collection with the persisted one for namespace."""
        self.namespace = namespace
        self._items = await self._load(namespace)
        self._loaded = True
        logger.debug("Favorites namespace %s: %d saved", namespace, len(self._items))
        return self.items

    async def load(self) -> list[IdentityIdea]:
        """Load the current namespace if nothing has been loaded yet."""
        if not self._loaded:
            await self.switch_namespace(self.namespace)
        return self.items

    async def toggle(self, idea: IdentityIdea) -> bool:
        """Add or remove by handle. Returns True when the idea is now saved."""
        await self.load()
        if self.contains(idea):
            self._items = [i for i in self._items if i.handle != idea.handle]
            saved = False
        else:
            self._items.append(idea)
            saved = True
        await self._save()
        logger.info("%s %s (namespace=%s)", "Saved" if saved else "Unsaved", idea.handle, self.namespace)
        return saved

    async def _load(self, namespace: str) -> list[IdentityIdea]:
        data = await self.store.read_json(favorites_key(namespace))
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Favorites for %s is not a list, treating as empty", namespace)
            return []

        items: list[IdentityIdea] = []
        for record in data:
            try:
                idea = IdentityIdea.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping invalid saved idea in %s: %s", namespace, e)
                continue
            if any(i.handle == idea.handle for i in items):
                continue
            items.append(idea)
        return items

    async def _save(self) -> None:
        await self.store.write_json(
            favorites_key(self.namespace),
            [i.to_record() for i in self._items],
        )
