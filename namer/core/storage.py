"""
Per-device key/value storage. SQL table OR in-process dict.

Plays the role of browser local storage: flat string keys, JSON text values,
no schema version. Corrupt JSON is read back as "no data", never an error.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import StorageReadCorrupt
from ..models.stored_item import StoredItem

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the raw stored text, or None if the key is missing."""
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store raw text under key. Durable when this returns."""
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        ...

    async def read_json(self, key: str) -> Any:
        """Decode the JSON value for key. Missing or corrupt → None."""
        raw = await self.get_item(key)
        if raw is None:
            return None
        try:
            return decode_stored(key, raw)
        except StorageReadCorrupt as e:
            logger.warning("%s, treating as empty", e)
            return None

    async def write_json(self, key: str, value: Any) -> None:
        await self.set_item(key, json.dumps(value))


def decode_stored(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageReadCorrupt(key, str(e)) from e


class MemoryStore(KeyValueStore):
    """Dict-backed store. Used for tests and embedding without a database."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SqlKeyValueStore(KeyValueStore):
    """stored_items rows for one device. Every write is committed immediately."""

    def __init__(self, db: AsyncSession, device_id: str):
        self.db = db
        self.device_id = device_id

    async def _get_row(self, key: str) -> Optional[StoredItem]:
        result = await self.db.execute(
            select(StoredItem).where(
                StoredItem.device_id == self.device_id,
                StoredItem.key == key,
            )
        )
        return result.scalar_one_or_none()

    async def get_item(self, key: str) -> Optional[str]:
        row = await self._get_row(key)
        return row.value if row else None

    async def set_item(self, key: str, value: str) -> None:
        row = await self._get_row(key)
        if row:
            row.value = value
        else:
            self.db.add(StoredItem(device_id=self.device_id, key=key, value=value))
        await self.db.commit()
        logger.debug("Stored %s/%s (%d bytes)", self.device_id, key, len(value))

    async def remove_item(self, key: str) -> None:
        await self.db.execute(
            sql_delete(StoredItem).where(
                StoredItem.device_id == self.device_id,
                StoredItem.key == key,
            )
        )
        await self.db.commit()
        logger.debug("Removed %s/%s", self.device_id, key)


def get_store(db: AsyncSession, device_id: str) -> KeyValueStore:
    """Return the store for a device."""
    return SqlKeyValueStore(db, device_id)
