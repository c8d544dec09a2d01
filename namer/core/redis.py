"""
Device event channel over Redis pub/sub, or nothing at all.

FF_USE_REDIS=false (the default) turns every publish into a no-op. When on,
each device gets its own channel and every event is a small JSON envelope:

    {"type": "generation.completed", "device": "phone", "at": "...", "data": {...}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from .config import get_settings
from .flags import get_flags

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "namer:device:"

_redis_client = None


def device_channel(device_id: str) -> str:
    return f"{CHANNEL_PREFIX}{device_id}"


def event_envelope(device_id: str, event_type: str, data: Any = None) -> str:
    return json.dumps({
        "type": event_type,
        "device": device_id,
        "at": datetime.now(timezone.utc).isoformat(),
        "data": data,
    })


def _client():
    global _redis_client
    if _redis_client is None:
        import redis.asyncio as aioredis

        url = get_settings().redis_url
        if not url:
            raise ValueError("REDIS_URL is required when FF_USE_REDIS is on")
        _redis_client = aioredis.from_url(url, decode_responses=True, socket_connect_timeout=5)
    return _redis_client


async def notify_device(device_id: str, event_type: str, data: Any = None) -> int:
    """Publish one device event. Returns the receiver count (0 when disabled or failed)."""
    if not get_flags().use_redis:
        return 0
    try:
        return await _client().publish(device_channel(device_id), event_envelope(device_id, event_type, data))
    except Exception as e:
        logger.warning("Redis publish failed (device=%s, event=%s): %s", device_id, event_type, e)
        return 0


async def close_redis() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("Redis connection closed")
