"""
Generation events for the suggestion session, published per device.
"""

from typing import Awaitable, Callable, Optional

from ..core.redis import notify_device

Notifier = Callable[[str, Optional[dict]], Awaitable[None]]


def notifier_for(device_id: str) -> Notifier:
    """Bind a SuggestionSession notifier to one device channel."""

    async def _notify(event_type: str, data: Optional[dict] = None) -> None:
        await notify_device(device_id, event_type, data)

    return _notify
