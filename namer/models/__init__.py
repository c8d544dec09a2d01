"""
All database models. Imported here so Base.metadata sees them for create_all().
"""

from .base import DeviceBase
from .stored_item import StoredItem

__all__ = [
    "DeviceBase",
    "StoredItem",
]
