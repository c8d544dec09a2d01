"""
Per-device key/value rows. Values are JSON text, written verbatim.
"""

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import DeviceBase


class StoredItem(DeviceBase):
    __tablename__ = "stored_items"
    __table_args__ = (
        UniqueConstraint("device_id", "key", name="uq_stored_items_device_key"),
    )

    key: Mapped[str] = mapped_column(String, nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
