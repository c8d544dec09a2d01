"""
Error taxonomy.

Only GenerationFailed ever reaches a caller. The others are raised inside
the adapter / storage layers and converted to their degraded value there.
"""


class NamerError(Exception):
    """Base class for all namer errors."""


class GenerationFailed(NamerError):
    """Identity generation produced no usable batch. Message is user-facing."""


class AnalysisDegraded(NamerError):
    """Availability output could not be decoded."""


class AvatarUnavailable(NamerError):
    """Image backend returned no image (failed, filtered or disabled)."""


class StorageReadCorrupt(NamerError):
    """A persisted value is not valid JSON."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        super().__init__(f"Corrupt stored value for {key!r}: {reason}" if reason else key)
