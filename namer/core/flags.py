"""
Central feature flags. One file controls every swappable backend behaviour.

Set via environment variables (prefix FF_) or .env file.
When a flag is OFF, the system uses a local/degraded fallback. Nothing crashes.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Generation ───────────────────────────────────────────────────
    identity_mode: str = Field(default="domain", alias="FF_IDENTITY_MODE")
    # "domain"   → handles carry a TLD (UrbanFlow.shop), website mockup previews.
    # "username" → bare social handles, square profile-avatar previews.

    # ── Availability analysis ────────────────────────────────────────
    analysis_mode: str = Field(default="search", alias="FF_ANALYSIS_MODE")
    # "search" → Google Search grounding, JSON requested in the prompt text.
    # "schema" → response schema enforced by the model, no search tool.

    allow_text_fallback: bool = Field(default=True, alias="FF_ALLOW_TEXT_FALLBACK")
    # ON  → unparsable JSON is retried through the Taken:/Summary: line decoder.
    # OFF → unparsable JSON degrades straight to the "unknown" analysis.

    # ── Previews ─────────────────────────────────────────────────────
    enable_avatars: bool = Field(default=True, alias="FF_ENABLE_AVATARS")
    # OFF → generate_avatar always returns "no image" without calling Imagen.

    # ── Realtime ─────────────────────────────────────────────────────
    use_redis: bool = Field(default=False, alias="FF_USE_REDIS")
    # ON  → Redis pub/sub of generation events. Needs REDIS_URL.
    # OFF → Notifications silently skipped. Nothing breaks.


@lru_cache
def get_flags() -> FeatureFlags:
    return FeatureFlags()
