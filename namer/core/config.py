"""
Central configuration. All API keys and settings in one place.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Environment ---
    env: str = Field(default="development", alias="ENV")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    debug: bool = Field(default=False, alias="DEBUG")

    # --- Database (per-device local state) ---
    database_url: str = Field(
        default="sqlite+aiosqlite:///./namer.db",
        alias="DATABASE_URL",
    )

    # --- Gemini ---
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    identity_model: str = Field(default="gemini-2.5-flash", alias="IDENTITY_MODEL")
    avatar_model: str = Field(default="imagen-4.0-generate-001", alias="AVATAR_MODEL")
    identity_batch_size: int = Field(default=8, alias="IDENTITY_BATCH_SIZE")
    avatar_mime_type: str = Field(default="image/jpeg", alias="AVATAR_MIME_TYPE")

    # --- Suggestion sessions (in-process, per device) ---
    session_max_devices: int = Field(default=1000, alias="SESSION_MAX_DEVICES")
    session_idle_ttl_seconds: float = Field(default=3600.0, alias="SESSION_IDLE_TTL_SECONDS")

    # --- Redis ---
    redis_url: str = Field(default="", alias="REDIS_URL")

    # --- Sharing ---
    app_name: str = Field(default="Namer.ai", alias="APP_NAME")
    share_url: str = Field(default="https://namer.ai", alias="SHARE_URL")

    # --- API ---
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")


@lru_cache
def get_settings() -> Settings:
    return Settings()
