"""
Identity backend: powered by Google Gemini (text) and Imagen (previews).

Async wrapper around the sync google-genai SDK. Three operations, each a
single request/response with no retries:

  - generate_identities   → list[IdentityIdea]  or GenerationFailed
  - check_identity_presence → IdentityAnalysis  (never raises, degrades)
  - generate_avatar        → bytes | None       (never raises, "no image")

Prompts and response schemas come from services.prompts; which ones are
used is selected by feature flags, not by branches in the callers.
"""

import asyncio
import base64
import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from ..core.config import Settings, get_settings
from ..core.errors import AnalysisDegraded, AvatarUnavailable, GenerationFailed
from ..core.flags import FeatureFlags, get_flags
from ..domain import (
    BACKEND_FAILED_SUMMARY,
    IdentityAnalysis,
    IdentityIdea,
    default_analysis,
)
from . import prompts
from .analysis_decoder import decode_analysis, strip_code_fences

logger = logging.getLogger(__name__)


_gemini_client = None


def _get_gemini_client():
    """Lazy-load and cache the google-genai client as a singleton."""
    global _gemini_client
    if _gemini_client is not None:
        return _gemini_client
    try:
        from google import genai
        settings = get_settings()
        api_key = settings.gemini_api_key
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required for identity generation")
        _gemini_client = genai.Client(api_key=api_key)
        return _gemini_client
    except ImportError:
        raise ImportError(
            "google-genai package is required for identity generation. "
            "Install it with: pip install google-genai"
        )


def to_data_uri(image_bytes: bytes, mime_type: str = "image/jpeg") -> str:
    """Embed image bytes for direct use in an <img src>."""
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"


def parse_identities(text: Optional[str], batch_size: int) -> list[IdentityIdea]:
    """Validate a generation response. Anything but a non-empty list of ideas fails."""
    if not text or not text.strip():
        raise GenerationFailed("No response from AI")

    try:
        data = json.loads(strip_code_fences(text))
    except ValueError:
        raise GenerationFailed("AI response was not valid JSON")

    if not isinstance(data, list) or not data:
        raise GenerationFailed("AI returned no identity ideas. Please try again.")

    try:
        ideas = [IdentityIdea.model_validate(item) for item in data]
    except ValidationError as e:
        logger.error("Identity batch failed validation: %s", e)
        raise GenerationFailed("AI response did not match the expected identity format")

    if len(ideas) > batch_size:
        logger.info("Truncating identity batch from %d to %d", len(ideas), batch_size)
        ideas = ideas[:batch_size]
    return ideas


class IdentityBackend(ABC):
    """The three capabilities the suggestion session depends on."""

    @abstractmethod
    async def generate_identities(self, prompt_text: str) -> list[IdentityIdea]:
        ...

    @abstractmethod
    async def check_identity_presence(self, handle: str) -> IdentityAnalysis:
        ...

    @abstractmethod
    async def generate_avatar(self, handle: str, vibe: str, category: str = "Other") -> Optional[bytes]:
        ...


class GeminiIdentityBackend(IdentityBackend):
    def __init__(
        self,
        client=None,
        settings: Optional[Settings] = None,
        flags: Optional[FeatureFlags] = None,
    ):
        self._client = client
        self.settings = settings or get_settings()
        self.flags = flags or get_flags()

    def _get_client(self):
        if self._client is None:
            self._client = _get_gemini_client()
        return self._client

    # ── Sync functions (run in a thread for async compatibility) ─────

    def _sync_generate_text(self, contents: str, config) -> Optional[str]:
        response = self._get_client().models.generate_content(
            model=self.settings.identity_model,
            contents=contents,
            config=config,
        )
        return response.text

    def _sync_generate_identities(self, prompt_text: str) -> Optional[str]:
        from google.genai import types

        prompt = prompts.build_identity_prompt(
            prompt_text,
            count=self.settings.identity_batch_size,
            mode=self.flags.identity_mode,
        )
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=prompts.IDENTITY_RESPONSE_SCHEMA,
        )
        return self._sync_generate_text(prompt, config)

    def _sync_check_presence(self, handle: str) -> Optional[str]:
        from google.genai import types

        mode = self.flags.analysis_mode
        prompt = prompts.build_analysis_prompt(handle, mode=mode)
        if mode == "schema":
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=prompts.ANALYSIS_RESPONSE_SCHEMA,
            )
        else:
            # JSON mime type is not accepted together with the search tool,
            # so the shape is requested in the prompt text instead.
            config = types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            )
        return self._sync_generate_text(prompt, config)

    def _sync_generate_avatar(self, handle: str, vibe: str, category: str) -> bytes:
        from google.genai import types

        mode = self.flags.identity_mode
        response = self._get_client().models.generate_images(
            model=self.settings.avatar_model,
            prompt=prompts.build_avatar_prompt(handle, vibe, category, mode=mode),
            config=types.GenerateImagesConfig(
                number_of_images=1,
                aspect_ratio=prompts.avatar_aspect_ratio(mode),
                output_mime_type=self.settings.avatar_mime_type,
            ),
        )

        generated = getattr(response, "generated_images", None) or []
        if not generated:
            raise AvatarUnavailable("no image returned (likely filtered)")
        image = getattr(generated[0], "image", None)
        image_bytes = getattr(image, "image_bytes", None)
        if not image_bytes:
            reason = getattr(generated[0], "rai_filtered_reason", None) or "empty image payload"
            raise AvatarUnavailable(reason)
        return image_bytes

    # ── Async public API ─────────────────────────────────────────────

    async def generate_identities(self, prompt_text: str) -> list[IdentityIdea]:
        if not prompt_text or not prompt_text.strip():
            raise GenerationFailed("Describe your brand or persona to generate ideas.")

        try:
            text = await asyncio.to_thread(self._sync_generate_identities, prompt_text.strip())
        except Exception as e:
            logger.error("Identity generation failed: %s", e)
            raise GenerationFailed("Failed to generate ideas. Please try again.") from e

        ideas = parse_identities(text, self.settings.identity_batch_size)
        logger.info("Generated %d identity ideas", len(ideas))
        return ideas

    async def check_identity_presence(self, handle: str) -> IdentityAnalysis:
        try:
            text = await asyncio.to_thread(self._sync_check_presence, handle)
        except Exception as e:
            logger.error("Availability check failed for %s: %s", handle, e)
            return default_analysis(handle, BACKEND_FAILED_SUMMARY)

        try:
            return decode_analysis(handle, text, allow_text_fallback=self.flags.allow_text_fallback)
        except AnalysisDegraded as e:
            logger.warning("Availability analysis degraded for %s: %s", handle, e)
            return default_analysis(handle)

    async def generate_avatar(self, handle: str, vibe: str, category: str = "Other") -> Optional[bytes]:
        if not self.flags.enable_avatars:
            logger.debug("Avatars disabled, skipping %s", handle)
            return None
        try:
            image_bytes = await asyncio.to_thread(self._sync_generate_avatar, handle, vibe, category)
        except AvatarUnavailable as e:
            logger.warning("No preview for %s: %s", handle, e)
            return None
        except Exception as e:
            logger.warning("Preview generation failed for %s (likely quota or filter): %s", handle, e)
            return None
        logger.info("Preview generated for %s: %d bytes", handle, len(image_bytes))
        return image_bytes


_backend: Optional[IdentityBackend] = None


def get_identity_backend() -> IdentityBackend:
    """Process-wide backend. FastAPI dependency; overridden in tests."""
    global _backend
    if _backend is None:
        _backend = GeminiIdentityBackend()
    return _backend
