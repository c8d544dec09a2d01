"""
Availability response decoders.

The backend answers availability checks in one of two shapes:

  1. A JSON object (socialsFound / tldStatus / summary / websiteTitle /
     websiteDescription), sometimes wrapped in a markdown code fence.
  2. Free text with fixed-prefix lines:

         Taken: Twitter, Instagram
         Summary: The name is widely used by a clothing brand.

Both decoders return an IdentityAnalysis or raise AnalysisDegraded.
"""

import json
import logging
import re
from typing import Any, Optional

from ..core.errors import AnalysisDegraded
from ..domain import IdentityAnalysis, TldStatus

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*|```", re.IGNORECASE)
_NONE_VALUES = {"", "none", "n/a", "na", "nothing", "-"}
DEFAULT_SUMMARY = "Analysis complete."


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def _load_object(text: str) -> Any:
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except ValueError:
        pass
    # Grounded answers sometimes wrap the object in prose
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(cleaned[start:end + 1])
        except ValueError:
            pass
    raise AnalysisDegraded("response is not valid JSON")


def _optional_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value.lower() in _NONE_VALUES:
        return None
    return value


def _tld_status(raw: Any) -> dict[str, TldStatus]:
    if not isinstance(raw, dict):
        return {}
    out = {}
    for suffix, status in raw.items():
        try:
            out[str(suffix)] = TldStatus(str(status).strip().upper())
        except ValueError:
            out[str(suffix)] = TldStatus.UNKNOWN
    return out


def decode_structured(handle: str, text: str) -> IdentityAnalysis:
    """Decode the JSON shape."""
    data = _load_object(text)
    if not isinstance(data, dict):
        raise AnalysisDegraded(f"expected a JSON object, got {type(data).__name__}")

    socials = data.get("socialsFound") or []
    if not isinstance(socials, list):
        socials = []

    return IdentityAnalysis(
        handle=handle,
        taken_on=[str(s) for s in socials if str(s).strip()],
        summary=_optional_text(data.get("summary")) or DEFAULT_SUMMARY,
        profile_title=_optional_text(data.get("websiteTitle")),
        profile_description=_optional_text(data.get("websiteDescription")),
        tld_status=_tld_status(data.get("tldStatus")),
    )


def decode_prefixed(handle: str, text: str) -> IdentityAnalysis:
    """Decode the Taken:/Summary: line format."""
    taken: Optional[list[str]] = None
    summary: Optional[str] = None

    for line in (text or "").splitlines():
        line = line.strip().lstrip("*-• ").strip()
        lower = line.lower()
        if lower.startswith("taken:"):
            values = line[len("taken:"):].split(",")
            taken = [v.strip() for v in values if v.strip().lower() not in _NONE_VALUES]
        elif lower.startswith("summary:"):
            summary = line[len("summary:"):].strip()

    if taken is None and not summary:
        raise AnalysisDegraded("no Taken:/Summary: lines found")

    return IdentityAnalysis(
        handle=handle,
        taken_on=taken or [],
        summary=summary or DEFAULT_SUMMARY,
        tld_status={},
    )


def decode_analysis(handle: str, text: str, allow_text_fallback: bool = True) -> IdentityAnalysis:
    """Structured first, then (optionally) the line decoder."""
    if not text or not text.strip():
        raise AnalysisDegraded("empty response")
    try:
        return decode_structured(handle, text)
    except AnalysisDegraded as e:
        if not allow_text_fallback:
            raise
        logger.info("Structured analysis decode failed for %s (%s), trying line format", handle, e)
    return decode_prefixed(handle, text)
