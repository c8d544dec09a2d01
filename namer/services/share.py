"""
Per-card outbound links: copy text, web search, and two social share targets.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlencode

from ..core.config import get_settings
from ..domain import IdentityIdea


@dataclass
class ShareLinks:
    copy_text: str
    search_url: str
    twitter_url: str
    facebook_url: str
    share_text: str


def share_text_for(idea: IdentityIdea, app_name: str) -> str:
    return f"Check out this username idea I found on {app_name}: @{idea.handle} - {idea.explanation}"


def build_share_links(
    idea: IdentityIdea,
    app_name: Optional[str] = None,
    share_url: Optional[str] = None,
) -> ShareLinks:
    settings = get_settings()
    app_name = app_name or settings.app_name
    share_url = share_url or settings.share_url
    text = share_text_for(idea, app_name)

    return ShareLinks(
        copy_text=idea.handle,
        search_url="https://www.google.com/search?" + urlencode({"q": f'"{idea.handle}"'}),
        twitter_url="https://twitter.com/intent/tweet?" + urlencode({"text": text, "url": share_url}),
        facebook_url="https://www.facebook.com/sharer/sharer.php?u=" + quote(share_url, safe=""),
        share_text=text,
    )
