"""Tests for prompt templates and preview presets."""

import pytest

from namer.services import prompts
from namer.services.prompts import Category


class TestCategory:
    @pytest.mark.parametrize(
        "raw,expected",
        [("Gaming", Category.GAMING), ("tech", Category.TECH), (" CREATIVE ", Category.CREATIVE)],
    )
    def test_known_categories(self, raw, expected):
        assert prompts.parse_category(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "Food", "misc"])
    def test_unknown_is_other(self, raw):
        assert prompts.parse_category(raw) == Category.OTHER


class TestIdentityPrompt:
    def test_domain_prompt_includes_description_and_count(self):
        text = prompts.build_identity_prompt("a vegan bakery", count=8)
        assert '"a vegan bakery"' in text
        assert "Generate 8 unique" in text
        assert "'Commerce'" in text

    def test_unknown_mode_falls_back_to_domain(self):
        assert "domain name" in prompts.build_identity_prompt("x", count=3, mode="bogus")

    def test_schema_requires_every_field(self):
        required = prompts.IDENTITY_RESPONSE_SCHEMA["items"]["required"]
        assert set(required) == {"handle", "style", "category", "explanation", "vibe", "availabilityScore"}


class TestAnalysisPrompt:
    def test_bare_name(self):
        assert prompts.bare_name("UrbanFlow.shop") == "UrbanFlow"
        assert prompts.bare_name("@pixelpilot") == "pixelpilot"

    def test_search_query_covers_tlds_and_socials(self):
        query = prompts.build_search_query("pixel.io")
        assert query.startswith("site:pixel.io OR ")
        for tld in prompts.TLDS_TO_CHECK:
            assert f"site:pixel{tld}" in query
        assert "site:instagram.com/pixel" in query

    def test_search_mode_asks_for_json_in_text(self):
        text = prompts.build_analysis_prompt("pixel.io", mode="search")
        assert '"socialsFound"' in text
        assert '".app": "AVAILABLE" | "TAKEN" | "UNKNOWN"' in text

    def test_schema_mode_omits_shape_hint(self):
        text = prompts.build_analysis_prompt("pixel.io", mode="schema")
        assert "socialsFound" not in text
        assert "Is pixel.com taken (active website)?" in text


class TestAvatarPrompt:
    def test_domain_mode_is_website_mockup(self):
        text = prompts.build_avatar_prompt("Arena.gg", "Intense", "gaming")
        assert "website UI design mockup" in text
        assert prompts.WEBSITE_PRESETS[Category.GAMING] in text
        assert prompts.avatar_aspect_ratio("domain") == "16:9"

    def test_username_mode_is_square_avatar(self):
        text = prompts.build_avatar_prompt("arenaking", "Intense", "gaming", mode="username")
        assert "Profile avatar" in text
        assert prompts.AVATAR_PRESETS[Category.GAMING] in text
        assert prompts.avatar_aspect_ratio("username") == "1:1"

    def test_unknown_category_uses_other_preset(self):
        text = prompts.build_avatar_prompt("x.io", "Calm", "Food")
        assert "Category: Other." in text
