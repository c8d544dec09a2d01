"""Tests for availability response decoding."""

import json

import pytest

from namer.core.errors import AnalysisDegraded
from namer.domain import TldStatus
from namer.services.analysis_decoder import (
    decode_analysis,
    decode_prefixed,
    decode_structured,
    strip_code_fences,
)

STRUCTURED = {
    "socialsFound": ["Twitter", "Instagram"],
    "tldStatus": {".com": "TAKEN", ".io": "available", ".ai": "maybe"},
    "summary": "The .com is an active shop.",
    "websiteTitle": "Urban Flow Store",
    "websiteDescription": "N/A",
}


class TestStructured:
    def test_decodes_all_fields(self):
        analysis = decode_structured("urbanflow.shop", json.dumps(STRUCTURED))
        assert analysis.handle == "urbanflow.shop"
        assert analysis.taken_on == ["Twitter", "Instagram"]
        assert analysis.summary == "The .com is an active shop."
        assert analysis.profile_title == "Urban Flow Store"
        assert analysis.profile_description is None

    def test_tld_status_is_normalized(self):
        analysis = decode_structured("x.io", json.dumps(STRUCTURED))
        assert analysis.tld_status == {
            ".com": TldStatus.TAKEN,
            ".io": TldStatus.AVAILABLE,
            ".ai": TldStatus.UNKNOWN,
        }

    def test_markdown_fence_is_stripped(self):
        text = "```json\n" + json.dumps(STRUCTURED) + "\n```"
        assert decode_structured("x.io", text).taken_on == ["Twitter", "Instagram"]

    def test_object_inside_prose(self):
        text = "Here is what I found:\n" + json.dumps(STRUCTURED) + "\nHope this helps."
        assert decode_structured("x.io", text).summary == "The .com is an active shop."

    def test_missing_summary_gets_default(self):
        analysis = decode_structured("x.io", json.dumps({"socialsFound": []}))
        assert analysis.summary == "Analysis complete."
        assert analysis.tld_status == {}

    def test_non_object_is_degraded(self):
        with pytest.raises(AnalysisDegraded):
            decode_structured("x.io", "[1, 2, 3]")

    def test_garbage_is_degraded(self):
        with pytest.raises(AnalysisDegraded):
            decode_structured("x.io", "no json here")


class TestPrefixed:
    def test_taken_and_summary_lines(self):
        text = "Some preamble\nTaken: Twitter, TikTok\nSummary: Heavily used by a band."
        analysis = decode_prefixed("band.io", text)
        assert analysis.taken_on == ["Twitter", "TikTok"]
        assert analysis.summary == "Heavily used by a band."
        assert analysis.tld_status == {}

    def test_taken_none(self):
        analysis = decode_prefixed("x.io", "Taken: None\nSummary: Looks free.")
        assert analysis.taken_on == []

    def test_bullets_and_case(self):
        analysis = decode_prefixed("x.io", "- taken: Facebook\n* SUMMARY: ok")
        assert analysis.taken_on == ["Facebook"]
        assert analysis.summary == "ok"

    def test_no_prefixed_lines_is_degraded(self):
        with pytest.raises(AnalysisDegraded):
            decode_prefixed("x.io", "I could not find anything useful.")


class TestDecodeAnalysis:
    def test_prefers_structured(self):
        assert decode_analysis("x.io", json.dumps(STRUCTURED)).profile_title == "Urban Flow Store"

    def test_falls_back_to_prefixed(self):
        analysis = decode_analysis("x.io", "Taken: Twitter\nSummary: Busy name.")
        assert analysis.taken_on == ["Twitter"]

    def test_fallback_can_be_disabled(self):
        with pytest.raises(AnalysisDegraded):
            decode_analysis("x.io", "Taken: Twitter", allow_text_fallback=False)

    def test_empty_text_is_degraded(self):
        with pytest.raises(AnalysisDegraded):
            decode_analysis("x.io", "   ")


def test_strip_code_fences():
    assert strip_code_fences("```json\n{}\n```") == "{}"
    assert strip_code_fences(None) == ""
