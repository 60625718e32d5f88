"""Tests for metadata extraction and text previews."""

from __future__ import annotations

import pytest

from mailroom.content.metadata import EMPTY_PREVIEW, extract_metadata, extract_text_preview

SAMPLE = (
    "<p>One two three</p>\n"
    '<img src="a.png">\n'
    '<IMG src="b.png"/>\n'
    '<a href="https://x.test">link</a>\n'
    "<table><tr><td>cell</td></tr></table>\n"
    '<abbr title="t">abbr</abbr>'
)


class TestExtractMetadata:
    """Tests for extract_metadata."""

    def test_counts(self) -> None:
        meta = extract_metadata(SAMPLE)
        assert meta.word_count == 6
        assert meta.image_count == 2
        assert meta.link_count == 1
        assert meta.table_count == 1

    def test_abbr_is_not_a_link(self) -> None:
        assert extract_metadata('<abbr title="x">HTML</abbr>').link_count == 0

    def test_minimum_read_time_is_one_minute(self) -> None:
        assert extract_metadata("<p>short</p>").estimated_read_minutes == 1

    def test_read_time_rounds_up(self) -> None:
        body = "<p>" + "word " * 401 + "</p>"
        meta = extract_metadata(body)
        assert meta.word_count == 401
        assert meta.estimated_read_minutes == 3

    def test_custom_reading_speed(self) -> None:
        body = "word " * 250
        assert extract_metadata(body, words_per_minute=100).estimated_read_minutes == 3

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty(self, raw: str | None) -> None:
        meta = extract_metadata(raw)
        assert meta.word_count == 0
        assert meta.image_count == 0
        assert meta.link_count == 0
        assert meta.table_count == 0
        assert meta.estimated_read_minutes == 1


class TestExtractTextPreview:
    """Tests for extract_text_preview."""

    def test_long_text_truncated_with_ellipsis(self) -> None:
        raw = "<p>Hello <b>World</b>!</p>" + "x" * 120
        expected = ("Hello World!" + "x" * 120)[:100] + "..."
        assert extract_text_preview(raw) == expected

    def test_short_text_not_truncated(self) -> None:
        assert extract_text_preview("<p>Hi there</p>") == "Hi there"

    def test_whitespace_collapsed(self) -> None:
        assert extract_text_preview("<p>Hi\n\n   there</p>\n") == "Hi there"

    def test_exact_length_has_no_ellipsis(self) -> None:
        raw = "y" * 100
        assert extract_text_preview(raw) == raw

    def test_custom_length(self) -> None:
        assert extract_text_preview("abcdefghij", 4) == "abcd..."

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty(self, raw: str | None) -> None:
        assert extract_text_preview(raw) == EMPTY_PREVIEW
