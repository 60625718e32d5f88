"""Size and structure statistics for HTML email bodies."""

from __future__ import annotations

import math
import re

from mailroom.domain.models import EmailMetadata

TAG_PATTERN = re.compile(r"<[^>]*>")
IMAGE_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
LINK_TAG = re.compile(r"<a\b[^>]*>", re.IGNORECASE)
TABLE_TAG = re.compile(r"<table\b[^>]*>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_PREVIEW_LENGTH = 100
EMPTY_PREVIEW = "No preview available"


def strip_tags(raw_html: str) -> str:
    """Remove every ``<...>`` tag, keeping the text between them."""
    return TAG_PATTERN.sub("", raw_html)


def extract_metadata(
    raw_html: str | None,
    *,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> EmailMetadata:
    """Count words, images, links, and tables in an HTML body.

    Args:
        raw_html: The email body.  ``None`` is treated as empty.
        words_per_minute: Reading speed used for the time estimate.

    Returns:
        Counts plus an estimated read time of at least one minute.
    """
    raw_html = raw_html or ""
    word_count = len(strip_tags(raw_html).split())
    return EmailMetadata(
        word_count=word_count,
        image_count=len(IMAGE_TAG.findall(raw_html)),
        link_count=len(LINK_TAG.findall(raw_html)),
        table_count=len(TABLE_TAG.findall(raw_html)),
        estimated_read_minutes=max(1, math.ceil(word_count / words_per_minute)),
    )


def extract_text_preview(raw_html: str | None, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Build a short plain-text preview of an HTML body.

    Tags are stripped, whitespace runs collapse to a single space, and the
    result is cut to *length* characters with ``"..."`` appended when cut.

    Args:
        raw_html: The email body.
        length: Maximum number of characters kept before the ellipsis.

    Returns:
        The preview text, or ``"No preview available"`` for empty input.
    """
    if not raw_html:
        return EMPTY_PREVIEW

    text = _WHITESPACE.sub(" ", strip_tags(raw_html)).strip()
    if len(text) > length:
        return text[:length] + "..."
    return text
