"""Best-effort HTML sanitizer for rendering stored email bodies.

Parses the body with BeautifulSoup, decomposes ``<script>``, ``<iframe>``,
``<object>`` and ``<embed>`` elements together with their content, and
deletes inline event-handler attributes from every remaining element.  The
result is the parser's re-serialization of the tree, so sanitized output is a
fixed point of :func:`sanitize`.

Limitation: this is an enumerated denylist, not an allow-list.  Vectors that
are not listed -- ``<style>`` based exfiltration, ``javascript:`` URLs in
``href``/``src``, handlers other than the five below -- pass through
unchanged.  Do not treat the output as a security boundary.
"""

from __future__ import annotations

import structlog
from bs4 import BeautifulSoup

from mailroom.content.classifier import classify
from mailroom.domain.models import SanitizedContent
from mailroom.domain.types import ContentType
from mailroom.templates.substitution import has_placeholders

logger = structlog.get_logger()

EMPTY_CONTENT_HTML = "<p>No content</p>"

REMOVED_ELEMENTS = ("script", "iframe", "object", "embed")
DANGEROUS_ATTRIBUTES = frozenset({"onload", "onerror", "onclick", "onchange", "onsubmit"})

_limitation_logged = False


def strip_dangerous_html(raw_html: str) -> str:
    """Remove denied elements and event-handler attributes from *raw_html*."""
    soup = BeautifulSoup(raw_html, "html.parser")

    for tag in soup.find_all(REMOVED_ELEMENTS):
        # Nested matches go with their ancestor
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        for name in DANGEROUS_ATTRIBUTES.intersection(tag.attrs):
            del tag[name]

    return str(soup)


def sanitize(raw_html: str | None) -> SanitizedContent:
    """Prepare an email body for display in the admin viewer.

    Args:
        raw_html: The stored or rendered HTML body.

    Returns:
        The cleaned HTML, whether the raw input still contains ``{{...}}``
        placeholders (an unrendered template), and its content type as
        classified from the raw input.
    """
    global _limitation_logged
    if not _limitation_logged:
        logger.warning(
            "sanitizer_denylist_only",
            removed_elements=sorted(REMOVED_ELEMENTS),
            stripped_attributes=sorted(DANGEROUS_ATTRIBUTES),
            detail="style and javascript: URLs are not filtered",
        )
        _limitation_logged = True

    if not raw_html:
        return SanitizedContent(
            clean_html=EMPTY_CONTENT_HTML,
            is_template=False,
            template_type=ContentType.GENERAL,
        )

    return SanitizedContent(
        clean_html=strip_dangerous_html(raw_html),
        is_template=has_placeholders(raw_html),
        template_type=classify(raw_html),
    )
