"""Assemble what the mailbox viewer shows for one email body.

Combines the sanitizer, classifier, and metadata extractor into a single
``EmailView`` and wraps sanitized HTML with a type-specific stylesheet.
"""

from __future__ import annotations

import html
from collections.abc import Mapping

from mailroom.content.metadata import (
    DEFAULT_PREVIEW_LENGTH,
    DEFAULT_WORDS_PER_MINUTE,
    extract_metadata,
    extract_text_preview,
)
from mailroom.content.sanitizer import sanitize
from mailroom.domain.models import EmailView, RenderedView
from mailroom.domain.types import ContentType

BASE_EMAIL_CSS = """
.email-body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
  line-height: 1.6;
  color: #333;
  word-break: break-word;
}
.email-body h1, .email-body h2, .email-body h3 { margin: 20px 0 15px 0; color: #222; }
.email-body p { margin: 10px 0; }
.email-body a { color: #667eea; text-decoration: none; }
.email-body img { max-width: 100%; height: auto; margin: 15px 0; border-radius: 4px; }
.email-body table { width: 100%; border-collapse: collapse; margin: 15px 0; }
.email-body th, .email-body td { padding: 12px; text-align: left; border-bottom: 1px solid #eee; }
.email-body blockquote { margin: 15px 0; padding-left: 15px; border-left: 3px solid #667eea; color: #666; }
.email-body ul, .email-body ol { margin: 10px 0; padding-left: 30px; }
"""

TEMPLATE_CSS: dict[str, str] = {
    ContentType.ORDER_CONFIRMATION: """
.order-item { background: #f9f9f9; padding: 10px; margin: 5px 0; border-radius: 3px; }
.order-total { font-size: 18px; font-weight: 600; color: #667eea; }
""",
    ContentType.ORDER_STATUS: """
.status-box { padding: 15px; border-left: 4px solid #667eea; background: #f8f9fa; margin: 10px 0; }
.status-label { font-weight: 600; color: #222; }
""",
    ContentType.VENDOR_APPLICATION: """
.app-section { margin: 15px 0; padding: 15px; background: #f5f5f5; border-radius: 4px; }
.app-label { font-weight: 600; color: #222; font-size: 12px; text-transform: uppercase; }
""",
}


def get_email_css(template_type: str) -> str:
    """Return the base stylesheet plus any rules specific to *template_type*."""
    return BASE_EMAIL_CSS + TEMPLATE_CSS.get(template_type, "")


def build_email_view(
    raw_html: str | None,
    *,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> EmailView:
    """Sanitize, classify, and summarize an email body for display.

    Args:
        raw_html: The stored or rendered HTML body.
        preview_length: Character budget for the text preview.
        words_per_minute: Reading speed for the read-time estimate.

    Returns:
        An ``EmailView`` with safe HTML and presentation metadata.
    """
    raw_html = raw_html or ""
    sanitized = sanitize(raw_html)
    metadata = extract_metadata(raw_html, words_per_minute=words_per_minute)

    return EmailView(
        safe_html=sanitized.clean_html,
        original_html=raw_html,
        is_template=sanitized.is_template,
        template_type=sanitized.template_type,
        preview=extract_text_preview(raw_html, preview_length),
        metadata=metadata,
        has_images=metadata.image_count > 0,
        has_tables=metadata.table_count > 0,
        link_count=metadata.link_count,
        is_empty=not raw_html.strip(),
    )


def render_view(
    raw_html: str | None,
    *,
    class_name: str = "email-body",
    style: Mapping[str, str] | None = None,
) -> RenderedView:
    """Wrap sanitized HTML in a styled ``<div>`` ready to embed in a page.

    Args:
        raw_html: The email body.
        class_name: CSS class for the wrapper element.
        style: Inline style declarations for the wrapper.

    Returns:
        The wrapped HTML and the stylesheet for its content type.
    """
    sanitized = sanitize(raw_html)
    style_attr = ""
    if style:
        declarations = "; ".join(f"{key}: {value}" for key, value in style.items())
        style_attr = f' style="{html.escape(declarations, quote=True)}"'

    wrapped = (
        f'<div class="{html.escape(class_name, quote=True)}"{style_attr}>'
        f"{sanitized.clean_html}</div>"
    )
    return RenderedView(html=wrapped, css=get_email_css(sanitized.template_type))
