"""Content pipeline: sanitize, classify, and summarize HTML email bodies."""

from mailroom.content.classifier import CLASSIFICATION_RULES, classify
from mailroom.content.metadata import extract_metadata, extract_text_preview, strip_tags
from mailroom.content.presenter import build_email_view, get_email_css, render_view
from mailroom.content.sanitizer import sanitize, strip_dangerous_html

__all__ = [
    "CLASSIFICATION_RULES",
    "build_email_view",
    "classify",
    "extract_metadata",
    "extract_text_preview",
    "get_email_css",
    "render_view",
    "sanitize",
    "strip_dangerous_html",
    "strip_tags",
]
