"""Email templates: compiled-in defaults, override store, and substitution."""

from mailroom.templates.defaults import DEFAULT_TEMPLATES, get_default_template
from mailroom.templates.renderer import render_template
from mailroom.templates.store import TemplateStore, init_template_table
from mailroom.templates.substitution import (
    PLACEHOLDER_PATTERN,
    find_placeholders,
    has_placeholders,
    substitute,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "PLACEHOLDER_PATTERN",
    "TemplateStore",
    "find_placeholders",
    "get_default_template",
    "has_placeholders",
    "init_template_table",
    "render_template",
    "substitute",
]
