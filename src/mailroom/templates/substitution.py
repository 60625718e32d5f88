"""Placeholder substitution for email subjects and bodies.

Placeholders are written ``{{name}}``: double curly braces, no whitespace,
and a case-sensitive identifier.  This syntax is shared with every template
already saved by admins and must not change.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")

# Looser rule used to decide whether content is still an unrendered template
_ANY_PLACEHOLDER = re.compile(r"\{\{.*?\}\}")


def substitute(template: str, context: Mapping[str, str]) -> str:
    """Replace every ``{{name}}`` in *template* with ``context[name]``.

    Names missing from *context* are replaced with the empty string so an
    incomplete template still produces a sendable email.  Replacement values
    are inserted verbatim and are not scanned again, so a value that itself
    looks like a placeholder is left as-is.

    Args:
        template: Subject or HTML body containing zero or more placeholders.
        context: Variable name to pre-formatted replacement value.

    Returns:
        The template with all placeholders resolved.
    """
    return PLACEHOLDER_PATTERN.sub(lambda match: str(context.get(match.group(1), "")), template)


def find_placeholders(template: str) -> list[str]:
    """List the placeholder names in *template*, in order of first appearance."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)


def has_placeholders(text: str) -> bool:
    """Return ``True`` if *text* contains anything between ``{{`` and ``}}``."""
    return bool(_ANY_PLACEHOLDER.search(text))
