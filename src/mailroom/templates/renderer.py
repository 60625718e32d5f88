"""Resolve a template from the store and fill in its placeholders."""

from __future__ import annotations

from collections.abc import Mapping

from mailroom.domain.models import RenderedTemplate
from mailroom.templates.store import TemplateStore
from mailroom.templates.substitution import substitute


def render_template(
    store: TemplateStore,
    type_key: str,
    context: Mapping[str, str],
) -> RenderedTemplate | None:
    """Substitute *context* into both subject and body of a stored template.

    Args:
        store: The template store to resolve *type_key* against.
        type_key: Template key such as ``"orderShipped"``.
        context: Pre-formatted variable values.

    Returns:
        The rendered subject and body, or ``None`` when the store has no
        template for *type_key*.  Callers must check before sending.
    """
    template = store.get_template(type_key)
    if template is None:
        return None

    return RenderedTemplate(
        type_key=template.type_key,
        subject=substitute(template.subject, context),
        body=substitute(template.body, context),
    )
