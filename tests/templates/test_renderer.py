"""Tests for render_template."""

from __future__ import annotations

from mailroom.domain.models import TemplateContent
from mailroom.domain.types import TemplateType
from mailroom.templates.renderer import render_template
from mailroom.templates.store import TemplateStore


class TestRenderTemplate:
    """Tests for render_template."""

    def test_renders_subject_and_body(self, template_store: TemplateStore) -> None:
        template_store.update_template(
            "orderShipped",
            TemplateContent(
                subject="Order {{orderNumber}} shipped",
                body="Hi {{name}}, your order {{orderNumber}} shipped.",
            ),
        )
        rendered = render_template(
            template_store, "orderShipped", {"name": "Amina", "orderNumber": "A1B2"}
        )
        assert rendered is not None
        assert rendered.type_key is TemplateType.ORDER_SHIPPED
        assert rendered.subject == "Order A1B2 shipped"
        assert rendered.body == "Hi Amina, your order A1B2 shipped."

    def test_renders_default_without_leftover_supplied_names(
        self, template_store: TemplateStore
    ) -> None:
        context = {
            "firstName": "Amina",
            "orderId": "A1B2",
            "trackingNumber": "TRK-9",
            "estimatedDelivery": "Friday",
            "trackingUrl": "https://track.test/TRK-9",
        }
        rendered = render_template(template_store, "orderShipped", context)
        assert rendered is not None
        assert "A1B2" in rendered.subject
        for name in context:
            assert "{{" + name + "}}" not in rendered.body

    def test_missing_variables_render_empty(self, template_store: TemplateStore) -> None:
        rendered = render_template(template_store, "welcome", {})
        assert rendered is not None
        assert "{{firstName}}" not in rendered.body
        assert "Welcome !" in rendered.body

    def test_unknown_type_returns_none(self, template_store: TemplateStore) -> None:
        assert render_template(template_store, "invoice", {"name": "x"}) is None
