"""Tests for the mailbox viewer presenter."""

from __future__ import annotations

from mailroom.content.presenter import BASE_EMAIL_CSS, build_email_view, get_email_css, render_view
from mailroom.content.sanitizer import EMPTY_CONTENT_HTML


class TestGetEmailCss:
    """Tests for get_email_css."""

    def test_type_specific_rules_appended(self) -> None:
        css = get_email_css("orderConfirmation")
        assert css.startswith(BASE_EMAIL_CSS)
        assert ".order-total" in css

    def test_vendor_application_rules(self) -> None:
        assert ".app-section" in get_email_css("vendorApplication")

    def test_unknown_type_gets_base_only(self) -> None:
        assert get_email_css("general") == BASE_EMAIL_CSS


class TestBuildEmailView:
    """Tests for build_email_view."""

    def test_full_view(self) -> None:
        raw = (
            "<h1>Your order has shipped</h1><script>steal()</script>"
            '<img src="box.png"><p>Track it <a href="https://t.test">here</a></p>'
        )
        view = build_email_view(raw)
        assert "<script>" not in view.safe_html
        assert view.original_html == raw
        assert view.template_type == "orderShipped"
        assert view.is_template is False
        assert view.has_images is True
        assert view.has_tables is False
        assert view.link_count == 1
        assert view.is_empty is False
        assert view.preview.startswith("Your order has shipped")

    def test_unrendered_template_flagged(self) -> None:
        view = build_email_view("<p>Hi {{firstName}}</p>")
        assert view.is_template is True

    def test_empty_body(self) -> None:
        view = build_email_view("")
        assert view.is_empty is True
        assert view.safe_html == EMPTY_CONTENT_HTML
        assert view.preview == "No preview available"
        assert view.metadata.word_count == 0

    def test_whitespace_body_is_empty(self) -> None:
        assert build_email_view("  \n ").is_empty is True

    def test_preview_length_setting(self) -> None:
        view = build_email_view("<p>abcdefghij</p>", preview_length=3)
        assert view.preview == "abc..."


class TestRenderView:
    """Tests for render_view."""

    def test_wraps_sanitized_html(self) -> None:
        rendered = render_view("<p>Hi</p><script>x()</script>")
        assert rendered.html == '<div class="email-body"><p>Hi</p></div>'
        assert rendered.css == BASE_EMAIL_CSS

    def test_inline_style(self) -> None:
        rendered = render_view("<p>Hi</p>", style={"max-width": "600px"})
        assert rendered.html == '<div class="email-body" style="max-width: 600px"><p>Hi</p></div>'

    def test_custom_class(self) -> None:
        rendered = render_view("<p>Hi</p>", class_name="preview")
        assert rendered.html.startswith('<div class="preview">')

    def test_css_follows_content_type(self) -> None:
        rendered = render_view("<p>Your order status is now Processing</p>")
        assert ".status-box" in rendered.css
