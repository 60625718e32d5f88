"""Compiled-in default templates for every transactional email type.

These are what ``TemplateStore.get_template`` returns when an admin has not
saved an override.  Placeholders use the ``{{name}}`` syntax understood by
``mailroom.templates.substitution``.
"""

from __future__ import annotations

from types import MappingProxyType

from mailroom.domain.models import Template
from mailroom.domain.types import TemplateType

_STYLE = """
    body { font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; }
    .header { background: linear-gradient(135deg, #ff9800 0%, #f57c00 100%); color: white; padding: 30px 20px; text-align: center; }
    .content { padding: 40px 30px; }
    .cta-button { display: inline-block; background: #f57c00; color: white; padding: 14px 32px; text-decoration: none; border-radius: 6px; font-weight: 600; }
    .footer { background-color: #f9f9f9; padding: 20px; text-align: center; border-top: 1px solid #eee; font-size: 12px; color: #888; }
"""


def _layout(heading: str, content: str) -> str:
    """Wrap a content block in the shared branded shell."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        '    <meta charset="UTF-8">\n'
        f"    <style>{_STYLE}</style>\n"
        "  </head>\n"
        "  <body>\n"
        '    <div class="container">\n'
        f'      <div class="header"><h1>{heading}</h1></div>\n'
        f'      <div class="content">\n{content}\n      </div>\n'
        '      <div class="footer"><p>&copy; 2025 Aruviah Stores. All rights reserved.</p></div>\n'
        "    </div>\n"
        "  </body>\n"
        "</html>\n"
    )


def _order_update(message: str) -> str:
    return (
        "        <p>Hello {{firstName}},</p>\n"
        f"        <p>{message}</p>\n"
        "        <p><strong>Order ID:</strong> {{orderId}}</p>\n"
        '        <p><a href="{{orderTrackingUrl}}" class="cta-button">View Your Order</a></p>\n'
        "        <p>Best regards,<br><strong>Aruviah Stores Team</strong></p>"
    )


_DEFAULTS: dict[TemplateType, tuple[str, str]] = {
    TemplateType.PASSWORD_RESET: (
        "Reset Your Password - Aruviah Stores",
        _layout(
            "Password Reset Request",
            "        <p>Hello,</p>\n"
            "        <p>We received a request to reset the password for {{email}}.</p>\n"
            '        <p><a href="{{resetLink}}" class="cta-button">Reset Password</a></p>\n'
            "        <p><strong>Note:</strong> This link will expire in {{expirationTime}}.</p>\n"
            "        <p>If you didn't request this, please ignore this email.</p>",
        ),
    ),
    TemplateType.WELCOME: (
        "Welcome to Aruviah Stores!",
        _layout(
            "Welcome {{firstName}}!",
            "        <p>Thank you for joining Aruviah Stores! We're excited to have you.</p>\n"
            "        <ul>\n"
            "          <li>Exclusive deals and special offers</li>\n"
            "          <li>New product arrivals</li>\n"
            "          <li>Member rewards on every purchase</li>\n"
            "        </ul>\n"
            '        <p><a href="{{shopUrl}}" class="cta-button">Start Shopping</a></p>',
        ),
    ),
    TemplateType.ORDER_CONFIRMATION: (
        "Order Confirmed - {{orderId}}",
        _layout(
            "Thank You For Your Order!",
            "        <p>Hello {{firstName}},</p>\n"
            "        <p>Your order {{orderId}} placed on {{orderDate}} has been confirmed.</p>\n"
            "        <table>{{orderItems}}</table>\n"
            "        <p><strong>Total:</strong> {{orderTotal}}</p>\n"
            '        <p><a href="{{orderTrackingUrl}}" class="cta-button">Track Your Order</a></p>',
        ),
    ),
    TemplateType.ORDER_STATUS: (
        "Order Update - {{orderId}}",
        _layout(
            "Order Status Update",
            "        <p>Hello {{firstName}},</p>\n"
            "        <p>The status of order {{orderId}} is now <strong>{{orderStatus}}</strong>.</p>\n"
            '        <p><a href="{{orderTrackingUrl}}" class="cta-button">View Your Order</a></p>',
        ),
    ),
    TemplateType.ORDER_PENDING: (
        "Order Received - Pending Processing - {{orderId}}",
        _layout(
            "Order Pending",
            _order_update("Your order has been received and is pending processing."),
        ),
    ),
    TemplateType.ORDER_PROCESSING: (
        "Order Processing - {{orderId}}",
        _layout(
            "Order Processing",
            _order_update("Your order is now being processed and will be shipped soon."),
        ),
    ),
    TemplateType.ORDER_SHIPPED: (
        "Your Order Has Shipped! {{orderId}}",
        _layout(
            "Your Order Is On Its Way",
            "        <p>Hello {{firstName}},</p>\n"
            "        <p>Order {{orderId}} has shipped.</p>\n"
            "        <p><strong>Tracking number:</strong> {{trackingNumber}}</p>\n"
            "        <p><strong>Estimated delivery:</strong> {{estimatedDelivery}}</p>\n"
            '        <p><a href="{{trackingUrl}}" class="cta-button">Track Package</a></p>',
        ),
    ),
    TemplateType.ORDER_COMPLETED: (
        "Order Delivered - {{orderId}}",
        _layout(
            "Order Delivered",
            _order_update("Your order has been delivered! Thank you for your purchase."),
        ),
    ),
    TemplateType.ORDER_CANCELLED: (
        "Order Cancelled - {{orderId}}",
        _layout(
            "Order Cancelled",
            "        <p>Hello {{firstName}},</p>\n"
            "        <p>Your order {{orderId}} has been cancelled.</p>\n"
            "        <p>A refund of {{refundAmount}} will be issued to your original payment method.</p>\n"
            '        <p>Questions? <a href="{{supportUrl}}">Contact support</a>.</p>',
        ),
    ),
    TemplateType.ORDER_RETURNED: (
        "Order Returned - {{orderId}}",
        _layout(
            "Return Processed",
            _order_update(
                "Your returned order has been processed and a refund will be "
                "initiated within 5-7 business days."
            ),
        ),
    ),
    TemplateType.NEWSLETTER: (
        "{{newsletterTitle}} - Aruviah Stores",
        _layout(
            "{{newsletterTitle}}",
            "        <p>Hi {{firstName}},</p>\n"
            "        {{newsletterContent}}\n"
            '        <p><a href="{{unsubscribeUrl}}">Unsubscribe</a></p>',
        ),
    ),
}

DEFAULT_TEMPLATES: MappingProxyType[TemplateType, Template] = MappingProxyType(
    {
        type_key: Template(type_key=type_key, subject=subject, body=body)
        for type_key, (subject, body) in _DEFAULTS.items()
    }
)


def get_default_template(type_key: TemplateType) -> Template | None:
    """Return the compiled-in template for *type_key*, if one exists."""
    return DEFAULT_TEMPLATES.get(type_key)
