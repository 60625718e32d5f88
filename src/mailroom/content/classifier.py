"""Keyword classifier that labels an email body with a content type.

Rules are evaluated top to bottom on the lower-cased content and the first
match wins.  The order is load-bearing: a body mentioning both an order
confirmation and a welcome gift is an ``orderConfirmation``.
"""

from __future__ import annotations

from mailroom.domain.types import ContentType

CLASSIFICATION_RULES: tuple[tuple[tuple[str, ...], ContentType], ...] = (
    (("order", "confirmation"), ContentType.ORDER_CONFIRMATION),
    (("order", "status"), ContentType.ORDER_STATUS),
    (("order", "shipped"), ContentType.ORDER_SHIPPED),
    (("vendor", "application"), ContentType.VENDOR_APPLICATION),
    (("password", "reset"), ContentType.PASSWORD_RESET),
    (("email", "verification"), ContentType.EMAIL_VERIFICATION),
    (("welcome",), ContentType.WELCOME),
    (("notification",), ContentType.NOTIFICATION),
)


def classify(content: str | None) -> ContentType:
    """Assign a content type to *content* using the ordered keyword rules.

    Args:
        content: Raw HTML or plain text.  ``None`` and empty strings are
            classified as ``general``.

    Returns:
        The first matching ``ContentType``, or ``ContentType.GENERAL``.
    """
    if not content:
        return ContentType.GENERAL

    lowered = content.lower()
    for keywords, label in CLASSIFICATION_RULES:
        if all(keyword in lowered for keyword in keywords):
            return label
    return ContentType.GENERAL
