"""Domain enumerations for templates, content labels, and mailbox sections."""

from enum import StrEnum


class TemplateType(StrEnum):
    """Closed set of transactional email templates an admin can override."""

    PASSWORD_RESET = "passwordReset"
    WELCOME = "welcome"
    ORDER_CONFIRMATION = "orderConfirmation"
    ORDER_STATUS = "orderStatus"
    ORDER_PENDING = "orderPending"
    ORDER_PROCESSING = "orderProcessing"
    ORDER_SHIPPED = "orderShipped"
    ORDER_COMPLETED = "orderCompleted"
    ORDER_CANCELLED = "orderCancelled"
    ORDER_RETURNED = "orderReturned"
    NEWSLETTER = "newsletter"


class ContentType(StrEnum):
    """Labels assigned to arbitrary HTML bodies by the keyword classifier."""

    ORDER_CONFIRMATION = "orderConfirmation"
    ORDER_STATUS = "orderStatus"
    ORDER_SHIPPED = "orderShipped"
    VENDOR_APPLICATION = "vendorApplication"
    PASSWORD_RESET = "passwordReset"
    EMAIL_VERIFICATION = "emailVerification"
    WELCOME = "welcome"
    NOTIFICATION = "notification"
    GENERAL = "general"


class Section(StrEnum):
    """Named views over the message collection."""

    INBOX = "inbox"
    UNREAD = "unread"
    STARRED = "starred"
    SNOOZED = "snoozed"
    DRAFT = "draft"
    SENT = "sent"
    ALL = "all"


class RelatedType(StrEnum):
    """What a stored message is about."""

    VENDOR_APPLICATION = "vendor_application"
    ORDER = "order"
    GENERAL = "general"
    DRAFT = "draft"


class SortOrder(StrEnum):
    """Ordering of a section by creation time."""

    NEWEST = "newest"
    OLDEST = "oldest"


# Sections that carry a badge count in the mailbox sidebar
COUNTED_SECTIONS: tuple[Section, ...] = (
    Section.INBOX,
    Section.UNREAD,
    Section.STARRED,
    Section.SNOOZED,
    Section.DRAFT,
    Section.SENT,
)


def parse_template_type(value: str) -> TemplateType | None:
    """Look up a template type by its key.

    Args:
        value: A camelCase template key such as ``"orderShipped"``.

    Returns:
        The matching ``TemplateType``, or ``None`` if the key is not part of
        the closed set.
    """
    try:
        return TemplateType(value)
    except ValueError:
        return None
