"""Domain types, models, and errors for the mail pipeline."""

from mailroom.domain.errors import (
    InvalidMessageError,
    MailroomError,
    MessageNotFoundError,
    TemplateNotFoundError,
    TransportError,
)
from mailroom.domain.models import (
    BatchFailure,
    BatchResult,
    EmailMetadata,
    EmailView,
    Message,
    OutboundEmail,
    RenderedTemplate,
    RenderedView,
    SanitizedContent,
    Template,
    TemplateContent,
)
from mailroom.domain.types import (
    COUNTED_SECTIONS,
    ContentType,
    RelatedType,
    Section,
    SortOrder,
    TemplateType,
    parse_template_type,
)

__all__ = [
    "COUNTED_SECTIONS",
    "BatchFailure",
    "BatchResult",
    "ContentType",
    "EmailMetadata",
    "EmailView",
    "InvalidMessageError",
    "MailroomError",
    "Message",
    "MessageNotFoundError",
    "OutboundEmail",
    "RelatedType",
    "RenderedTemplate",
    "RenderedView",
    "SanitizedContent",
    "Section",
    "SortOrder",
    "Template",
    "TemplateContent",
    "TemplateNotFoundError",
    "TemplateType",
    "TransportError",
    "parse_template_type",
]
