"""Pydantic v2 models for templates, mailbox messages, and pipeline results."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailroom.domain.types import RelatedType, TemplateType


class TemplateContent(BaseModel):
    """The subject/body pair an admin writes when overriding a template.

    Subject and body are always replaced together.
    """

    model_config = ConfigDict(frozen=True)

    subject: str
    body: str

    @field_validator("subject", "body")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Ensure neither half of the pair is empty or whitespace-only."""
        if not v.strip():
            raise ValueError("template subject and body must not be empty")
        return v


class Template(BaseModel):
    """The effective template for one type key.

    Compiled-in defaults have ``is_custom=False`` and no ``updated_at``.
    """

    model_config = ConfigDict(frozen=True)

    type_key: TemplateType
    subject: str
    body: str
    is_custom: bool = False
    updated_at: datetime | None = None


class RenderedTemplate(BaseModel):
    """A template with every placeholder substituted."""

    model_config = ConfigDict(frozen=True)

    type_key: TemplateType
    subject: str
    body: str


class Message(BaseModel):
    """A single item in the admin mailbox.

    Every flag is always present so section predicates are total.  Section
    membership is derived from the flags, never stored.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    to: str
    from_address: str
    subject: str
    body: str
    is_read: bool = False
    is_starred: bool = False
    is_draft: bool = False
    is_sent: bool = False
    is_snoozed: bool = False
    snooze_until: datetime | None = None
    related_type: RelatedType = RelatedType.GENERAL
    related_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @field_validator("snooze_until", "created_at", "updated_at")
    @classmethod
    def naive_times_are_utc(cls, v: datetime | None) -> datetime | None:
        """Attach UTC to naive datetimes so every message time is comparable."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @model_validator(mode="before")
    @classmethod
    def sent_messages_default_to_read(cls, data: Any) -> Any:
        """A sent copy is read unless the caller says otherwise."""
        if isinstance(data, dict) and data.get("is_sent") and "is_read" not in data:
            return {**data, "is_read": True}
        return data

    @model_validator(mode="after")
    def flags_must_be_consistent(self) -> "Message":
        """Enforce draft/sent exclusivity and the snooze pairing."""
        if self.is_draft and self.is_sent:
            raise ValueError("a message cannot be both a draft and sent")
        if self.is_snoozed and self.snooze_until is None:
            raise ValueError("snooze_until is required when is_snoozed is set")
        if not self.is_snoozed and self.snooze_until is not None:
            raise ValueError("snooze_until must be empty when is_snoozed is not set")
        return self


class SanitizedContent(BaseModel):
    """HTML made safe(r) for display, plus what was learned about it."""

    model_config = ConfigDict(frozen=True)

    clean_html: str
    is_template: bool
    template_type: str


class EmailMetadata(BaseModel):
    """Size and structure statistics for an HTML body."""

    model_config = ConfigDict(frozen=True)

    word_count: int
    image_count: int
    link_count: int
    table_count: int
    estimated_read_minutes: int


class EmailView(BaseModel):
    """Everything the mailbox viewer needs to display one body."""

    model_config = ConfigDict(frozen=True)

    safe_html: str
    original_html: str
    is_template: bool
    template_type: str
    preview: str
    metadata: EmailMetadata
    has_images: bool
    has_tables: bool
    link_count: int
    is_empty: bool


class RenderedView(BaseModel):
    """Sanitized HTML wrapped for embedding, with its stylesheet."""

    model_config = ConfigDict(frozen=True)

    html: str
    css: str


class BatchFailure(BaseModel):
    """One item of a batched mailbox mutation that did not apply."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    error: str


class BatchResult(BaseModel):
    """Outcome of a best-effort batch of independent per-message updates.

    Succeeded items are never rolled back when others fail.
    """

    succeeded: list[str] = Field(default_factory=list)
    failures: list[BatchFailure] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


class OutboundEmail(BaseModel):
    """A fully substituted email ready to hand to the transport."""

    model_config = ConfigDict(frozen=True)

    to: str
    from_address: str
    subject: str
    html_body: str
    sender_name: str | None = None
