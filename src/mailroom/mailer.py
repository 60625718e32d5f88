"""Render templates, hand them to the transport, and keep a sent copy.

The sent copy is written only after the transport accepts the email, so a
failed handoff leaves no trace in the mailbox.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from mailroom.domain.errors import InvalidMessageError, MessageNotFoundError, TemplateNotFoundError
from mailroom.domain.models import Message, OutboundEmail
from mailroom.domain.types import RelatedType
from mailroom.inbox.store import MessageStore
from mailroom.templates.renderer import render_template
from mailroom.templates.store import TemplateStore
from mailroom.transport.base import EmailTransport

logger = structlog.get_logger()


class Mailer:
    """Send templated emails and drafts, recording each in the mailbox.

    Args:
        templates: Where templates are resolved.
        messages: Where sent copies are stored.
        transport: Delivery backend.
        from_address: ``From`` address for every outgoing email.
        sender_name: Display name for the sender.
    """

    def __init__(
        self,
        templates: TemplateStore,
        messages: MessageStore,
        transport: EmailTransport,
        *,
        from_address: str,
        sender_name: str | None = None,
    ) -> None:
        self._templates = templates
        self._messages = messages
        self._transport = transport
        self._from_address = from_address
        self._sender_name = sender_name

    def send_template(
        self,
        type_key: str,
        to: str,
        context: Mapping[str, str],
        *,
        related_type: RelatedType | str = RelatedType.GENERAL,
        related_data: dict[str, Any] | None = None,
    ) -> Message:
        """Render *type_key* with *context*, send it to *to*, and store a sent copy.

        Raises:
            TemplateNotFoundError: If no template exists for *type_key*.
            TransportError: If the transport rejects the email.  No copy is
                stored in that case.
        """
        rendered = render_template(self._templates, type_key, context)
        if rendered is None:
            raise TemplateNotFoundError(type_key)

        provider_id = self._transport.send(
            OutboundEmail(
                to=to,
                from_address=self._from_address,
                subject=rendered.subject,
                html_body=rendered.body,
                sender_name=self._sender_name,
            )
        )

        data = dict(related_data or {})
        data.setdefault("templateType", rendered.type_key.value)
        if provider_id:
            data.setdefault("providerMessageId", provider_id)

        sent = self._messages.save_message(
            to=to,
            subject=rendered.subject,
            body=rendered.body,
            from_address=self._from_address,
            related_type=related_type,
            related_data=data,
            is_sent=True,
        )
        logger.info("template_email_sent", type_key=rendered.type_key.value, message_id=sent.id)
        return sent

    def send_draft(self, message_id: str) -> Message:
        """Deliver a stored draft and mark it sent.

        Raises:
            MessageNotFoundError: If *message_id* does not exist.
            InvalidMessageError: If the message is not a draft or has no
                recipient.
            TransportError: If the transport rejects the email.  The draft is
                left unchanged in that case.
        """
        draft = self._messages.get(message_id)
        if draft is None:
            raise MessageNotFoundError(message_id)
        if not draft.is_draft:
            raise InvalidMessageError(f"Message '{message_id}' is not a draft")
        if not draft.to.strip():
            raise InvalidMessageError(f"Draft '{message_id}' has no recipient")

        self._transport.send(
            OutboundEmail(
                to=draft.to,
                from_address=draft.from_address,
                subject=draft.subject,
                html_body=draft.body,
                sender_name=self._sender_name,
            )
        )
        sent = self._messages.mark_sent(message_id)
        logger.info("draft_sent", message_id=message_id)
        return sent
