"""Outbound transport interface consumed by the mailer."""

from __future__ import annotations

from typing import Protocol

from mailroom.domain.models import OutboundEmail


class EmailTransport(Protocol):
    """Anything that can hand a rendered email off for delivery."""

    def send(self, email: OutboundEmail) -> str:
        """Deliver *email* and return the provider's message id."""
        ...
