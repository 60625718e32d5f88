"""Outbound email transports."""

from mailroom.transport.base import EmailTransport
from mailroom.transport.brevo import BrevoTransport

__all__ = [
    "BrevoTransport",
    "EmailTransport",
]
