"""Brevo transactional-email transport.

Hands a fully substituted email to ``POST /smtp/email``.  Failures surface as
``TransportError``; nothing here retries.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from mailroom.domain.errors import TransportError
from mailroom.domain.models import OutboundEmail

logger = structlog.get_logger()

BREVO_API_BASE = "https://api.brevo.com/v3"
DEFAULT_SENDER_NAME = "Aruviah Stores"


class BrevoTransport:
    """Send transactional emails through the Brevo HTTP API.

    Args:
        api_key: Brevo API key, sent in the ``api-key`` header.
        client: Optional preconfigured ``httpx.Client`` (used by tests to
            inject a mock transport).  When omitted one is created.
        base_url: API root, without a trailing slash.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        *,
        client: httpx.Client | None = None,
        base_url: str = BREVO_API_BASE,
        timeout: float = 30.0,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._headers = {"api-key": api_key, "Content-Type": "application/json"}

    def send(self, email: OutboundEmail) -> str:
        """Hand *email* off for delivery.

        Args:
            email: Recipient, sender, subject, and HTML body.

        Returns:
            The provider's message id (empty string if none was returned).

        Raises:
            TransportError: On network failure or a non-2xx response.
        """
        payload: dict[str, Any] = {
            "to": [{"email": email.to}],
            "sender": {
                "name": email.sender_name or DEFAULT_SENDER_NAME,
                "email": email.from_address,
            },
            "subject": email.subject,
            "htmlContent": email.html_body,
        }

        try:
            response = self._client.post(
                f"{self._base_url}/smtp/email",
                json=payload,
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            logger.error("email_transport_unreachable", to=email.to, error=str(exc))
            raise TransportError(str(exc)) from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.error(
                "email_transport_rejected",
                to=email.to,
                status_code=response.status_code,
                detail=detail,
            )
            raise TransportError(detail, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = {}
        message_id = str(body.get("messageId", "")) if isinstance(body, dict) else ""
        logger.info("email_handed_off", to=email.to, provider_message_id=message_id)
        return message_id

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason_phrase
