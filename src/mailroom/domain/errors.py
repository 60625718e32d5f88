"""Domain-specific exception classes for the mail pipeline."""


class MailroomError(Exception):
    """Base class for all domain errors in the mail pipeline."""


class TemplateNotFoundError(MailroomError):
    """Raised by callers that require a template the store does not have.

    The template store itself never raises this; it returns ``None``.

    Attributes:
        type_key: The template key that was requested.
    """

    def __init__(self, type_key: str) -> None:
        self.type_key = type_key
        super().__init__(f"No template exists for type '{type_key}'")


class MessageNotFoundError(MailroomError):
    """Raised when a mailbox operation targets a message id that does not exist.

    Attributes:
        message_id: The id that was not found.
    """

    def __init__(self, message_id: str) -> None:
        self.message_id = message_id
        super().__init__(f"Message '{message_id}' does not exist")


class InvalidMessageError(MailroomError):
    """Raised when a message operation would break a mailbox invariant."""


class TransportError(MailroomError):
    """Raised when the outbound email provider rejects or fails a handoff.

    Attributes:
        status_code: HTTP status returned by the provider, or ``None`` for
            network-level failures.
        detail: Provider error message.
    """

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"Email transport failed: {prefix}{detail}")
