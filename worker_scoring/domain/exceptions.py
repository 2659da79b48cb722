"""Custom exceptions for inbound scoring payloads."""

from typing import Optional


class PayloadError(Exception):
    """Base exception for payloads that cannot be scored.

    Carries the plain-text message returned to the caller. Catching this
    exception covers every client error the request handler turns into a
    400 response.
    """

    client_message = "Invalid payload"

    def __init__(self, detail: Optional[str] = None) -> None:
        """Initialize payload error.

        Args:
            detail: Optional diagnostic detail for logs (never sent to the caller)
        """
        self.detail = detail
        super().__init__(detail or self.client_message)


class InvalidPayloadError(PayloadError):
    """Body is not valid JSON or does not map onto the payload shape."""

    client_message = "Invalid JSON payload"


class IncompletePayloadError(PayloadError):
    """Payload parsed but the job or worker object is absent."""

    client_message = "Payload must include job + worker"
