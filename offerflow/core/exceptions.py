from __future__ import annotations

from typing import Any


class OfferError(Exception):
    """Error that maps directly onto an ``{"error", "details"}`` response."""

    status_code = 500

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class OfferValidationError(OfferError):
    """Client supplied an unusable request. Raised before any CRM call."""

    status_code = 400


class MethodNotAllowedError(OfferError):
    status_code = 405

    def __init__(self, message: str = "Método no permitido") -> None:
        super().__init__(message)


class UpstreamError(OfferError):
    """The CRM call behind an operation failed."""

    status_code = 500


class CRMRequestError(Exception):
    """Raised by CRM clients for HTTP, transport and decoding failures.

    Args:
        status_code: Upstream HTTP status, or None when no response arrived.
        details: Upstream error payload (parsed JSON when available) or message.
    """

    def __init__(self, status_code: int | None, details: Any) -> None:
        super().__init__(f"CRM request failed ({status_code}): {details}")
        self.status_code = status_code
        self.details = details
