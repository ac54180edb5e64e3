"""
WhatsApp error handling utilities.

Turns failed transport responses into TransportError, parsing the vendor
error envelope when the body carries one, and classifies well-known
failures.
"""

import json

from pydantic import ValidationError as PydanticValidationError

from wacloud.core.exceptions import TransportError
from wacloud.domain.models.transport_models import WhatsAppHttpResponse
from wacloud.messaging.whatsapp.models.error_models import WhatsAppErrorDetail

# WhatsApp API error codes
ERROR_CODE_ACCESS_TOKEN = 190
ERROR_CODE_BSUID_AUTH_NOT_ALLOWED = 131062


def parse_error_envelope(body: str) -> WhatsAppErrorDetail | None:
    """Extract the vendor error from a response body.

    Accepts both ``{"error": {...}}`` and a bare error object. Returns None
    when the body is not JSON or does not look like an error.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    candidate = data.get("error", data)
    if not isinstance(candidate, dict):
        return None
    try:
        return WhatsAppErrorDetail.model_validate(candidate)
    except PydanticValidationError:
        return None


def raise_for_transport_error(response: WhatsAppHttpResponse, operation: str) -> None:
    """Raise TransportError for a non-2xx response.

    Args:
        response: Transport response
        operation: Operation description used in the message (e.g. "sending message")

    Raises:
        TransportError: If `response.ok` is False
    """
    if response.ok:
        return
    raise TransportError(
        operation,
        response.body,
        status=response.status,
        error=parse_error_envelope(response.body),
    )


def is_authentication_error(error: Exception) -> bool:
    """Check if an exception indicates an authentication failure.

    Args:
        error: The exception to check

    Returns:
        True for HTTP 401 responses and vendor code 190 (invalid or expired token)
    """
    if isinstance(error, TransportError):
        return error.status == 401 or error.code == ERROR_CODE_ACCESS_TOKEN
    error_str = str(error)
    return "401" in error_str or "Unauthorized" in error_str


def is_bsuid_auth_error(error: Exception) -> bool:
    """Check if an error is code 131062.

    Authentication templates (OTPs, verification codes) must be sent to phone
    numbers, never to business-scoped user IDs.
    """
    return (
        isinstance(error, TransportError)
        and error.code == ERROR_CODE_BSUID_AUTH_NOT_ALLOWED
    )
