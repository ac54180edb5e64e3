"""WhatsApp utility functions and helpers."""

from wacloud.messaging.whatsapp.utils.error_helpers import (
    is_authentication_error,
    parse_error_envelope,
    raise_for_transport_error,
)

__all__ = [
    "is_authentication_error",
    "parse_error_envelope",
    "raise_for_transport_error",
]
