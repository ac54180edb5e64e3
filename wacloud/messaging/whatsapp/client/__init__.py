"""WhatsApp client package."""

from .http_transport import (
    AiohttpWhatsAppTransport,
    WhatsAppFormDataBuilder,
    WhatsAppUrlBuilder,
)
from .replay_transport import ReplayWhatsAppTransport
from .whatsapp_client import WhatsAppClient

__all__ = [
    "WhatsAppClient",
    "AiohttpWhatsAppTransport",
    "ReplayWhatsAppTransport",
    "WhatsAppUrlBuilder",
    "WhatsAppFormDataBuilder",
]
