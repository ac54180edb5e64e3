"""WhatsApp Cloud API client, transports, handlers and models."""

from .client import (
    AiohttpWhatsAppTransport,
    ReplayWhatsAppTransport,
    WhatsAppClient,
)

__all__ = ["WhatsAppClient", "AiohttpWhatsAppTransport", "ReplayWhatsAppTransport"]
