"""
wacloud messaging components.

Usage:
    from wacloud.messaging import WhatsAppClient, AiohttpWhatsAppTransport

    # Handlers, for composing a narrower client
    from wacloud.messaging.whatsapp.handlers import WhatsAppMediaHandler
"""

from .whatsapp.client import (
    AiohttpWhatsAppTransport,
    ReplayWhatsAppTransport,
    WhatsAppClient,
    WhatsAppFormDataBuilder,
    WhatsAppUrlBuilder,
)

__all__ = [
    "WhatsAppClient",
    "AiohttpWhatsAppTransport",
    "ReplayWhatsAppTransport",
    "WhatsAppUrlBuilder",
    "WhatsAppFormDataBuilder",
]
