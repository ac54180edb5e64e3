"""Domain models exchanged with transports."""

from .transport_models import (
    MediaFile,
    WhatsAppHttpDownloadRequest,
    WhatsAppHttpDownloadResponse,
    WhatsAppHttpFormRequest,
    WhatsAppHttpPayloadRequest,
    WhatsAppHttpRequest,
    WhatsAppHttpResponse,
)

__all__ = [
    "MediaFile",
    "WhatsAppHttpRequest",
    "WhatsAppHttpPayloadRequest",
    "WhatsAppHttpFormRequest",
    "WhatsAppHttpResponse",
    "WhatsAppHttpDownloadRequest",
    "WhatsAppHttpDownloadResponse",
]
