"""
wacloud - typed client for the WhatsApp Cloud API.

Request payloads are validated before anything is sent and responses are
parsed into typed models. HTTP is delegated to a pluggable transport.

Clean Import Interface:
- The client, the transports and the exception hierarchy at top level
- Request/response models via wacloud.messaging.whatsapp.models
"""

from .core.config.settings import settings
from .core.exceptions import (
    ReplayCacheMissError,
    ResponseShapeError,
    TransportError,
    ValidationError,
    WhatsAppClientError,
)
from .domain.interfaces.transport_interface import IWhatsAppTransport
from .messaging.whatsapp.client import (
    AiohttpWhatsAppTransport,
    ReplayWhatsAppTransport,
    WhatsAppClient,
)
from .schemas.core.types import ParameterFormatPolicy

# Dynamic version from pyproject.toml
__version__ = settings.version

__all__ = [
    "WhatsAppClient",
    "IWhatsAppTransport",
    "AiohttpWhatsAppTransport",
    "ReplayWhatsAppTransport",
    "ParameterFormatPolicy",
    "WhatsAppClientError",
    "ValidationError",
    "TransportError",
    "ResponseShapeError",
    "ReplayCacheMissError",
]
