"""
Transport interface consumed by the WhatsApp client.

The client never talks HTTP itself. It builds request descriptions and
relies on an implementation of this interface to carry them:

- get / delete: query parameters only
- post: JSON payload
- post_form: multipart payload (media upload)
- download: absolute URL, bearer token, no versioned path

Implementations report non-2xx results with ``ok=False`` and the raw body;
they do not raise for HTTP error statuses. Timeouts and cancellation are
theirs to handle.
"""

from abc import ABC, abstractmethod

from wacloud.domain.models.transport_models import (
    WhatsAppHttpDownloadRequest,
    WhatsAppHttpDownloadResponse,
    WhatsAppHttpFormRequest,
    WhatsAppHttpPayloadRequest,
    WhatsAppHttpRequest,
    WhatsAppHttpResponse,
)


class IWhatsAppTransport(ABC):
    """Capability set the client requires from an HTTP layer."""

    @abstractmethod
    async def get(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        """Send a GET request with optional query parameters."""
        pass

    @abstractmethod
    async def post(self, request: WhatsAppHttpPayloadRequest) -> WhatsAppHttpResponse:
        """Send a POST request with a JSON body."""
        pass

    @abstractmethod
    async def post_form(self, request: WhatsAppHttpFormRequest) -> WhatsAppHttpResponse:
        """Send a multipart/form-data POST request."""
        pass

    @abstractmethod
    async def delete(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        """Send a DELETE request with optional query parameters."""
        pass

    @abstractmethod
    async def download(
        self, request: WhatsAppHttpDownloadRequest
    ) -> WhatsAppHttpDownloadResponse:
        """Stream the content of an absolute URL."""
        pass
