"""
Pytest configuration and common fixtures for wacloud tests.

Provides a recording stub transport, clients wired to it and sample payloads
shared by the test modules.
"""

import json
from collections.abc import AsyncIterator
from typing import Any

import pytest

from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import (
    WhatsAppHttpDownloadRequest,
    WhatsAppHttpDownloadResponse,
    WhatsAppHttpRequest,
    WhatsAppHttpResponse,
)
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from wacloud.schemas.core.types import ParameterFormatPolicy


async def _chunks(*parts: bytes) -> AsyncIterator[bytes]:
    for part in parts:
        yield part


class StubTransport(IWhatsAppTransport):
    """Transport double that records every call and answers from a queue.

    When the queue is empty the default response (``{}`` with ok=True) is used.
    """

    def __init__(self):
        self.calls: list[tuple[str, Any]] = []
        self.responses: list[WhatsAppHttpResponse] = []
        self.downloads: list[WhatsAppHttpDownloadResponse] = []

    def respond(self, body: Any, ok: bool = True, status: int | None = None) -> None:
        if not isinstance(body, str):
            body = json.dumps(body)
        self.responses.append(
            WhatsAppHttpResponse(ok=ok, body=body, status=status or (200 if ok else 400))
        )

    def respond_download(
        self, *chunks: bytes, content_type: str = "image/jpeg", ok: bool = True, body: str = ""
    ) -> None:
        self.downloads.append(
            WhatsAppHttpDownloadResponse(
                ok=ok,
                content_type=content_type,
                stream=_chunks(*chunks) if ok else None,
                status=200 if ok else 404,
                body=body,
            )
        )

    def _next(self) -> WhatsAppHttpResponse:
        if self.responses:
            return self.responses.pop(0)
        return WhatsAppHttpResponse(ok=True, body="{}", status=200)

    @property
    def last_request(self) -> Any:
        return self.calls[-1][1]

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    async def get(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        self.calls.append(("get", request))
        return self._next()

    async def post(self, request):
        self.calls.append(("post", request))
        return self._next()

    async def post_form(self, request):
        self.calls.append(("post_form", request))
        return self._next()

    async def delete(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        self.calls.append(("delete", request))
        return self._next()

    async def download(
        self, request: WhatsAppHttpDownloadRequest
    ) -> WhatsAppHttpDownloadResponse:
        self.calls.append(("download", request))
        return self.downloads.pop(0)


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def client(transport: StubTransport) -> WhatsAppClient:
    return WhatsAppClient(transport)


@pytest.fixture
def strict_client(transport: StubTransport) -> WhatsAppClient:
    return WhatsAppClient(
        transport, parameter_format_policy=ParameterFormatPolicy.STRICT
    )


@pytest.fixture
def send_response() -> dict:
    return {
        "messaging_product": "whatsapp",
        "contacts": [{"input": "15551234567", "wa_id": "15551234567"}],
        "messages": [{"id": "wamid.HBgLMTU1NTEyMzQ1NjcVAgARGBI", "message_status": "accepted"}],
    }


@pytest.fixture
def template_definition() -> dict:
    """NAMED utility template with body examples, a footer and two buttons."""
    return {
        "name": "order_shipped",
        "language": "en_US",
        "category": "UTILITY",
        "parameter_format": "NAMED",
        "components": [
            {"type": "HEADER", "format": "TEXT", "text": "Order update"},
            {
                "type": "BODY",
                "text": "Hi {{first_name}}, order {{order_id}} has shipped.",
                "example": {
                    "body_text_named_params": [
                        {"param_name": "first_name", "example": "Pablo"},
                        {"param_name": "order_id", "example": "860198-230332"},
                    ]
                },
            },
            {"type": "FOOTER", "text": "Reply STOP to opt out"},
            {
                "type": "BUTTONS",
                "buttons": [
                    {"type": "QUICK_REPLY", "text": "Track order"},
                    {
                        "type": "URL",
                        "text": "Open store",
                        "url": "https://shop.example.com/orders/{{1}}",
                        "example": ["https://shop.example.com/orders/860198"],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def media_url_response() -> dict:
    return {
        "messaging_product": "whatsapp",
        "url": "https://lookaside.fbsbx.com/whatsapp_business/attachments/?mid=1037543291543636",
        "mime_type": "image/jpeg",
        "sha256": "ab5f4ff71e6f3fd4b1d6a0de5c9f0e4d2a8e8cfdc5fdd4d2c1f1d3f5b6a7c8d9",
        "file_size": 303833,
        "id": "1037543291543636",
    }
