"""
Transport request and response descriptions.

The client builds these platform-agnostic descriptions and hands them to an
IWhatsAppTransport. The transport decides how they travel over the wire.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WhatsAppHttpRequest(BaseModel):
    """Versioned Graph API request scoped to one account.

    The full URL is ``<base>/<version>/<account_id><path>``.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path after the account ID, e.g. /messages")
    version: str = Field(..., description="API version, e.g. v24.0")
    account_id: str = Field(
        ..., description="WABA ID, phone number ID or media ID the call is scoped to"
    )
    access_token: str = Field(..., repr=False)
    query_params: dict[str, str] | None = None


class WhatsAppHttpPayloadRequest(WhatsAppHttpRequest):
    """Request with a JSON body."""

    payload: dict[str, Any]


class MediaFile(BaseModel):
    """File part of a multipart upload."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(..., repr=False)
    content_type: str


class WhatsAppHttpFormRequest(WhatsAppHttpRequest):
    """Multipart request: plain form fields plus one file part named 'file'."""

    fields: dict[str, str]
    file: MediaFile


class WhatsAppHttpResponse(BaseModel):
    """Outcome of a request: `ok` is True only for 2xx statuses."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    body: str
    status: int | None = None


class WhatsAppHttpDownloadRequest(BaseModel):
    """Unversioned, bearer-authenticated GET of an absolute URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    access_token: str = Field(..., repr=False)


@dataclass
class WhatsAppHttpDownloadResponse:
    """Outcome of a download.

    On success `stream` yields the raw bytes; it must be consumed (or
    closed with `aclose`) to release the connection. On failure `body` holds
    the response text.
    """

    ok: bool
    content_type: str
    stream: AsyncIterator[bytes] | None = None
    status: int | None = None
    body: str = ""
    _consumed: bool = field(default=False, repr=False)

    async def read(self) -> bytes:
        """Drain the stream into memory."""
        if self.stream is None:
            return b""
        if self._consumed:
            raise RuntimeError("Download stream already consumed")
        self._consumed = True
        return b"".join([chunk async for chunk in self.stream])

    async def aclose(self) -> None:
        """Release the underlying connection without reading the body."""
        if self.stream is not None and hasattr(self.stream, "aclose"):
            await self.stream.aclose()
        self._consumed = True
