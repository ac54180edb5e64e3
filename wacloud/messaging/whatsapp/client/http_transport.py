"""
aiohttp implementation of the WhatsApp transport.

Key Design Decisions:
- Pure dependency injection: the caller owns the aiohttp session
- Non-2xx responses are reported (ok=False + raw body), never raised
- Network failures (aiohttp.ClientError, timeouts) propagate unchanged
"""

from collections.abc import AsyncIterator

import aiohttp

from wacloud.core.config.settings import DEFAULT_BASE_URL
from wacloud.core.logging.logger import get_logger
from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import (
    WhatsAppHttpDownloadRequest,
    WhatsAppHttpDownloadResponse,
    WhatsAppHttpFormRequest,
    WhatsAppHttpPayloadRequest,
    WhatsAppHttpRequest,
    WhatsAppHttpResponse,
)

DOWNLOAD_CHUNK_SIZE = 64 * 1024


class WhatsAppUrlBuilder:
    """Builds URLs for WhatsApp Business API endpoints."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        """Initialize URL builder with configuration.

        Args:
            base_url: Graph API base URL
        """
        self.base_url = base_url.rstrip("/")

    def get_endpoint_url(self, request: WhatsAppHttpRequest) -> str:
        """Build `<base>/<version>/<account_id><path>` for a request."""
        return f"{self.base_url}/{request.version}/{request.account_id}{request.path}"


class WhatsAppFormDataBuilder:
    """Builds form data for WhatsApp multipart requests."""

    @staticmethod
    def build_form_data(request: WhatsAppHttpFormRequest) -> aiohttp.FormData:
        """Build FormData for a multipart upload.

        Plain fields go first, then the file part named 'file'.
        """
        form = aiohttp.FormData()

        for key, value in request.fields.items():
            form.add_field(key, str(value))

        form.add_field(
            "file",
            request.file.content,
            filename=request.file.filename,
            content_type=request.file.content_type,
        )
        return form


class AiohttpWhatsAppTransport(IWhatsAppTransport):
    """
    Graph API transport over a caller-owned aiohttp session.

    Example:
        async with aiohttp.ClientSession() as session:
            client = WhatsAppClient(AiohttpWhatsAppTransport(session))
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
    ):
        """
        Args:
            session: aiohttp session managed by the caller
            base_url: Graph API base URL
            timeout: Total timeout in seconds per request (session default if None)
        """
        self.session = session
        self.url_builder = WhatsAppUrlBuilder(base_url)
        self.form_builder = WhatsAppFormDataBuilder()
        self.timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self.logger = get_logger(__name__)

    def _get_headers(
        self, access_token: str, include_content_type: bool = True
    ) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {access_token}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    async def _send(
        self,
        method: str,
        request: WhatsAppHttpRequest,
        **kwargs,
    ) -> WhatsAppHttpResponse:
        url = self.url_builder.get_endpoint_url(request)
        self.logger.debug(f"{method} {url} params={request.query_params}")

        async with self.session.request(
            method,
            url,
            params=request.query_params,
            timeout=self.timeout,
            **kwargs,
        ) as response:
            body = await response.text()
            result = WhatsAppHttpResponse(
                ok=200 <= response.status < 300, body=body, status=response.status
            )

        if not result.ok:
            self._log_failure(method, url, result)
        return result

    def _log_failure(self, method: str, url: str, result: WhatsAppHttpResponse) -> None:
        if result.status == 401:
            self.logger.error(
                "WhatsApp access token expired or invalid - 401 Unauthorized "
                f"for {method} {url}"
            )
        else:
            self.logger.error(f"HTTP {result.status} for {method} {url}: {result.body}")

    async def get(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        return await self._send(
            "GET", request, headers=self._get_headers(request.access_token)
        )

    async def post(self, request: WhatsAppHttpPayloadRequest) -> WhatsAppHttpResponse:
        self.logger.debug(f"Payload: {request.payload}")
        return await self._send(
            "POST",
            request,
            headers=self._get_headers(request.access_token),
            json=request.payload,
        )

    async def post_form(self, request: WhatsAppHttpFormRequest) -> WhatsAppHttpResponse:
        self.logger.debug(
            f"Multipart upload {request.file.filename} "
            f"({len(request.file.content)} bytes, {request.file.content_type})"
        )
        # aiohttp sets the multipart Content-Type with its boundary
        return await self._send(
            "POST",
            request,
            headers=self._get_headers(request.access_token, include_content_type=False),
            data=self.form_builder.build_form_data(request),
        )

    async def delete(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        return await self._send(
            "DELETE", request, headers=self._get_headers(request.access_token)
        )

    async def download(
        self, request: WhatsAppHttpDownloadRequest
    ) -> WhatsAppHttpDownloadResponse:
        """Start a streaming GET of a signed media URL.

        The returned stream owns the response and releases it once exhausted
        or closed.
        """
        response = await self.session.get(
            request.url,
            headers=self._get_headers(request.access_token, include_content_type=False),
            timeout=self.timeout,
        )
        self.logger.debug(
            f"Streaming GET {request.url} started. Status: {response.status}"
        )

        content_type = response.headers.get("Content-Type", "application/octet-stream")
        if not 200 <= response.status < 300:
            try:
                body = await response.text()
            finally:
                response.release()
            result = WhatsAppHttpResponse(ok=False, body=body, status=response.status)
            self._log_failure("GET", request.url, result)
            return WhatsAppHttpDownloadResponse(
                ok=False, content_type=content_type, status=response.status, body=body
            )

        return WhatsAppHttpDownloadResponse(
            ok=True,
            content_type=content_type,
            status=response.status,
            stream=_iter_response(response),
        )


async def _iter_response(response: aiohttp.ClientResponse) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
            yield chunk
    finally:
        response.release()
