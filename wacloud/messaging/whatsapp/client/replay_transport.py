"""
Record/replay transport.

Wraps another transport and stores every exchange as a JSON file keyed by a
digest of the request. Later identical requests are answered from disk
without touching the network, which makes test runs against the live API
reproducible. Without an inner transport the replay is read-only and
unknown requests raise ReplayCacheMissError.

Cache files are named ``<METHOD>_<sanitized path>_<sha256>.json``.
"""

import asyncio
import hashlib
import json
import re
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from wacloud.core.exceptions import ReplayCacheMissError
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

_UNSAFE_PATH_CHARS = re.compile(r"[^a-zA-Z0-9]")


class RecordedRequest(BaseModel):
    """Identity of a request. The access token is never part of it."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    version: str
    account_id: str
    query_params: dict[str, str] | None = None
    payload: dict[str, Any] | None = None
    form_fields: dict[str, str] | None = None
    file_sha256: str | None = None


class RecordedResponse(BaseModel):
    ok: bool
    body: str
    status: int | None = None


class RecordedExchange(BaseModel):
    request: RecordedRequest
    response: RecordedResponse
    cached_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


def describe_request(method: str, request: WhatsAppHttpRequest) -> RecordedRequest:
    """Reduce a transport request to the fields that identify it."""
    payload = None
    form_fields = None
    file_sha256 = None
    if isinstance(request, WhatsAppHttpPayloadRequest):
        payload = request.payload
    elif isinstance(request, WhatsAppHttpFormRequest):
        form_fields = request.fields
        file_sha256 = hashlib.sha256(request.file.content).hexdigest()

    return RecordedRequest(
        method=method,
        path=request.path,
        version=request.version,
        account_id=request.account_id,
        query_params=request.query_params,
        payload=payload,
        form_fields=form_fields,
        file_sha256=file_sha256,
    )


def cache_key(method: str, request: WhatsAppHttpRequest) -> str:
    """SHA-256 of the canonical JSON of a request.

    Keys are sorted at every level, so two requests that differ only in the
    order of their object keys share a key.
    """
    canonical = json.dumps(
        describe_request(method, request).model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ReplayWhatsAppTransport(IWhatsAppTransport):
    """Transport that answers from recorded exchanges when it can."""

    def __init__(
        self, cache_dir: str | Path, inner: IWhatsAppTransport | None = None
    ):
        """
        Args:
            cache_dir: Directory holding the recordings (created on first write)
            inner: Transport used for cache misses; None makes the replay read-only
        """
        self.cache_dir = Path(cache_dir)
        self.inner = inner
        self.logger = get_logger(__name__)
        self._file_locks: dict[str, asyncio.Lock] = {}

    def _get_file_lock(self, file_path: Path) -> asyncio.Lock:
        key = str(file_path)
        if key not in self._file_locks:
            self._file_locks[key] = asyncio.Lock()
        return self._file_locks[key]

    def cache_file_path(self, method: str, request: WhatsAppHttpRequest) -> Path:
        """Location of the recording for a request."""
        sanitized_path = _UNSAFE_PATH_CHARS.sub("_", request.path)
        key = cache_key(method, request)
        return self.cache_dir / f"{method}_{sanitized_path}_{key}.json"

    async def _read(self, file_path: Path) -> RecordedExchange | None:
        if not await asyncio.to_thread(file_path.exists):
            return None
        try:
            content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
            return RecordedExchange.model_validate_json(content)
        except (OSError, PydanticValidationError) as e:
            self.logger.warning(f"Ignoring unreadable recording {file_path}: {e}")
            return None

    async def _write(self, file_path: Path, exchange: RecordedExchange) -> None:
        await asyncio.to_thread(file_path.parent.mkdir, parents=True, exist_ok=True)
        temp_file = file_path.with_suffix(file_path.suffix + ".tmp")
        await asyncio.to_thread(
            temp_file.write_text, exchange.model_dump_json(indent=2), encoding="utf-8"
        )
        await asyncio.to_thread(temp_file.replace, file_path)

    async def _replay(
        self,
        method: str,
        request: WhatsAppHttpRequest,
        send: Callable[[], Awaitable[WhatsAppHttpResponse]] | None,
    ) -> WhatsAppHttpResponse:
        file_path = self.cache_file_path(method, request)

        async with self._get_file_lock(file_path):
            recorded = await self._read(file_path)
            if recorded is not None:
                self.logger.debug(f"Replaying {method} {request.path} from {file_path.name}")
                return WhatsAppHttpResponse(
                    ok=recorded.response.ok,
                    body=recorded.response.body,
                    status=recorded.response.status,
                )

            if send is None:
                raise ReplayCacheMissError(
                    method, request.path, cache_key(method, request)
                )

            response = await send()
            await self._write(
                file_path,
                RecordedExchange(
                    request=describe_request(method, request),
                    response=RecordedResponse(
                        ok=response.ok, body=response.body, status=response.status
                    ),
                ),
            )
            self.logger.debug(f"Recorded {method} {request.path} to {file_path.name}")
            return response

    def _delegate(self, name: str, request: WhatsAppHttpRequest):
        if self.inner is None:
            return None
        return lambda: getattr(self.inner, name)(request)

    async def get(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        return await self._replay("GET", request, self._delegate("get", request))

    async def post(self, request: WhatsAppHttpPayloadRequest) -> WhatsAppHttpResponse:
        return await self._replay("POST", request, self._delegate("post", request))

    async def post_form(self, request: WhatsAppHttpFormRequest) -> WhatsAppHttpResponse:
        return await self._replay(
            "POST", request, self._delegate("post_form", request)
        )

    async def delete(self, request: WhatsAppHttpRequest) -> WhatsAppHttpResponse:
        return await self._replay("DELETE", request, self._delegate("delete", request))

    async def download(
        self, request: WhatsAppHttpDownloadRequest
    ) -> WhatsAppHttpDownloadResponse:
        """Downloads are never recorded; they go straight to the inner transport."""
        if self.inner is None:
            raise ReplayCacheMissError("GET", request.url, "")
        return await self.inner.download(request)

    async def clear_cache(self) -> int:
        """Delete every recording. Returns the number of files removed."""
        if not await asyncio.to_thread(self.cache_dir.exists):
            return 0
        files = await asyncio.to_thread(lambda: list(self.cache_dir.glob("*.json")))
        for file_path in files:
            await asyncio.to_thread(file_path.unlink, missing_ok=True)
        return len(files)

    async def clear_cache_for_request(
        self, method: str, request: WhatsAppHttpRequest
    ) -> bool:
        """Delete the recording of one request. Returns whether one existed."""
        file_path = self.cache_file_path(method, request)
        async with self._get_file_lock(file_path):
            if not await asyncio.to_thread(file_path.exists):
                return False
            await asyncio.to_thread(file_path.unlink)
            return True
