"""
WhatsApp media handler.

Based on WhatsApp Cloud API endpoints:
- POST /PHONE_NUMBER_ID/media (upload)
- GET /MEDIA_ID (signed URL + metadata)
- DELETE /MEDIA_ID (delete)
- GET <signed URL> (download)
"""

import mimetypes

from wacloud.core.exceptions import TransportError, ValidationError, ValidationIssue
from wacloud.core.logging.context import account_context
from wacloud.core.logging.logger import get_logger
from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import (
    MediaFile,
    WhatsAppHttpDownloadRequest,
    WhatsAppHttpDownloadResponse,
    WhatsAppHttpFormRequest,
    WhatsAppHttpRequest,
)
from wacloud.messaging.whatsapp.models.basic_models import SuccessResponse
from wacloud.messaging.whatsapp.models.media_models import (
    DownloadMediaRequest,
    GetMediaUrlResponse,
    MediaLookupRequest,
    UploadMediaRequest,
    UploadMediaResponse,
)
from wacloud.messaging.whatsapp.utils.error_helpers import (
    parse_error_envelope,
    raise_for_transport_error,
)
from wacloud.schemas.core.types import MediaType
from wacloud.schemas.core.validation import (
    dump_query,
    dump_request,
    parse_response,
    validate_request,
)

MEDIA_PATH = "/media"


class WhatsAppMediaHandler:
    """
    Handler for WhatsApp media operations.

    Uploads are scoped to the sending phone number; lookups and deletes are
    addressed by media ID.
    """

    def __init__(self, transport: IWhatsAppTransport, api_version: str):
        """
        Args:
            transport: Transport carrying the HTTP requests
            api_version: Graph API version, e.g. "v24.0"
        """
        self.transport = transport
        self.api_version = api_version
        self.logger = get_logger(__name__)

    def validate_file_size(self, file_size: int, mime_type: str) -> None:
        """Check a file against the size limit of its media category.

        Raises:
            ValidationError: If the file is empty or too large
        """
        media_type = MediaType.from_mime_type(mime_type)
        max_size = MediaType.get_max_file_size(media_type)
        if file_size == 0:
            rule, message = "file_empty", "File is empty"
        elif file_size > max_size:
            rule, message = (
                "file_too_large",
                f"File size {file_size} bytes exceeds the {max_size} bytes "
                f"limit for {media_type.value}",
            )
        else:
            return
        raise ValidationError(
            "UploadMediaRequest", [ValidationIssue(path="file", rule=rule, message=message)]
        )

    async def upload_media(
        self,
        phone_number_id: str,
        access_token: str,
        content: bytes,
        mime_type: str,
        filename: str | None = None,
    ) -> UploadMediaResponse:
        """
        Upload media to WhatsApp servers.

        Args:
            phone_number_id: Phone number ID the media is uploaded for
            access_token: Bearer token
            content: File bytes
            mime_type: MIME type of the file (must be supported by WhatsApp)
            filename: Name sent with the file part (derived from the MIME type if None)

        Returns:
            The media ID, usable in media messages for 30 days

        Raises:
            ValidationError: If the MIME type is unsupported or the size is out of range
            TransportError: If the API rejects the upload
        """
        validated = validate_request(UploadMediaRequest, {"type": mime_type})
        self.validate_file_size(len(content), validated.type)

        if not filename:
            extension = mimetypes.guess_extension(validated.type) or ""
            filename = f"{validated.media_type.value}{extension}"

        with account_context(phone_number_id):
            self.logger.debug(
                f"Uploading {filename} ({len(content)} bytes, {validated.type})"
            )
            response = await self.transport.post_form(
                WhatsAppHttpFormRequest(
                    path=MEDIA_PATH,
                    version=self.api_version,
                    account_id=phone_number_id,
                    access_token=access_token,
                    fields=dump_request(validated),
                    file=MediaFile(
                        filename=filename, content=content, content_type=validated.type
                    ),
                )
            )
            raise_for_transport_error(response, "uploading media")
            result = parse_response(UploadMediaResponse, response.body, "uploading media")
            self.logger.info(f"Media uploaded successfully: {result.id}")
            return result

    async def get_media_url(
        self,
        media_id: str,
        access_token: str,
        phone_number_id: str | None = None,
    ) -> GetMediaUrlResponse:
        """
        Retrieve the signed download URL and metadata of uploaded media.

        The URL expires after 5 minutes. When `phone_number_id` is given the
        API checks the media belongs to that phone number.
        """
        validated = validate_request(
            MediaLookupRequest, {"phone_number_id": phone_number_id}
        )

        with account_context(media_id):
            response = await self.transport.get(
                WhatsAppHttpRequest(
                    path="",
                    version=self.api_version,
                    account_id=media_id,
                    access_token=access_token,
                    query_params=dump_query(validated),
                )
            )
            raise_for_transport_error(response, "getting media URL")
            return parse_response(GetMediaUrlResponse, response.body, "getting media URL")

    async def delete_media(
        self,
        media_id: str,
        access_token: str,
        phone_number_id: str | None = None,
    ) -> SuccessResponse:
        """Delete uploaded media."""
        validated = validate_request(
            MediaLookupRequest, {"phone_number_id": phone_number_id}
        )

        with account_context(media_id):
            self.logger.debug(f"Deleting media {media_id}")
            response = await self.transport.delete(
                WhatsAppHttpRequest(
                    path="",
                    version=self.api_version,
                    account_id=media_id,
                    access_token=access_token,
                    query_params=dump_query(validated),
                )
            )
            raise_for_transport_error(response, "deleting media")
            return parse_response(SuccessResponse, response.body, "deleting media")

    async def download_media(
        self, url: str, access_token: str
    ) -> WhatsAppHttpDownloadResponse:
        """
        Download media from a signed URL returned by `get_media_url`.

        Returns:
            The content type and a byte stream. Consume it with `read()` or
            iterate `stream`; close it with `aclose()` when abandoning it.

        Raises:
            ValidationError: If the URL is not an https URL
            TransportError: If the download is rejected
        """
        validated = validate_request(DownloadMediaRequest, {"url": url})

        self.logger.debug(f"Downloading media from {validated.url}")
        response = await self.transport.download(
            WhatsAppHttpDownloadRequest(url=validated.url, access_token=access_token)
        )
        if not response.ok:
            raise TransportError(
                "downloading media",
                response.body,
                status=response.status,
                error=parse_error_envelope(response.body),
            )
        return response
