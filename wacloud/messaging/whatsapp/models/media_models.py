"""
Media models for WhatsApp messaging.

Covers the media reference embedded in image/video/audio/document/sticker
messages (and in interactive headers and template parameters), and the
request/response shapes of the media endpoints:

- POST /PHONE_NUMBER_ID/media (upload)
- GET /MEDIA_ID (signed URL + metadata)
- DELETE /MEDIA_ID (delete)
"""

from typing import Annotated, Literal, Self

from pydantic import AfterValidator, Field, model_validator

from wacloud.schemas.core.base_models import RequestModel, ResponseModel
from wacloud.schemas.core.types import MediaType

from .basic_models import MESSAGING_PRODUCT, BaseMessage

HTTP_URL_PATTERN = r"^https?://\S+$"


def _check_mime_type(value: str) -> str:
    supported = MediaType.all_mime_types()
    if value not in supported:
        raise ValueError(
            f"Unsupported MIME type: {value}. Supported types: {sorted(supported)}"
        )
    return value


MediaMimeType = Annotated[str, AfterValidator(_check_mime_type)]


class MediaObject(RequestModel):
    """Reference to media: an uploaded media ID or a public link, never both."""

    id: str | None = Field(None, min_length=1, description="Uploaded media ID")
    link: str | None = Field(
        None, pattern=HTTP_URL_PATTERN, description="Public http(s) URL of the media"
    )
    caption: str | None = Field(None, max_length=1024)
    filename: str | None = Field(None, description="File name shown for documents")
    provider: str | None = None

    @model_validator(mode="after")
    def check_single_source(self) -> Self:
        if (self.id is None) == (self.link is None):
            raise ValueError("Exactly one of 'id' or 'link' must be provided")
        return self


def _reject_caption(media: MediaObject) -> MediaObject:
    if media.caption is not None:
        raise ValueError("Caption not supported for this media type")
    return media


UncaptionedMediaObject = Annotated[MediaObject, AfterValidator(_reject_caption)]


class ImageMessage(BaseMessage):
    type: Literal["image"]
    image: MediaObject


class VideoMessage(BaseMessage):
    type: Literal["video"]
    video: MediaObject


class AudioMessage(BaseMessage):
    type: Literal["audio"]
    audio: UncaptionedMediaObject


class DocumentMessage(BaseMessage):
    type: Literal["document"]
    document: MediaObject


class StickerMessage(BaseMessage):
    type: Literal["sticker"]
    sticker: UncaptionedMediaObject


class UploadMediaRequest(RequestModel):
    """Form fields sent alongside the uploaded file."""

    messaging_product: Literal["whatsapp"] = MESSAGING_PRODUCT
    type: MediaMimeType = Field(..., description="MIME type of the uploaded file")

    @property
    def media_type(self) -> MediaType:
        """Media category of the declared MIME type."""
        return MediaType.from_mime_type(self.type)


class UploadMediaResponse(ResponseModel):
    id: str


class MediaLookupRequest(RequestModel):
    """Optional query for GET/DELETE /MEDIA_ID.

    When `phone_number_id` is set, the server checks the media belongs to it.
    """

    phone_number_id: str | None = None


class GetMediaUrlResponse(ResponseModel):
    """Signed download URL and metadata for an uploaded media object."""

    messaging_product: Literal["whatsapp"]
    url: str
    mime_type: MediaMimeType
    sha256: str
    file_size: int
    id: str


class DownloadMediaRequest(RequestModel):
    url: str = Field(..., pattern=r"^https://\S+$", description="Signed media URL")
