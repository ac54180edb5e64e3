"""
Enumerations shared by the WhatsApp Cloud API request and response schemas.

Every enum here is a closed set defined by the vendor contract. Values are
the exact wire strings, so members compare equal to plain strings.
"""

from enum import Enum


class MessageType(str, Enum):
    """Message discriminator values accepted by POST /messages."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACTS = "contacts"
    INTERACTIVE = "interactive"
    TEMPLATE = "template"
    REACTION = "reaction"


class InteractiveType(str, Enum):
    """Interactive object discriminator values."""

    BUTTON = "button"
    LIST = "list"
    PRODUCT = "product"
    PRODUCT_LIST = "product_list"
    CATALOG_MESSAGE = "catalog_message"
    FLOW = "flow"
    CALL_PERMISSION_REQUEST = "call_permission_request"


class MediaType(str, Enum):
    """Media categories supported by the media endpoints.

    Each category admits a closed set of MIME types and has its own upload
    size ceiling.
    """

    AUDIO = "audio"
    DOCUMENT = "document"
    IMAGE = "image"
    STICKER = "sticker"
    VIDEO = "video"

    @classmethod
    def get_max_file_size(cls, media_type: "MediaType") -> int:
        """Return the maximum upload size in bytes for a media category."""
        return _MAX_FILE_SIZES[media_type]

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "MediaType":
        """Resolve the media category owning a MIME type.

        Raises:
            ValueError: If the MIME type belongs to no category
        """
        for media_type, mime_types in _MIME_TYPES.items():
            if mime_type in mime_types:
                return media_type
        raise ValueError(f"Unsupported MIME type: {mime_type}")

    @classmethod
    def all_mime_types(cls) -> frozenset[str]:
        """Return every MIME type accepted by any category."""
        return frozenset().union(*_MIME_TYPES.values())


_MIME_TYPES: dict[MediaType, frozenset[str]] = {
    MediaType.AUDIO: frozenset(
        {"audio/aac", "audio/amr", "audio/mpeg", "audio/mp4", "audio/ogg"}
    ),
    MediaType.DOCUMENT: frozenset(
        {
            "text/plain",
            "application/vnd.ms-excel",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/vnd.ms-powerpoint",
            "application/vnd.openxmlformats-officedocument.presentationml.presentation",
            "application/pdf",
        }
    ),
    MediaType.IMAGE: frozenset({"image/jpeg", "image/png"}),
    MediaType.STICKER: frozenset({"image/webp"}),
    MediaType.VIDEO: frozenset({"video/3gpp", "video/mp4"}),
}

_MAX_FILE_SIZES: dict[MediaType, int] = {
    MediaType.AUDIO: 16 * 1024 * 1024,  # 16MB
    MediaType.DOCUMENT: 100 * 1024 * 1024,  # 100MB
    MediaType.IMAGE: 5 * 1024 * 1024,  # 5MB
    MediaType.STICKER: 500 * 1024,  # 500KB (animated), 100KB (static)
    MediaType.VIDEO: 16 * 1024 * 1024,  # 16MB
}


class TemplateCategory(str, Enum):
    """Template categories."""

    UTILITY = "UTILITY"
    MARKETING = "MARKETING"
    AUTHENTICATION = "AUTHENTICATION"


class TemplateStatus(str, Enum):
    """Template review status, assigned by the server."""

    APPROVED = "APPROVED"
    IN_APPEAL = "IN_APPEAL"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    PENDING_DELETION = "PENDING_DELETION"
    DELETED = "DELETED"
    DISABLED = "DISABLED"
    PAUSED = "PAUSED"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    ARCHIVED = "ARCHIVED"


class ParameterFormat(str, Enum):
    """How template variables are written: {{name}} or {{1}}."""

    NAMED = "NAMED"
    POSITIONAL = "POSITIONAL"


class QualityScore(str, Enum):
    """Template quality rating."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"
    UNKNOWN = "UNKNOWN"


class ParameterFormatPolicy(str, Enum):
    """How strictly template examples must agree with `parameter_format`.

    LENIENT accepts named or positional examples regardless of the declared
    format. STRICT only accepts named examples for NAMED templates and
    positional examples for POSITIONAL (or undeclared) templates.
    """

    LENIENT = "lenient"
    STRICT = "strict"
