"""WhatsApp models package."""

from .basic_models import (
    BaseMessage,
    ContextObject,
    MarkAsReadRequest,
    ReactionMessage,
    SuccessResponse,
    TextMessage,
)
from .error_models import WhatsAppErrorDetail, WhatsAppErrorResponse
from .interactive_models import (
    InteractiveButton,
    InteractiveCallPermission,
    InteractiveCatalog,
    InteractiveFlow,
    InteractiveList,
    InteractiveMessage,
    InteractiveObject,
    InteractiveProduct,
    InteractiveProductList,
)
from .media_models import (
    AudioMessage,
    DocumentMessage,
    DownloadMediaRequest,
    GetMediaUrlResponse,
    ImageMessage,
    MediaLookupRequest,
    MediaObject,
    StickerMessage,
    UploadMediaRequest,
    UploadMediaResponse,
    VideoMessage,
)
from .message_models import Message, SendMessageRequest, SendMessageResponse
from .specialized_models import Contact, ContactsMessage, LocationMessage
from .template_management_models import (
    CreateTemplateRequest,
    CreateTemplateResponse,
    DeleteTemplateRequest,
    DeleteTemplateResponse,
    ListTemplatesRequest,
    ListTemplatesResponse,
    Template,
    TemplateDefinitionComponent,
)
from .template_models import TemplateMessage, TemplateObject

__all__ = [
    "BaseMessage",
    "ContextObject",
    "TextMessage",
    "ReactionMessage",
    "MarkAsReadRequest",
    "SuccessResponse",
    "WhatsAppErrorDetail",
    "WhatsAppErrorResponse",
    "InteractiveObject",
    "InteractiveButton",
    "InteractiveList",
    "InteractiveProduct",
    "InteractiveProductList",
    "InteractiveCatalog",
    "InteractiveFlow",
    "InteractiveCallPermission",
    "InteractiveMessage",
    "MediaObject",
    "ImageMessage",
    "VideoMessage",
    "AudioMessage",
    "DocumentMessage",
    "StickerMessage",
    "UploadMediaRequest",
    "UploadMediaResponse",
    "MediaLookupRequest",
    "GetMediaUrlResponse",
    "DownloadMediaRequest",
    "Contact",
    "ContactsMessage",
    "LocationMessage",
    "TemplateObject",
    "TemplateMessage",
    "Message",
    "SendMessageRequest",
    "SendMessageResponse",
    "Template",
    "TemplateDefinitionComponent",
    "CreateTemplateRequest",
    "CreateTemplateResponse",
    "ListTemplatesRequest",
    "ListTemplatesResponse",
    "DeleteTemplateRequest",
    "DeleteTemplateResponse",
]
