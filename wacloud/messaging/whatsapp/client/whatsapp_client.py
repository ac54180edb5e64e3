"""
WhatsApp Cloud API client.

Key Design Decisions:
- The transport is injected; the client never opens connections itself
- Credentials and account IDs are per-call arguments, the API version is the
  only configuration
- Every operation is one validate -> transport call -> parse round trip with
  no retry; failures raise ValidationError, TransportError or
  ResponseShapeError
"""

from typing import Any

from pydantic import BaseModel

from wacloud.core.config.settings import DEFAULT_API_VERSION
from wacloud.core.logging.logger import get_logger
from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import WhatsAppHttpDownloadResponse
from wacloud.messaging.whatsapp.handlers.whatsapp_media_handler import (
    WhatsAppMediaHandler,
)
from wacloud.messaging.whatsapp.handlers.whatsapp_message_handler import (
    WhatsAppMessageHandler,
)
from wacloud.messaging.whatsapp.handlers.whatsapp_template_handler import (
    WhatsAppTemplateHandler,
)
from wacloud.messaging.whatsapp.models.basic_models import SuccessResponse
from wacloud.messaging.whatsapp.models.media_models import (
    GetMediaUrlResponse,
    UploadMediaResponse,
)
from wacloud.messaging.whatsapp.models.message_models import SendMessageResponse
from wacloud.messaging.whatsapp.models.template_management_models import (
    CreateTemplateRequest,
    CreateTemplateResponse,
    DeleteTemplateResponse,
    ListTemplatesRequest,
    ListTemplatesResponse,
)
from wacloud.schemas.core.types import ParameterFormatPolicy


class WhatsAppClient:
    """
    Typed facade over the WhatsApp Cloud API.

    Composes the template, message and media handlers behind one object.

    Example:
        async with aiohttp.ClientSession() as session:
            client = WhatsAppClient(AiohttpWhatsAppTransport(session))
            await client.send_message(
                phone_number_id,
                token,
                {"to": "15551234567", "type": "text", "text": {"body": "Hi"}},
            )
    """

    def __init__(
        self,
        transport: IWhatsAppTransport,
        api_version: str = DEFAULT_API_VERSION,
        parameter_format_policy: ParameterFormatPolicy = ParameterFormatPolicy.LENIENT,
    ):
        """Initialize WhatsApp client with dependency injection.

        Args:
            transport: Transport carrying the HTTP requests
            api_version: Graph API version used in every versioned path
            parameter_format_policy: LENIENT accepts any example style on a
                template; STRICT requires it to match the declared parameter_format
        """
        self.transport = transport
        self.api_version = api_version
        self.parameter_format_policy = ParameterFormatPolicy(parameter_format_policy)

        self.templates = WhatsAppTemplateHandler(
            transport, api_version, self.parameter_format_policy
        )
        self.messages = WhatsAppMessageHandler(transport, api_version)
        self.media = WhatsAppMediaHandler(transport, api_version)

        get_logger(__name__).debug(
            f"WhatsApp client initialized: api_version={api_version}, "
            f"parameter_format_policy={self.parameter_format_policy.value}"
        )

    # Templates

    async def create_template(
        self,
        waba_id: str,
        access_token: str,
        template: CreateTemplateRequest | dict[str, Any],
    ) -> CreateTemplateResponse:
        return await self.templates.create_template(waba_id, access_token, template)

    async def list_templates(
        self,
        waba_id: str,
        access_token: str,
        filters: ListTemplatesRequest | dict[str, Any] | None = None,
    ) -> ListTemplatesResponse:
        return await self.templates.list_templates(waba_id, access_token, filters)

    async def delete_template(
        self,
        waba_id: str,
        access_token: str,
        selector: BaseModel | dict[str, Any],
    ) -> DeleteTemplateResponse:
        return await self.templates.delete_template(waba_id, access_token, selector)

    # Messages

    async def send_message(
        self,
        phone_number_id: str,
        access_token: str,
        message: BaseModel | dict[str, Any],
    ) -> SendMessageResponse:
        return await self.messages.send_message(phone_number_id, access_token, message)

    async def mark_as_read(
        self, phone_number_id: str, access_token: str, message_id: str
    ) -> SuccessResponse:
        return await self.messages.mark_as_read(phone_number_id, access_token, message_id)

    # Media

    async def upload_media(
        self,
        phone_number_id: str,
        access_token: str,
        content: bytes,
        mime_type: str,
        filename: str | None = None,
    ) -> UploadMediaResponse:
        return await self.media.upload_media(
            phone_number_id, access_token, content, mime_type, filename
        )

    async def get_media_url(
        self,
        media_id: str,
        access_token: str,
        phone_number_id: str | None = None,
    ) -> GetMediaUrlResponse:
        return await self.media.get_media_url(media_id, access_token, phone_number_id)

    async def delete_media(
        self,
        media_id: str,
        access_token: str,
        phone_number_id: str | None = None,
    ) -> SuccessResponse:
        return await self.media.delete_media(media_id, access_token, phone_number_id)

    async def download_media(
        self, url: str, access_token: str
    ) -> WhatsAppHttpDownloadResponse:
        return await self.media.download_media(url, access_token)
