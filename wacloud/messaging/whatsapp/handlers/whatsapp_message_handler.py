"""
WhatsApp message handler.

Sends any of the outgoing message types (text, media, location, contacts,
interactive, template, reaction) and read receipts through
POST /PHONE_NUMBER_ID/messages.
"""

from typing import Any

from pydantic import BaseModel

from wacloud.core.logging.context import account_context
from wacloud.core.logging.logger import get_logger
from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import WhatsAppHttpPayloadRequest
from wacloud.messaging.whatsapp.models.basic_models import (
    MarkAsReadRequest,
    SuccessResponse,
)
from wacloud.messaging.whatsapp.models.message_models import (
    Message,
    SendMessageResponse,
)
from wacloud.messaging.whatsapp.utils.error_helpers import raise_for_transport_error
from wacloud.schemas.core.validation import dump_request, parse_response, validate_request

MESSAGES_PATH = "/messages"


class WhatsAppMessageHandler:
    """Handler for POST /PHONE_NUMBER_ID/messages."""

    def __init__(self, transport: IWhatsAppTransport, api_version: str):
        self.transport = transport
        self.api_version = api_version
        self.logger = get_logger(__name__)

    async def _post(
        self, phone_number_id: str, access_token: str, payload: dict[str, Any]
    ):
        return await self.transport.post(
            WhatsAppHttpPayloadRequest(
                path=MESSAGES_PATH,
                version=self.api_version,
                account_id=phone_number_id,
                access_token=access_token,
                payload=payload,
            )
        )

    async def send_message(
        self,
        phone_number_id: str,
        access_token: str,
        message: BaseModel | dict[str, Any],
    ) -> SendMessageResponse:
        """
        Send a message.

        Args:
            phone_number_id: Sending phone number ID
            access_token: Bearer token
            message: Any message variant, selected by its `type` field

        Returns:
            Recipient resolution and the ID of the accepted message

        Raises:
            ValidationError: If the message is malformed
            TransportError: If the API rejects the message
            ResponseShapeError: If the API answer is not a send result
        """
        validated = validate_request(Message, message, name="Message")

        with account_context(phone_number_id):
            self.logger.debug(f"Sending {validated.type} message to {validated.to}")
            response = await self._post(
                phone_number_id, access_token, dump_request(validated)
            )
            raise_for_transport_error(response, "sending message")
            result = parse_response(SendMessageResponse, response.body, "sending message")
            self.logger.info(
                f"{validated.type.capitalize()} message sent to {validated.to}: "
                f"{result.message_id}"
            )
            return result

    async def mark_as_read(
        self, phone_number_id: str, access_token: str, message_id: str
    ) -> SuccessResponse:
        """Mark a received message (and every earlier one) as read."""
        validated = validate_request(MarkAsReadRequest, {"message_id": message_id})

        with account_context(phone_number_id):
            self.logger.debug(f"Marking message {message_id} as read")
            response = await self._post(
                phone_number_id, access_token, dump_request(validated)
            )
            raise_for_transport_error(response, "marking message as read")
            return parse_response(
                SuccessResponse, response.body, "marking message as read"
            )
