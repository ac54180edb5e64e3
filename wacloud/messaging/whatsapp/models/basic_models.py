"""
Basic message models for WhatsApp messaging.

Holds the fields shared by every outgoing message plus the plain text and
reaction payloads, and the read-receipt request.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import Field, model_validator

from wacloud.schemas.core.base_models import RequestModel, ResponseModel
from wacloud.schemas.core.types import MessageType

MESSAGING_PRODUCT = "whatsapp"

# Top-level keys that carry a type-specific payload
MESSAGE_PAYLOAD_FIELDS = frozenset(message_type.value for message_type in MessageType)


class ContextObject(RequestModel):
    """Reply context pointing at a previous message."""

    message_id: str = Field(..., min_length=1, description="ID of the message replied to")


class BaseMessage(RequestModel):
    """Fields common to every outgoing message.

    Subclasses add a literal `type` and the payload field named after it.
    A payload key belonging to a different message type is rejected so that
    exactly one payload travels with each message.
    """

    messaging_product: Literal["whatsapp"] = Field(
        MESSAGING_PRODUCT, description="Product identifier, always 'whatsapp'"
    )
    recipient_type: Literal["individual"] | None = None
    to: str = Field(..., min_length=1, description="Recipient phone number or WA ID")
    context: ContextObject | None = Field(
        None, description="Optional reply context (creates a thread)"
    )
    biz_opaque_callback_data: str | None = Field(
        None, max_length=512, description="Opaque data echoed back in status webhooks"
    )
    message_activity_sharing: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_foreign_payloads(cls, data: Any) -> Any:
        """Reject payload fields that do not belong to the declared type."""
        if isinstance(data, Mapping):
            declared = data.get("type")
            foreign = sorted(
                key for key in MESSAGE_PAYLOAD_FIELDS if key in data and key != declared
            )
            if foreign:
                raise ValueError(
                    f"Message of type '{declared}' cannot carry payload field(s): "
                    f"{', '.join(foreign)}"
                )
        return data


class TextObject(RequestModel):
    """Text payload."""

    body: str = Field(..., min_length=1, max_length=4096, description="Message text")
    preview_url: bool | None = Field(
        None, description="Render a preview for the first URL in the body"
    )


class TextMessage(BaseMessage):
    type: Literal["text"]
    text: TextObject


class ReactionObject(RequestModel):
    """Reaction payload. An empty emoji removes a previous reaction."""

    message_id: str = Field(..., min_length=1)
    emoji: str


class ReactionMessage(BaseMessage):
    type: Literal["reaction"]
    reaction: ReactionObject


class MarkAsReadRequest(RequestModel):
    """Read receipt sent through POST /messages."""

    messaging_product: Literal["whatsapp"] = MESSAGING_PRODUCT
    status: Literal["read"] = "read"
    message_id: str = Field(..., min_length=1, description="WhatsApp message ID")


class SuccessResponse(ResponseModel):
    """Generic `{"success": true}` acknowledgement."""

    success: bool
