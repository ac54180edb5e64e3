"""
Send-message request and response shapes.

`Message` is the tagged union of every outgoing message type, resolved by
its `type` field.
"""

from typing import Annotated, Literal

from pydantic import Field

from wacloud.schemas.core.base_models import ResponseModel

from .basic_models import ReactionMessage, TextMessage
from .interactive_models import InteractiveMessage
from .media_models import (
    AudioMessage,
    DocumentMessage,
    ImageMessage,
    StickerMessage,
    VideoMessage,
)
from .specialized_models import ContactsMessage, LocationMessage
from .template_models import TemplateMessage

Message = Annotated[
    TextMessage
    | ImageMessage
    | VideoMessage
    | AudioMessage
    | DocumentMessage
    | StickerMessage
    | LocationMessage
    | ContactsMessage
    | InteractiveMessage
    | TemplateMessage
    | ReactionMessage,
    Field(discriminator="type"),
]

SendMessageRequest = Message


class SentContact(ResponseModel):
    """How the server resolved the recipient."""

    input: str
    wa_id: str


class SentMessage(ResponseModel):
    id: str
    message_status: Literal["accepted", "held_for_quality_assessment", "paused"] | None = None


class SendMessageResponse(ResponseModel):
    messaging_product: Literal["whatsapp"]
    contacts: list[SentContact]
    messages: list[SentMessage]

    @property
    def message_id(self) -> str | None:
        """ID of the first accepted message."""
        return self.messages[0].id if self.messages else None
