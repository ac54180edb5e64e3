"""
Interactive message models for WhatsApp messaging.

Supports every interactive object type of the Cloud API:
1. Button - Quick reply buttons (max 3)
2. List - Sectioned lists with rows (max 10 sections, 10 rows each)
3. Product / Product list / Catalog - Commerce messages
4. Flow - WhatsApp Flows entry point
5. Call permission request
"""

from typing import Annotated, Any, Literal, Self

from pydantic import Field, field_validator, model_validator

from wacloud.schemas.core.base_models import RequestModel

from .basic_models import BaseMessage
from .media_models import MediaObject


class InteractiveHeaderText(RequestModel):
    type: Literal["text"]
    text: str = Field(..., min_length=1, max_length=60)
    sub_text: str | None = Field(None, max_length=60)


class InteractiveHeaderImage(RequestModel):
    type: Literal["image"]
    image: MediaObject


class InteractiveHeaderVideo(RequestModel):
    type: Literal["video"]
    video: MediaObject


class InteractiveHeaderDocument(RequestModel):
    type: Literal["document"]
    document: MediaObject


class InteractiveHeaderGif(RequestModel):
    type: Literal["gif"]
    gif: MediaObject


InteractiveHeader = Annotated[
    InteractiveHeaderText
    | InteractiveHeaderImage
    | InteractiveHeaderVideo
    | InteractiveHeaderDocument
    | InteractiveHeaderGif,
    Field(discriminator="type"),
]


class InteractiveBody(RequestModel):
    text: str = Field(..., min_length=1, max_length=1024)


class InteractiveFooter(RequestModel):
    text: str = Field(..., min_length=1, max_length=60)


class ReplyButtonContent(RequestModel):
    id: str = Field(..., min_length=1, max_length=256, description="Unique button identifier")
    title: str = Field(..., min_length=1, max_length=20, description="Button display text")


class ReplyButton(RequestModel):
    type: Literal["reply"] = "reply"
    reply: ReplyButtonContent


class ButtonAction(RequestModel):
    buttons: list[ReplyButton] = Field(..., min_length=1, max_length=3)

    @field_validator("buttons")
    @classmethod
    def validate_button_uniqueness(cls, v: list[ReplyButton]) -> list[ReplyButton]:
        """Validate button IDs are unique."""
        button_ids = [button.reply.id for button in v]
        if len(button_ids) != len(set(button_ids)):
            raise ValueError("Button IDs must be unique")
        return v


class ListRow(RequestModel):
    id: str = Field(..., min_length=1, max_length=200, description="Unique row identifier")
    title: str = Field(..., min_length=1, max_length=24)
    description: str | None = Field(None, max_length=72)


class ListSection(RequestModel):
    title: str | None = Field(None, max_length=24)
    rows: list[ListRow] = Field(..., min_length=1, max_length=10)


class ListAction(RequestModel):
    button: str = Field(..., min_length=1, max_length=20, description="Label of the list opener")
    sections: list[ListSection] = Field(..., min_length=1, max_length=10)

    @field_validator("sections")
    @classmethod
    def validate_global_row_uniqueness(cls, v: list[ListSection]) -> list[ListSection]:
        """Validate row IDs are unique across all sections."""
        row_ids = [row.id for section in v for row in section.rows]
        if len(row_ids) != len(set(row_ids)):
            raise ValueError("Row IDs must be unique across all sections")
        return v


class ProductAction(RequestModel):
    catalog_id: str
    product_retailer_id: str


class ProductItem(RequestModel):
    product_retailer_id: str


class ProductSection(RequestModel):
    title: str | None = Field(None, max_length=24)
    product_items: list[ProductItem] = Field(..., min_length=1, max_length=30)


class ProductListAction(RequestModel):
    catalog_id: str
    sections: list[ProductSection] = Field(..., min_length=1, max_length=10)


class CatalogParameters(RequestModel):
    thumbnail_product_retailer_id: str


class CatalogAction(RequestModel):
    name: Literal["catalog_message"] = "catalog_message"
    parameters: CatalogParameters


class FlowActionPayload(RequestModel):
    screen: str | None = None
    data: dict[str, Any] | None = None


class FlowParameters(RequestModel):
    """Parameters of a flow message. A flow is addressed by ID or by name."""

    flow_message_version: Literal["3"] = "3"
    flow_id: str | None = None
    flow_name: str | None = None
    flow_cta: str = Field(..., min_length=1)
    mode: Literal["draft", "published"] | None = None
    flow_token: str | None = None
    flow_action: Literal["navigate", "data_exchange"] | None = None
    flow_action_payload: FlowActionPayload | None = None

    @model_validator(mode="after")
    def check_flow_reference(self) -> Self:
        if (self.flow_id is None) == (self.flow_name is None):
            raise ValueError("Exactly one of 'flow_id' or 'flow_name' must be provided")
        return self


class FlowAction(RequestModel):
    name: Literal["flow"] = "flow"
    parameters: FlowParameters


class CallPermissionAction(RequestModel):
    name: Literal["call_permission_request"] = "call_permission_request"


class InteractiveButton(RequestModel):
    type: Literal["button"]
    header: InteractiveHeader | None = None
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: ButtonAction


class InteractiveList(RequestModel):
    type: Literal["list"]
    header: InteractiveHeader | None = None
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: ListAction


class InteractiveProduct(RequestModel):
    type: Literal["product"]
    body: InteractiveBody | None = None
    footer: InteractiveFooter | None = None
    action: ProductAction


class InteractiveProductList(RequestModel):
    type: Literal["product_list"]
    header: InteractiveHeaderText
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: ProductListAction


class InteractiveCatalog(RequestModel):
    type: Literal["catalog_message"]
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: CatalogAction


class InteractiveFlow(RequestModel):
    type: Literal["flow"]
    header: InteractiveHeader | None = None
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: FlowAction


class InteractiveCallPermission(RequestModel):
    type: Literal["call_permission_request"]
    body: InteractiveBody
    action: CallPermissionAction = Field(default_factory=CallPermissionAction)


InteractiveObject = Annotated[
    InteractiveButton
    | InteractiveList
    | InteractiveProduct
    | InteractiveProductList
    | InteractiveCatalog
    | InteractiveFlow
    | InteractiveCallPermission,
    Field(discriminator="type"),
]


class InteractiveMessage(BaseMessage):
    type: Literal["interactive"]
    interactive: InteractiveObject
