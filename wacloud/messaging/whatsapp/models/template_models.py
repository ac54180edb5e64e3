"""
WhatsApp template message models.

Shapes used when *sending* an approved template through POST /messages:
the template reference (name + language) and the components that fill its
variables. Creating and managing templates lives in
template_management_models.
"""

from typing import Annotated, Literal

from pydantic import Field

from wacloud.schemas.core.base_models import RequestModel

from .basic_models import BaseMessage
from .media_models import MediaObject
from .specialized_models import LocationObject


class TemplateLanguage(RequestModel):
    """Template language configuration."""

    policy: Literal["deterministic"] = "deterministic"
    code: str = Field(..., min_length=1, description="Language and locale code, e.g. en_US")


class TemplateCurrency(RequestModel):
    fallback_value: str
    code: str = Field(..., description="ISO 4217 currency code")
    amount_1000: int = Field(..., description="Amount multiplied by 1000")


class TemplateDateTime(RequestModel):
    fallback_value: str


class TextParameter(RequestModel):
    """Text variable. `parameter_name` is set for NAMED templates."""

    type: Literal["text"]
    text: str
    parameter_name: str | None = None


class CurrencyParameter(RequestModel):
    type: Literal["currency"]
    currency: TemplateCurrency
    parameter_name: str | None = None


class DateTimeParameter(RequestModel):
    type: Literal["date_time"]
    date_time: TemplateDateTime
    parameter_name: str | None = None


class ImageParameter(RequestModel):
    type: Literal["image"]
    image: MediaObject


class DocumentParameter(RequestModel):
    type: Literal["document"]
    document: MediaObject


class VideoParameter(RequestModel):
    type: Literal["video"]
    video: MediaObject


class LocationParameter(RequestModel):
    type: Literal["location"]
    location: LocationObject


TemplateParameter = Annotated[
    TextParameter
    | CurrencyParameter
    | DateTimeParameter
    | ImageParameter
    | DocumentParameter
    | VideoParameter
    | LocationParameter,
    Field(discriminator="type"),
]


class PayloadButtonParameter(RequestModel):
    type: Literal["payload"]
    payload: str


class TextButtonParameter(RequestModel):
    type: Literal["text"]
    text: str


TemplateButtonParameter = Annotated[
    PayloadButtonParameter | TextButtonParameter, Field(discriminator="type")
]


class HeaderComponent(RequestModel):
    type: Literal["header"]
    parameters: list[TemplateParameter]


class BodyComponent(RequestModel):
    type: Literal["body"]
    parameters: list[TemplateParameter]


class ButtonComponent(RequestModel):
    """Values for one template button, addressed by its position."""

    type: Literal["button"]
    sub_type: Literal["quick_reply", "url", "catalog"]
    index: int = Field(..., ge=0, le=9, description="Zero-based button position")
    parameters: list[TemplateButtonParameter]


TemplateComponent = Annotated[
    HeaderComponent | BodyComponent | ButtonComponent, Field(discriminator="type")
]


class TemplateObject(RequestModel):
    """Reference to an approved template plus its variable values."""

    name: str = Field(..., min_length=1, max_length=512)
    language: TemplateLanguage
    components: list[TemplateComponent] | None = None
    namespace: str | None = Field(None, description="On-Premises API only")


class TemplateMessage(BaseMessage):
    type: Literal["template"]
    template: TemplateObject
