"""
WhatsApp template management models.

Shapes for the /WABA_ID/message_templates endpoints: creating, listing and
deleting templates. A template is an ordered list of HEADER, BODY, FOOTER and
BUTTONS components. Several component variants share the same `type` and
differ only by structure (with or without examples, named or positional
examples), so components resolve by ordered first-match.
"""

from typing import ClassVar, Literal, Self

from pydantic import Field, ValidationInfo, model_validator

from wacloud.schemas.core.base_models import RequestModel, ResponseModel
from wacloud.schemas.core.types import (
    ParameterFormat,
    ParameterFormatPolicy,
    QualityScore,
    TemplateCategory,
    TemplateStatus,
)
from wacloud.schemas.core.unions import ordered_union

from .basic_models import SuccessResponse
from .media_models import HTTP_URL_PATTERN

PARAMETER_FORMAT_POLICY_KEY = "parameter_format_policy"


class NamedParamExample(RequestModel):
    """Example value for a {{named}} variable."""

    param_name: str = Field(..., pattern=r"^[a-z0-9_]+$")
    example: str


class ExampleComponent(RequestModel):
    """Base for components; `example_style` says which example style it carries."""

    example_style: ClassVar[ParameterFormat | None] = None


class WithoutExample(ExampleComponent):
    """Component variant that must not carry an `example` block.

    Examples always resolve to one of the example-bearing variants declared
    after it. Subclasses may forbid further keys.
    """

    forbidden_keys = ("example",)


# HEADER


class HeaderTextExampleNamed(RequestModel):
    header_text_named_params: list[NamedParamExample] = Field(..., min_length=1)


class HeaderTextExamplePositional(RequestModel):
    header_text: list[str] = Field(..., min_length=1)


class HeaderMediaExample(RequestModel):
    header_handle: list[str] = Field(..., min_length=1)


class HeaderTextComponent(WithoutExample):
    type: Literal["HEADER"]
    format: Literal["TEXT"]
    text: str = Field(..., min_length=1, max_length=60)


class HeaderTextNamedParamsComponent(ExampleComponent):
    example_style = ParameterFormat.NAMED

    type: Literal["HEADER"]
    format: Literal["TEXT"]
    text: str = Field(..., min_length=1, max_length=60)
    example: HeaderTextExampleNamed


class HeaderTextPositionalParamsComponent(ExampleComponent):
    example_style = ParameterFormat.POSITIONAL

    type: Literal["HEADER"]
    format: Literal["TEXT"]
    text: str = Field(..., min_length=1, max_length=60)
    example: HeaderTextExamplePositional


class HeaderMediaComponent(ExampleComponent):
    type: Literal["HEADER"]
    format: Literal["IMAGE", "VIDEO", "DOCUMENT"]
    example: HeaderMediaExample | None = None


class HeaderLocationComponent(WithoutExample):
    type: Literal["HEADER"]
    format: Literal["LOCATION"]


# BODY


class BodyExampleNamed(RequestModel):
    body_text_named_params: list[NamedParamExample] = Field(..., min_length=1)


class BodyExamplePositional(RequestModel):
    body_text: list[list[str]] = Field(..., min_length=1)


class BodyComponent(WithoutExample):
    type: Literal["BODY"]
    text: str = Field(..., min_length=1, max_length=1024)


class BodyNamedParamsComponent(ExampleComponent):
    example_style = ParameterFormat.NAMED

    type: Literal["BODY"]
    text: str = Field(..., min_length=1, max_length=1024)
    example: BodyExampleNamed


class BodyPositionalParamsComponent(ExampleComponent):
    example_style = ParameterFormat.POSITIONAL

    type: Literal["BODY"]
    text: str = Field(..., min_length=1, max_length=1024)
    example: BodyExamplePositional


class BodyAuthComponent(WithoutExample):
    """Authentication body; the server supplies the text."""

    forbidden_keys = ("example", "text")

    type: Literal["BODY"]
    add_security_recommendation: bool | None = None


# FOOTER


class FooterComponent(WithoutExample):
    forbidden_keys = ("example", "code_expiration_minutes")

    type: Literal["FOOTER"]
    text: str = Field(..., min_length=1, max_length=60)


class FooterAuthComponent(ExampleComponent):
    """Authentication footer showing the code expiration time."""

    type: Literal["FOOTER"]
    code_expiration_minutes: int = Field(..., ge=1, le=90)


# BUTTONS


class QuickReplyButton(RequestModel):
    type: Literal["QUICK_REPLY"]
    text: str = Field(..., min_length=1, max_length=25)


class UrlButton(RequestModel):
    type: Literal["URL"]
    text: str = Field(..., min_length=1, max_length=25)
    url: str = Field(..., pattern=HTTP_URL_PATTERN, max_length=2000)
    example: list[str] | None = None


class PhoneNumberButton(RequestModel):
    type: Literal["PHONE_NUMBER"]
    text: str = Field(..., min_length=1, max_length=25)
    phone_number: str = Field(..., min_length=1, max_length=20)


class SupportedApp(RequestModel):
    package_name: str
    signature_hash: str


class OtpButton(RequestModel):
    type: Literal["OTP"]
    otp_type: Literal["COPY_CODE", "ONE_TAP", "ZERO_TAP"]
    text: str | None = Field(None, max_length=25)
    supported_apps: list[SupportedApp] | None = None


TemplateButton = ordered_union(
    QuickReplyButton, UrlButton, PhoneNumberButton, OtpButton, tag="type"
)


class ButtonsComponent(ExampleComponent):
    type: Literal["BUTTONS"]
    buttons: list[TemplateButton] = Field(..., min_length=1, max_length=10)


TemplateDefinitionComponent = ordered_union(
    HeaderTextComponent,
    HeaderTextNamedParamsComponent,
    HeaderTextPositionalParamsComponent,
    HeaderMediaComponent,
    HeaderLocationComponent,
    BodyComponent,
    BodyNamedParamsComponent,
    BodyPositionalParamsComponent,
    BodyAuthComponent,
    FooterComponent,
    FooterAuthComponent,
    ButtonsComponent,
    tag="type",
)


class Template(ResponseModel):
    """A template as returned by the server."""

    id: str
    name: str
    language: str
    category: TemplateCategory
    status: TemplateStatus
    parameter_format: ParameterFormat | None = None
    components: list[TemplateDefinitionComponent]


class CreateTemplateRequest(RequestModel):
    """Template creation payload: a template without server-assigned fields.

    With the STRICT parameter format policy in the validation context, named
    examples are only accepted on NAMED templates and positional examples on
    POSITIONAL (or undeclared) ones.
    """

    name: str = Field(..., min_length=1, max_length=512, pattern=r"^[a-z0-9_]+$")
    language: str = Field(..., min_length=1)
    category: TemplateCategory
    parameter_format: ParameterFormat | None = None
    components: list[TemplateDefinitionComponent] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_parameter_format(self, info: ValidationInfo) -> Self:
        policy = (info.context or {}).get(
            PARAMETER_FORMAT_POLICY_KEY, ParameterFormatPolicy.LENIENT
        )
        if ParameterFormatPolicy(policy) is not ParameterFormatPolicy.STRICT:
            return self

        declared = self.parameter_format or ParameterFormat.POSITIONAL
        for index, component in enumerate(self.components):
            style = component.example_style
            if style is not None and style is not declared:
                raise ValueError(
                    f"components[{index}] ({component.type}) carries {style.value} "
                    f"examples but the template parameter_format is {declared.value}"
                )
        return self


class CreateTemplateResponse(ResponseModel):
    id: str
    status: TemplateStatus
    category: TemplateCategory


class ListTemplatesRequest(RequestModel):
    """Filters for listing templates, sent as query parameters."""

    category: TemplateCategory | None = None
    content: str | None = None
    language: str | None = None
    name: str | None = None
    name_or_content: str | None = None
    quality_score: QualityScore | None = None
    status: TemplateStatus | None = None
    limit: int | None = Field(None, ge=1)
    after: str | None = Field(None, description="Cursor of the next page")
    before: str | None = Field(None, description="Cursor of the previous page")


class Cursors(ResponseModel):
    before: str
    after: str


class Paging(ResponseModel):
    cursors: Cursors
    next: str | None = None
    previous: str | None = None


class ListTemplatesResponse(ResponseModel):
    data: list[Template]
    paging: Paging | None = None


class DeleteTemplateByIdRequest(RequestModel):
    """Delete one language version of a template."""

    hsm_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class DeleteTemplateByNameRequest(RequestModel):
    """Delete every language version of a template."""

    forbidden_keys = ("hsm_id",)

    name: str = Field(..., min_length=1)


# The more specific selector comes first so a present hsm_id is never dropped
DeleteTemplateRequest = ordered_union(DeleteTemplateByIdRequest, DeleteTemplateByNameRequest)

DeleteTemplateResponse = SuccessResponse
