"""
WhatsApp template management handler.

Operations on /WABA_ID/message_templates:
- POST   create a template
- GET    list templates (filters and paging cursors as query parameters)
- DELETE delete a template by name, or one language version by name + hsm_id
"""

from typing import Any

from pydantic import BaseModel

from wacloud.core.logging.context import account_context
from wacloud.core.logging.logger import get_logger
from wacloud.domain.interfaces.transport_interface import IWhatsAppTransport
from wacloud.domain.models.transport_models import (
    WhatsAppHttpPayloadRequest,
    WhatsAppHttpRequest,
)
from wacloud.messaging.whatsapp.models.template_management_models import (
    PARAMETER_FORMAT_POLICY_KEY,
    CreateTemplateRequest,
    CreateTemplateResponse,
    DeleteTemplateRequest,
    DeleteTemplateResponse,
    ListTemplatesRequest,
    ListTemplatesResponse,
)
from wacloud.messaging.whatsapp.utils.error_helpers import raise_for_transport_error
from wacloud.schemas.core.types import ParameterFormatPolicy
from wacloud.schemas.core.validation import (
    dump_query,
    dump_request,
    parse_response,
    validate_request,
)

TEMPLATES_PATH = "/message_templates"


class WhatsAppTemplateHandler:
    """
    Handler for WhatsApp template management operations.

    Templates belong to a WhatsApp Business Account, so every call is scoped
    to a WABA ID.
    """

    def __init__(
        self,
        transport: IWhatsAppTransport,
        api_version: str,
        parameter_format_policy: ParameterFormatPolicy = ParameterFormatPolicy.LENIENT,
    ):
        """Initialize template handler.

        Args:
            transport: Transport carrying the HTTP requests
            api_version: Graph API version, e.g. "v24.0"
            parameter_format_policy: How strictly example styles must match
                the declared template parameter_format
        """
        self.transport = transport
        self.api_version = api_version
        self.parameter_format_policy = ParameterFormatPolicy(parameter_format_policy)
        self.logger = get_logger(__name__)

    async def create_template(
        self,
        waba_id: str,
        access_token: str,
        template: CreateTemplateRequest | dict[str, Any],
    ) -> CreateTemplateResponse:
        """
        Submit a template for review.

        Args:
            waba_id: WhatsApp Business Account ID
            access_token: Bearer token
            template: Template definition (name, language, category, components)

        Returns:
            Created template ID, review status and category

        Raises:
            ValidationError: If the definition is malformed
            TransportError: If the API rejects the request
            ResponseShapeError: If the API answer is not a creation result
        """
        # Instances are re-checked so the handler's policy always applies
        if isinstance(template, BaseModel):
            template = template.model_dump(exclude_none=True, by_alias=True)

        validated = validate_request(
            CreateTemplateRequest,
            template,
            context={PARAMETER_FORMAT_POLICY_KEY: self.parameter_format_policy},
        )

        with account_context(waba_id):
            self.logger.debug(f"Creating template '{validated.name}' ({validated.language})")
            response = await self.transport.post(
                WhatsAppHttpPayloadRequest(
                    path=TEMPLATES_PATH,
                    version=self.api_version,
                    account_id=waba_id,
                    access_token=access_token,
                    payload=dump_request(validated),
                )
            )
            raise_for_transport_error(response, "creating template")
            result = parse_response(CreateTemplateResponse, response.body, "creating template")
            self.logger.info(
                f"Template '{validated.name}' created: {result.id} ({result.status.value})"
            )
            return result

    async def list_templates(
        self,
        waba_id: str,
        access_token: str,
        filters: ListTemplatesRequest | dict[str, Any] | None = None,
    ) -> ListTemplatesResponse:
        """
        List templates, optionally filtered.

        Args:
            waba_id: WhatsApp Business Account ID
            access_token: Bearer token
            filters: category, content, language, name, name_or_content,
                quality_score, status, limit and paging cursors, all optional

        Returns:
            Templates plus paging cursors when the API returns them
        """
        validated = validate_request(ListTemplatesRequest, filters or {})

        with account_context(waba_id):
            query_params = dump_query(validated)
            self.logger.debug(f"Listing templates with filters: {query_params}")
            response = await self.transport.get(
                WhatsAppHttpRequest(
                    path=TEMPLATES_PATH,
                    version=self.api_version,
                    account_id=waba_id,
                    access_token=access_token,
                    query_params=query_params,
                )
            )
            raise_for_transport_error(response, "listing templates")
            return parse_response(ListTemplatesResponse, response.body, "listing templates")

    async def delete_template(
        self,
        waba_id: str,
        access_token: str,
        selector: BaseModel | dict[str, Any],
    ) -> DeleteTemplateResponse:
        """
        Delete a template.

        `{"name": ...}` deletes every language version of the template;
        `{"name": ..., "hsm_id": ...}` deletes only the version with that ID.
        """
        validated = validate_request(
            DeleteTemplateRequest, selector, name="DeleteTemplateRequest"
        )

        with account_context(waba_id):
            self.logger.debug(f"Deleting template with selector: {dump_request(validated)}")
            response = await self.transport.delete(
                WhatsAppHttpRequest(
                    path=TEMPLATES_PATH,
                    version=self.api_version,
                    account_id=waba_id,
                    access_token=access_token,
                    query_params=dump_query(validated),
                )
            )
            raise_for_transport_error(response, "deleting template")
            return parse_response(DeleteTemplateResponse, response.body, "deleting template")
