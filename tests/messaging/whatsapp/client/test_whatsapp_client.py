"""
Tests for the WhatsAppClient facade: request construction, error mapping and
response parsing for every operation.
"""

import pytest

from wacloud.core.exceptions import ResponseShapeError, TransportError, ValidationError
from wacloud.domain.models.transport_models import (
    WhatsAppHttpFormRequest,
    WhatsAppHttpPayloadRequest,
)
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from wacloud.messaging.whatsapp.models.template_management_models import (
    CreateTemplateRequest,
)
from wacloud.messaging.whatsapp.utils.error_helpers import is_authentication_error
from wacloud.schemas.core.types import TemplateCategory, TemplateStatus
from wacloud.schemas.core.validation import validate_request

WABA_ID = "102290129340398"
PHONE_NUMBER_ID = "106540352242922"
ACCESS_TOKEN = "EAAtest-token"

TEXT_MESSAGE = {"to": "15551234567", "type": "text", "text": {"body": "Hello"}}


class TestClientConfiguration:
    def test_default_api_version(self, transport):
        client = WhatsAppClient(transport)

        assert client.api_version == "v24.0"
        assert client.parameter_format_policy.value == "lenient"

    @pytest.mark.asyncio
    async def test_custom_api_version_used_in_requests(self, transport, send_response):
        client = WhatsAppClient(transport, api_version="v21.0")
        transport.respond(send_response)

        await client.send_message(PHONE_NUMBER_ID, ACCESS_TOKEN, TEXT_MESSAGE)

        assert transport.last_request.version == "v21.0"


@pytest.mark.asyncio
class TestTemplateOperations:
    """Test create/list/delete template."""

    async def test_create_template_round_trip(self, client, transport, template_definition):
        """The created category matches the submitted one."""
        transport.respond({"id": "594425479261596", "status": "PENDING", "category": "UTILITY"})

        result = await client.create_template(WABA_ID, ACCESS_TOKEN, template_definition)

        assert result.category is TemplateCategory.UTILITY
        assert result.status is TemplateStatus.PENDING
        assert result.id == "594425479261596"

        method, request = transport.calls[0]
        assert method == "post"
        assert isinstance(request, WhatsAppHttpPayloadRequest)
        assert request.path == "/message_templates"
        assert request.account_id == WABA_ID
        assert request.access_token == ACCESS_TOKEN
        assert request.payload["name"] == "order_shipped"
        assert request.payload["components"][1]["example"]["body_text_named_params"][0] == {
            "param_name": "first_name",
            "example": "Pablo",
        }

    async def test_create_template_invalid_sends_nothing(self, client, transport):
        with pytest.raises(ValidationError):
            await client.create_template(
                WABA_ID, ACCESS_TOKEN, {"name": "Bad Name", "language": "en", "components": []}
            )

        assert transport.calls == []

    async def test_strict_policy_applies_to_model_instances(
        self, client, strict_client, transport, template_definition
    ):
        """A definition built leniently is re-checked by a strict client."""
        template_definition.pop("parameter_format")
        lenient_value = validate_request(CreateTemplateRequest, template_definition)

        with pytest.raises(ValidationError):
            await strict_client.create_template(WABA_ID, ACCESS_TOKEN, lenient_value)
        assert transport.calls == []

        transport.respond({"id": "1", "status": "PENDING", "category": "UTILITY"})
        result = await client.create_template(WABA_ID, ACCESS_TOKEN, lenient_value)
        assert result.id == "1"

    async def test_create_template_transport_error(self, client, transport, template_definition):
        body = '{"error":{"message":"Invalid parameter","type":"OAuthException","code":100,"error_subcode":2388023,"fbtrace_id":"AbC"}}'
        transport.respond(body, ok=False, status=400)

        with pytest.raises(TransportError) as exc_info:
            await client.create_template(WABA_ID, ACCESS_TOKEN, template_definition)

        error = exc_info.value
        assert str(error) == f"Error creating template: {body}"
        assert error.status == 400
        assert error.code == 100
        assert error.error.error_subcode == 2388023

    async def test_list_templates_filters_as_query(self, client, transport):
        transport.respond({"data": [], "paging": {"cursors": {"before": "b", "after": "a"}}})

        result = await client.list_templates(
            WABA_ID,
            ACCESS_TOKEN,
            {"status": "APPROVED", "category": "MARKETING", "limit": 25, "after": "MjQZD"},
        )

        assert result.data == []
        method, request = transport.calls[0]
        assert method == "get"
        assert request.path == "/message_templates"
        assert request.query_params == {
            "status": "APPROVED",
            "category": "MARKETING",
            "limit": "25",
            "after": "MjQZD",
        }

    async def test_list_templates_without_filters(self, client, transport):
        transport.respond({"data": []})

        await client.list_templates(WABA_ID, ACCESS_TOKEN)

        assert transport.last_request.query_params is None

    async def test_list_templates_invalid_filter(self, client, transport):
        with pytest.raises(ValidationError):
            await client.list_templates(WABA_ID, ACCESS_TOKEN, {"status": "UNKNOWN"})
        assert transport.calls == []

    async def test_list_templates_transport_error(self, client, transport):
        transport.respond("Service unavailable", ok=False, status=503)

        with pytest.raises(TransportError) as exc_info:
            await client.list_templates(WABA_ID, ACCESS_TOKEN)

        assert str(exc_info.value) == "Error listing templates: Service unavailable"
        assert exc_info.value.error is None

    @pytest.mark.parametrize(
        "selector, expected_query",
        [
            ({"name": "x"}, {"name": "x"}),
            ({"name": "x", "hsm_id": "y"}, {"name": "x", "hsm_id": "y"}),
        ],
    )
    async def test_delete_template_selectors(self, client, transport, selector, expected_query):
        transport.respond({"success": True})

        result = await client.delete_template(WABA_ID, ACCESS_TOKEN, selector)

        assert result.success is True
        method, request = transport.calls[0]
        assert method == "delete"
        assert request.query_params == expected_query

    @pytest.mark.parametrize("hsm_id", ["", 123])
    async def test_delete_template_invalid_hsm_id_sends_nothing(self, client, transport, hsm_id):
        with pytest.raises(ValidationError):
            await client.delete_template(
                WABA_ID, ACCESS_TOKEN, {"name": "order_shipped", "hsm_id": hsm_id}
            )
        assert transport.calls == []

    async def test_delete_template_empty_selector(self, client, transport):
        with pytest.raises(ValidationError):
            await client.delete_template(WABA_ID, ACCESS_TOKEN, {})
        assert transport.calls == []


@pytest.mark.asyncio
class TestMessageOperations:
    """Test send_message and mark_as_read."""

    async def test_send_message(self, client, transport, send_response):
        transport.respond(send_response)

        result = await client.send_message(PHONE_NUMBER_ID, ACCESS_TOKEN, TEXT_MESSAGE)

        assert result.message_id == "wamid.HBgLMTU1NTEyMzQ1NjcVAgARGBI"
        method, request = transport.calls[0]
        assert method == "post"
        assert request.path == "/messages"
        assert request.account_id == PHONE_NUMBER_ID
        assert request.payload == {
            "messaging_product": "whatsapp",
            "to": "15551234567",
            "type": "text",
            "text": {"body": "Hello"},
        }

    async def test_send_message_failure_carries_operation_and_body(self, client, transport):
        transport.respond('{"message":"boom"}', ok=False)

        with pytest.raises(TransportError) as exc_info:
            await client.send_message(PHONE_NUMBER_ID, ACCESS_TOKEN, TEXT_MESSAGE)

        assert "sending message" in str(exc_info.value)
        assert '{"message":"boom"}' in str(exc_info.value)
        assert exc_info.value.operation == "sending message"
        assert exc_info.value.body == '{"message":"boom"}'

    async def test_send_message_invalid_payload(self, client, transport):
        with pytest.raises(ValidationError) as exc_info:
            await client.send_message(
                PHONE_NUMBER_ID,
                ACCESS_TOKEN,
                {"to": "15551234567", "type": "text", "text": {"body": "x" * 4097}},
            )

        assert exc_info.value.paths == ["text.text.body"]
        assert transport.calls == []

    async def test_send_message_unexpected_response(self, client, transport):
        transport.respond({"messaging_product": "whatsapp"})

        with pytest.raises(ResponseShapeError) as exc_info:
            await client.send_message(PHONE_NUMBER_ID, ACCESS_TOKEN, TEXT_MESSAGE)

        assert exc_info.value.operation == "sending message"
        assert exc_info.value.body == '{"messaging_product": "whatsapp"}'

    async def test_expired_token_detected(self, client, transport):
        transport.respond(
            '{"error":{"message":"Error validating access token","type":"OAuthException","code":190}}',
            ok=False,
            status=401,
        )

        with pytest.raises(TransportError) as exc_info:
            await client.send_message(PHONE_NUMBER_ID, ACCESS_TOKEN, TEXT_MESSAGE)

        assert is_authentication_error(exc_info.value)

    async def test_mark_as_read(self, client, transport):
        transport.respond({"success": True})

        result = await client.mark_as_read(PHONE_NUMBER_ID, ACCESS_TOKEN, "wamid.incoming")

        assert result.success is True
        assert transport.last_request.payload == {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": "wamid.incoming",
        }


@pytest.mark.asyncio
class TestMediaOperations:
    """Test upload, lookup, delete and download of media."""

    async def test_upload_media(self, client, transport):
        transport.respond({"id": "1037543291543636"})

        result = await client.upload_media(
            PHONE_NUMBER_ID, ACCESS_TOKEN, b"\xff\xd8\xff", "image/jpeg", "photo.jpg"
        )

        assert result.id == "1037543291543636"
        method, request = transport.calls[0]
        assert method == "post_form"
        assert isinstance(request, WhatsAppHttpFormRequest)
        assert request.path == "/media"
        assert request.fields == {"messaging_product": "whatsapp", "type": "image/jpeg"}
        assert request.file.filename == "photo.jpg"
        assert request.file.content_type == "image/jpeg"
        assert request.file.content == b"\xff\xd8\xff"

    async def test_upload_media_default_filename(self, client, transport):
        transport.respond({"id": "1"})

        await client.upload_media(PHONE_NUMBER_ID, ACCESS_TOKEN, b"%PDF", "application/pdf")

        assert transport.last_request.file.filename == "document.pdf"

    async def test_upload_unsupported_mime_type(self, client, transport):
        with pytest.raises(ValidationError):
            await client.upload_media(PHONE_NUMBER_ID, ACCESS_TOKEN, b"GIF89a", "image/gif")
        assert transport.calls == []

    async def test_upload_too_large(self, client, transport):
        content = b"\0" * (500 * 1024 + 1)

        with pytest.raises(ValidationError) as exc_info:
            await client.upload_media(PHONE_NUMBER_ID, ACCESS_TOKEN, content, "image/webp")

        assert exc_info.value.issues[0].rule == "file_too_large"
        assert transport.calls == []

    async def test_upload_empty_file(self, client, transport):
        with pytest.raises(ValidationError) as exc_info:
            await client.upload_media(PHONE_NUMBER_ID, ACCESS_TOKEN, b"", "image/png")

        assert exc_info.value.issues[0].rule == "file_empty"

    async def test_upload_failure(self, client, transport):
        transport.respond('{"error":{"message":"bad","type":"x","code":131053}}', ok=False)

        with pytest.raises(TransportError) as exc_info:
            await client.upload_media(PHONE_NUMBER_ID, ACCESS_TOKEN, b"abc", "text/plain")

        assert str(exc_info.value).startswith("Error uploading media: ")
        assert exc_info.value.code == 131053

    async def test_get_media_url(self, client, transport, media_url_response):
        transport.respond(media_url_response)

        result = await client.get_media_url("1037543291543636", ACCESS_TOKEN)

        assert result.url == media_url_response["url"]
        method, request = transport.calls[0]
        assert method == "get"
        assert request.account_id == "1037543291543636"
        assert request.path == ""
        assert request.query_params is None

    async def test_get_media_url_with_phone_filter(self, client, transport, media_url_response):
        transport.respond(media_url_response)

        await client.get_media_url("1037543291543636", ACCESS_TOKEN, PHONE_NUMBER_ID)

        assert transport.last_request.query_params == {"phone_number_id": PHONE_NUMBER_ID}

    async def test_get_media_url_failure(self, client, transport):
        transport.respond("not found", ok=False, status=404)

        with pytest.raises(TransportError) as exc_info:
            await client.get_media_url("missing", ACCESS_TOKEN)

        assert str(exc_info.value) == "Error getting media URL: not found"

    async def test_delete_media(self, client, transport):
        transport.respond({"success": True})

        result = await client.delete_media("1037543291543636", ACCESS_TOKEN)

        assert result.success is True
        assert transport.methods == ["delete"]

    async def test_download_media(self, client, transport, media_url_response):
        transport.respond_download(b"\xff\xd8", b"\xff\xe0", content_type="image/jpeg")

        download = await client.download_media(media_url_response["url"], ACCESS_TOKEN)

        assert download.content_type == "image/jpeg"
        assert await download.read() == b"\xff\xd8\xff\xe0"
        method, request = transport.calls[0]
        assert method == "download"
        assert request.url == media_url_response["url"]
        assert request.access_token == ACCESS_TOKEN

    async def test_download_media_failure(self, client, transport, media_url_response):
        transport.respond_download(ok=False, body='{"error":"expired"}')

        with pytest.raises(TransportError) as exc_info:
            await client.download_media(media_url_response["url"], ACCESS_TOKEN)

        assert exc_info.value.operation == "downloading media"
        assert exc_info.value.body == '{"error":"expired"}'
        assert exc_info.value.status == 404

    async def test_download_rejects_plain_http(self, client, transport):
        with pytest.raises(ValidationError):
            await client.download_media("http://lookaside.fbsbx.com/x", ACCESS_TOKEN)
        assert transport.calls == []
