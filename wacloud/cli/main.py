"""
wacloud CLI main module.

Thin command-line wrapper around WhatsAppClient for managing templates,
sending messages and moving media. Credentials and account IDs come from
the environment (see wacloud.core.config.settings).
"""

import asyncio
import json
import mimetypes
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiohttp
import typer
from pydantic import BaseModel
from rich.console import Console

from wacloud.core.config.settings import settings
from wacloud.core.exceptions import WhatsAppClientError
from wacloud.core.logging.logger import setup_app_logging
from wacloud.messaging.whatsapp.client.http_transport import AiohttpWhatsAppTransport
from wacloud.messaging.whatsapp.client.replay_transport import ReplayWhatsAppTransport
from wacloud.messaging.whatsapp.client.whatsapp_client import WhatsAppClient
from wacloud.messaging.whatsapp.utils.error_helpers import is_authentication_error
from wacloud.schemas.core.types import (
    ParameterFormatPolicy,
    TemplateCategory,
    TemplateStatus,
)

app = typer.Typer(help="WhatsApp Cloud API command-line client")
templates_app = typer.Typer(help="Create, list and delete message templates")
messages_app = typer.Typer(help="Send messages and read receipts")
media_app = typer.Typer(help="Upload, inspect, download and delete media")
app.add_typer(templates_app, name="templates")
app.add_typer(messages_app, name="messages")
app.add_typer(media_app, name="media")

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    replay_cache: Path | None = typer.Option(
        None,
        "--replay-cache",
        help="Record responses to (and replay them from) this directory",
    ),
    api_version: str | None = typer.Option(
        None, "--api-version", help="Graph API version (default: API_VERSION)"
    ),
    strict_templates: bool = typer.Option(
        False,
        "--strict-templates",
        help="Require template examples to match the declared parameter_format",
    ),
):
    """
    WhatsApp Cloud API command-line client.

    Examples:
        wacloud templates list --status APPROVED
        wacloud messages send-text 15551234567 "Hello!"
        wacloud media upload ./photo.jpg
    """
    setup_app_logging()
    cache_dir = replay_cache or settings.replay_cache_dir
    ctx.obj = {
        "replay_cache": Path(cache_dir) if cache_dir else None,
        "api_version": api_version or settings.api_version,
        "policy": ParameterFormatPolicy.STRICT
        if strict_templates
        else ParameterFormatPolicy.LENIENT,
    }


@asynccontextmanager
async def _open_client(options: dict[str, Any]) -> AsyncIterator[WhatsAppClient]:
    """Yield a client over a fresh aiohttp session."""
    async with aiohttp.ClientSession() as session:
        transport = AiohttpWhatsAppTransport(
            session, base_url=settings.base_url, timeout=settings.request_timeout
        )
        if options["replay_cache"] is not None:
            transport = ReplayWhatsAppTransport(options["replay_cache"], inner=transport)
        yield WhatsAppClient(
            transport,
            api_version=options["api_version"],
            parameter_format_policy=options["policy"],
        )


def _require(*names: str) -> dict[str, str]:
    try:
        return settings.require(*names)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)


def _print_result(result: BaseModel) -> None:
    console.print_json(result.model_dump_json(exclude_none=True))


def _run(
    ctx: typer.Context,
    operation: Callable[[WhatsAppClient], Awaitable[BaseModel | None]],
) -> None:
    """Run one client operation and print its result; failures exit with status 1."""

    async def runner():
        async with _open_client(ctx.obj) as client:
            return await operation(client)

    try:
        result = asyncio.run(runner())
    except WhatsAppClientError as e:
        typer.echo(f"❌ {e}", err=True)
        if is_authentication_error(e):
            typer.echo(
                "Check WHATSAPP_ACCESS_TOKEN: the token is invalid or expired", err=True
            )
        raise typer.Exit(1)

    if result is not None:
        _print_result(result)


# Templates


@templates_app.command("list")
def list_templates(
    ctx: typer.Context,
    name: str | None = typer.Option(None, help="Filter by template name"),
    status: TemplateStatus | None = typer.Option(None, help="Filter by review status"),
    category: TemplateCategory | None = typer.Option(None, help="Filter by category"),
    language: str | None = typer.Option(None, help="Filter by language code"),
    limit: int | None = typer.Option(None, help="Page size"),
    after: str | None = typer.Option(None, help="Cursor of the next page"),
):
    """List message templates of the business account."""
    creds = _require("access_token", "waba_id")
    filters = {
        "name": name,
        "status": status,
        "category": category,
        "language": language,
        "limit": limit,
        "after": after,
    }
    _run(
        ctx,
        lambda client: client.list_templates(
            creds["waba_id"],
            creds["access_token"],
            {key: value for key, value in filters.items() if value is not None},
        ),
    )


@templates_app.command("create")
def create_template(
    ctx: typer.Context,
    definition: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON file with the template definition"
    ),
):
    """Submit a template definition for review."""
    creds = _require("access_token", "waba_id")
    try:
        template = json.loads(definition.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"❌ {definition} is not valid JSON: {e}", err=True)
        raise typer.Exit(1)

    _run(
        ctx,
        lambda client: client.create_template(
            creds["waba_id"], creds["access_token"], template
        ),
    )


@templates_app.command("delete")
def delete_template(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name"),
    hsm_id: str | None = typer.Option(
        None, "--hsm-id", help="Delete only the language version with this ID"
    ),
):
    """Delete a template (every language version unless --hsm-id is given)."""
    creds = _require("access_token", "waba_id")
    selector = {"name": name} if hsm_id is None else {"name": name, "hsm_id": hsm_id}
    _run(
        ctx,
        lambda client: client.delete_template(
            creds["waba_id"], creds["access_token"], selector
        ),
    )


# Messages


@messages_app.command("send-text")
def send_text(
    ctx: typer.Context,
    to: str = typer.Argument(..., help="Recipient phone number"),
    body: str = typer.Argument(..., help="Message text"),
    preview_url: bool = typer.Option(False, help="Render a preview of the first URL"),
    reply_to: str | None = typer.Option(None, help="Message ID to reply to"),
):
    """Send a text message."""
    creds = _require("access_token", "phone_number_id")
    message: dict[str, Any] = {
        "to": to,
        "type": "text",
        "text": {"body": body, "preview_url": preview_url},
    }
    if reply_to:
        message["context"] = {"message_id": reply_to}

    _run(
        ctx,
        lambda client: client.send_message(
            creds["phone_number_id"], creds["access_token"], message
        ),
    )


@messages_app.command("mark-read")
def mark_read(
    ctx: typer.Context,
    message_id: str = typer.Argument(..., help="ID of the received message"),
):
    """Mark a received message as read."""
    creds = _require("access_token", "phone_number_id")
    _run(
        ctx,
        lambda client: client.mark_as_read(
            creds["phone_number_id"], creds["access_token"], message_id
        ),
    )


# Media


@media_app.command("upload")
def upload_media(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload"),
    mime_type: str | None = typer.Option(
        None, "--mime-type", help="MIME type (guessed from the extension by default)"
    ),
):
    """Upload a media file and print its media ID."""
    creds = _require("access_token", "phone_number_id")
    mime_type = mime_type or mimetypes.guess_type(file.name)[0]
    if not mime_type:
        typer.echo(f"❌ Cannot guess the MIME type of {file.name}; use --mime-type", err=True)
        raise typer.Exit(1)

    content = file.read_bytes()
    _run(
        ctx,
        lambda client: client.upload_media(
            creds["phone_number_id"], creds["access_token"], content, mime_type, file.name
        ),
    )


@media_app.command("url")
def media_url(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., help="Media ID"),
):
    """Print the signed download URL and metadata of a media object."""
    creds = _require("access_token")
    _run(
        ctx,
        lambda client: client.get_media_url(media_id, creds["access_token"]),
    )


@media_app.command("download")
def download_media(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., help="Media ID"),
    output: Path = typer.Argument(..., dir_okay=False, help="Destination file"),
):
    """Download a media object to a file."""
    creds = _require("access_token")

    async def operation(client: WhatsAppClient) -> None:
        info = await client.get_media_url(media_id, creds["access_token"])
        download = await client.download_media(info.url, creds["access_token"])
        content = await download.read()
        await asyncio.to_thread(output.write_bytes, content)
        typer.echo(f"✅ Saved {len(content)} bytes ({download.content_type}) to {output}")

    _run(ctx, operation)


@media_app.command("delete")
def delete_media(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., help="Media ID"),
):
    """Delete a media object."""
    creds = _require("access_token")
    _run(
        ctx,
        lambda client: client.delete_media(media_id, creds["access_token"]),
    )


if __name__ == "__main__":
    app()
