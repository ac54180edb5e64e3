"""
Exception taxonomy for the WhatsApp Cloud API client.

- ValidationError: a caller-supplied payload broke a structural constraint.
  Raised before any network call.
- TransportError: the transport reported a non-2xx response.
- ResponseShapeError: the transport reported success but the body does not
  match the expected response schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wacloud.messaging.whatsapp.models.error_models import WhatsAppErrorDetail


@dataclass(frozen=True)
class ValidationIssue:
    """A single violated constraint.

    Attributes:
        path: Dotted location of the offending field ("" for the root)
        rule: Machine-readable rule name (e.g. "string_too_long")
        message: Human-readable description
    """

    path: str
    rule: str
    message: str

    def __str__(self) -> str:
        location = self.path or "<root>"
        return f"{location}: {self.message} [{self.rule}]"


def _format_issues(issues: list[ValidationIssue]) -> str:
    return "; ".join(str(issue) for issue in issues)


class WhatsAppClientError(Exception):
    """Base exception for every failure surfaced by the client."""


class ValidationError(WhatsAppClientError):
    """Raised when a request payload fails validation."""

    def __init__(self, shape: str, issues: list[ValidationIssue]):
        self.shape = shape
        self.issues = issues
        super().__init__(
            f"Invalid {shape} ({len(issues)} issue(s)): {_format_issues(issues)}"
        )

    @property
    def paths(self) -> list[str]:
        """Field paths of every violated constraint."""
        return [issue.path for issue in self.issues]


class TransportError(WhatsAppClientError):
    """Raised when the transport reports a non-success response.

    Attributes:
        operation: Operation description (e.g. "sending message")
        body: Raw response body
        status: HTTP status code when the transport knows it
        error: Parsed vendor error envelope, if the body carried one
    """

    def __init__(
        self,
        operation: str,
        body: str,
        status: int | None = None,
        error: WhatsAppErrorDetail | None = None,
    ):
        self.operation = operation
        self.body = body
        self.status = status
        self.error = error
        super().__init__(f"Error {operation}: {body}")

    @property
    def code(self) -> int | None:
        """Vendor error code from the parsed envelope."""
        return self.error.code if self.error else None


class ResponseShapeError(WhatsAppClientError):
    """Raised when a successful response does not match its schema."""

    def __init__(self, operation: str, body: str, issues: list[ValidationIssue]):
        self.operation = operation
        self.body = body
        self.issues = issues
        super().__init__(
            f"Unexpected response while {operation}: {_format_issues(issues)}"
        )


class ReplayCacheMissError(WhatsAppClientError):
    """Raised by the replay transport when no recording exists for a request."""

    def __init__(self, method: str, path: str, cache_key: str):
        self.method = method
        self.path = path
        self.cache_key = cache_key
        super().__init__(
            f"No recorded response for {method} {path or '/'} (key {cache_key})"
        )
