"""
Parse-or-fail entry points for request and response shapes.

Pydantic does the structural work; this module converts its errors into the
client's own exception types so callers never depend on Pydantic directly.
"""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from wacloud.core.exceptions import ResponseShapeError, ValidationError, ValidationIssue

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def shape_name(shape: Any) -> str:
    """Readable name for a model class or an annotated union alias."""
    return getattr(shape, "__name__", None) or repr(shape)


def issues_from_pydantic(error: PydanticValidationError) -> list[ValidationIssue]:
    """Convert every Pydantic error entry into a ValidationIssue."""
    issues = []
    for entry in error.errors(include_url=False):
        path = ".".join(str(part) for part in entry["loc"])
        issues.append(ValidationIssue(path=path, rule=entry["type"], message=entry["msg"]))
    return issues


def validate_request(
    shape: type[T] | Any,
    data: Any,
    *,
    context: dict[str, Any] | None = None,
    name: str | None = None,
) -> T:
    """Validate an outgoing payload against a request shape.

    Args:
        shape: Model class or annotated union describing the payload
        data: Untyped mapping, or an already validated value
        context: Optional validation context (e.g. parameter format policy)
        name: Shape name used in the error message

    Returns:
        The validated, typed value

    Raises:
        ValidationError: Listing every violated constraint
    """
    try:
        return _adapter(shape).validate_python(data, context=context)
    except PydanticValidationError as exc:
        raise ValidationError(name or shape_name(shape), issues_from_pydantic(exc)) from exc


def parse_response(shape: type[T] | Any, body: str, operation: str) -> T:
    """Parse a raw response body against a response shape.

    Raises:
        ResponseShapeError: If the body is not JSON or does not match the shape
    """
    try:
        return _adapter(shape).validate_json(body)
    except PydanticValidationError as exc:
        raise ResponseShapeError(operation, body, issues_from_pydantic(exc)) from exc


def dump_request(value: BaseModel) -> dict[str, Any]:
    """Serialize a validated request value to a JSON-ready dict.

    Optional fields that were never set are omitted.
    """
    return value.model_dump(mode="json", exclude_none=True, by_alias=True)


def dump_query(value: BaseModel) -> dict[str, str] | None:
    """Serialize a validated request value to URL query parameters.

    Returns None when no field is set.
    """
    params = {}
    for key, item in dump_request(value).items():
        if isinstance(item, bool):
            params[key] = "true" if item else "false"
        else:
            params[key] = str(item)
    return params or None
