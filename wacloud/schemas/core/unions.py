"""
Ordered first-match union resolution.

Some vendor shapes cannot be told apart by a tag alone: a template BODY
component may come with named examples, positional examples, no examples or
as an authentication body. `ordered_union` builds an annotated type that
tries each candidate model in declaration order and keeps the first one that
validates completely. When nothing matches, a single `union_mismatch` error
lists every candidate that was tried along with the reason it was rejected.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Union, get_args

from pydantic import (
    BaseModel,
    PlainSerializer,
    PlainValidator,
    SerializationInfo,
    ValidationInfo,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError


def _literal_values(model: type[BaseModel], field_name: str) -> tuple[Any, ...]:
    field = model.model_fields.get(field_name)
    if field is None:
        return ()
    values = get_args(field.annotation)
    return tuple(v.value if hasattr(v, "value") else v for v in values)


def _dump_resolved(value: BaseModel, info: SerializationInfo) -> Any:
    # dump by the runtime model; the static union cannot pick the member
    return value.model_dump(
        mode=info.mode,
        by_alias=bool(info.by_alias),
        exclude_unset=info.exclude_unset,
        exclude_defaults=info.exclude_defaults,
        exclude_none=info.exclude_none,
        round_trip=info.round_trip,
    )


def _describe_failure(model: type[BaseModel], error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{model.__name__} ({location}: {first['msg']})"


def ordered_union(*candidates: type[BaseModel], tag: str | None = None) -> Any:
    """Build a union type resolved by ordered first-match.

    Args:
        *candidates: Candidate models, most preferred first
        tag: Optional literal field used to narrow the candidates before
            structural matching (e.g. "type")

    Returns:
        An ``Annotated`` union usable as a Pydantic field annotation
    """
    if not candidates:
        raise ValueError("ordered_union requires at least one candidate")

    tag_values = {
        candidate: _literal_values(candidate, tag) if tag else ()
        for candidate in candidates
    }

    def _narrow(value: Any) -> tuple[type[BaseModel], ...]:
        if tag is None or not isinstance(value, Mapping) or tag not in value:
            return candidates
        return tuple(
            candidate
            for candidate in candidates
            # candidates without a literal tag admit any value
            if not tag_values[candidate] or value[tag] in tag_values[candidate]
        )

    def _resolve(value: Any, info: ValidationInfo) -> BaseModel:
        if isinstance(value, candidates):
            return value

        tried = _narrow(value)
        if not tried:
            expected = sorted(
                {str(v) for values in tag_values.values() for v in values}
            )
            raise PydanticCustomError(
                "union_tag_invalid",
                "Input tag '{tag}' = {found} does not match any of: {expected}",
                {"tag": tag, "found": repr(value[tag]), "expected": expected},
            )

        failures = []
        for candidate in tried:
            try:
                return candidate.model_validate(value, context=info.context)
            except PydanticValidationError as exc:
                failures.append(_describe_failure(candidate, exc))

        raise PydanticCustomError(
            "union_mismatch",
            "Input did not match any candidate shape: {failures}",
            {
                "candidates": [candidate.__name__ for candidate in tried],
                "failures": "; ".join(failures),
            },
        )

    return Annotated[  # noqa: UP007
        Union[candidates],
        PlainValidator(_resolve),
        PlainSerializer(_dump_resolved),
    ]
