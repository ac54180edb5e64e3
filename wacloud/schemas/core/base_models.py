"""
Base Pydantic models for request and response shapes.

Request shapes are frozen and ignore keys they do not model: the client only
validates the fields it populates itself. A request shape can still refuse
specific keys through `forbidden_keys`, so an ordered union never resolves
to a variant that would silently drop them. Response shapes are frozen and
open: unknown keys sent by the server are kept on the instance but never
required.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class RequestModel(BaseModel):
    """Base class for every outgoing payload shape."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    forbidden_keys: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_forbidden_keys(cls, data: Any) -> Any:
        if cls.forbidden_keys and isinstance(data, dict):
            present = [key for key in cls.forbidden_keys if key in data]
            if present:
                raise ValueError(
                    f"{', '.join(repr(key) for key in present)} not allowed on {cls.__name__}"
                )
        return data


class ResponseModel(BaseModel):
    """Base class for every server response shape."""

    model_config = ConfigDict(extra="allow", frozen=True)
