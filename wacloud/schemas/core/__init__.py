"""Core schema building blocks shared by every WhatsApp shape."""

from .base_models import RequestModel, ResponseModel
from .unions import ordered_union
from .validation import dump_query, dump_request, parse_response, validate_request

__all__ = [
    "RequestModel",
    "ResponseModel",
    "ordered_union",
    "validate_request",
    "parse_response",
    "dump_request",
    "dump_query",
]
