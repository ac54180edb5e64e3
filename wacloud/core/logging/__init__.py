"""Logging module for wacloud."""

from .context import account_context, get_current_account_context
from .logger import get_logger, setup_app_logging, setup_logging

__all__ = [
    "account_context",
    "get_current_account_context",
    "get_logger",
    "setup_app_logging",
    "setup_logging",
]
