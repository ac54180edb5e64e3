"""
wacloud core components: configuration, logging and the exception hierarchy.
"""

# Configuration & Settings
from .config.settings import settings

# Exceptions
from .exceptions import (
    ReplayCacheMissError,
    ResponseShapeError,
    TransportError,
    ValidationError,
    ValidationIssue,
    WhatsAppClientError,
)

# Logging System
from .logging import get_logger, setup_app_logging

__all__ = [
    # Configuration
    "settings",
    # Exceptions
    "WhatsAppClientError",
    "ValidationError",
    "ValidationIssue",
    "TransportError",
    "ResponseShapeError",
    "ReplayCacheMissError",
    # Logging
    "get_logger",
    "setup_app_logging",
]
