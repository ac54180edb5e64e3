"""
Domain interfaces.

Defines the contracts that infrastructure layer must implement.
"""

from .transport_interface import IWhatsAppTransport

__all__ = ["IWhatsAppTransport"]
