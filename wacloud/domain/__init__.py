"""
Domain layer: the transport contract and the request/response descriptions
exchanged across it.
"""

from .interfaces import IWhatsAppTransport

__all__ = ["IWhatsAppTransport"]
