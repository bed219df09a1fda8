"""
Exceptions for the transport module.
"""
from typing import Optional

from ..exceptions import CosmosQueryError


class TransportError(CosmosQueryError):
    """Base exception for transport-related errors."""
    pass


class TransportConnectionError(TransportError):
    """Raised when connection to the node fails."""
    pass


class TransportResponseError(TransportError):
    """Raised when the node returns an HTTP or JSON-RPC error response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when a request to the node times out."""
    pass
