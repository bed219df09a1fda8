"""
Transport layer for ABCI queries.

This module provides an abstraction over the protocol used to send ABCI
queries to a node, so that the query gateway works the same whether it
talks to a Tendermint RPC endpoint or to an in-memory stub.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class AbciQueryResponse:
    """
    Raw response envelope of a single ABCI query.

    Shared across transport implementations to provide a consistent
    interface regardless of the underlying protocol.
    """
    key: bytes = b""
    value: bytes = b""
    code: int = 0
    log: str = ""
    height: int = 0
    # Proof operations as returned by the node; opaque to this layer
    proof: Optional[Any] = field(default=None, repr=False)


class QueryTransport(ABC):
    """
    Abstract base class for ABCI query transports.

    Retry and backoff policies belong to implementations of this class,
    never to the query gateway.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this transport is available for use.

        Returns:
            True if transport is available, False otherwise
        """
        pass

    @abstractmethod
    def initialize(self, url: str, verify_ssl: bool = True) -> None:
        """
        Initialize the transport with the given node URL.

        Args:
            url: URL of the node's RPC endpoint
            verify_ssl: Whether to verify SSL certificates

        Raises:
            TransportConnectionError: If connection initialization fails
        """
        pass

    @abstractmethod
    def abci_query(self, path: str, data: bytes, prove: bool = False) -> AbciQueryResponse:
        """
        Send a single ABCI query.

        Args:
            path: Store path (``/store/<name>/key``) or gRPC method path
            data: Query key or encoded request
            prove: Whether to request a Merkle proof with the value

        Returns:
            The raw response envelope; a non-zero code is not raised here

        Raises:
            TransportError: If the node cannot be reached or answers garbage
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections or resources."""
        pass
