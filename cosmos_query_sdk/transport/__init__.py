"""
Transports for sending ABCI queries to a node.
"""
import logging

from .exceptions import (
    TransportError, TransportConnectionError, TransportResponseError,
    TransportTimeoutError
)
from .transport import AbciQueryResponse, QueryTransport

__all__ = ['AbciQueryResponse', 'QueryTransport', 'TransportError',
           'TransportConnectionError', 'TransportResponseError',
           'TransportTimeoutError', 'get_transport']

logger = logging.getLogger(__name__)


def get_transport(url: str, verify_ssl: bool = True, **kwargs) -> QueryTransport:
    """
    Get an initialized transport for the given URL.

    ``stub://`` URLs give an in-memory transport; everything else is
    treated as a Tendermint RPC endpoint.

    Args:
        url: Node RPC URL
        verify_ssl: Whether to verify SSL certificates
        **kwargs: Passed to the RPC transport constructor

    Returns:
        Transport implementation
    """
    if url.startswith("stub://"):
        from .stub_transport import StubTransport
        transport = StubTransport()
        logger.info("Using stub transport for ABCI queries")
    else:
        from .rpc_transport import RpcTransport
        transport = RpcTransport(**kwargs)
        logger.info("Using Tendermint RPC transport for ABCI queries")
    transport.initialize(url, verify_ssl=verify_ssl)
    return transport
