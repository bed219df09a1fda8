"""
Cosmos Query SDK - typed, verified queries against Cosmos SDK nodes.
"""
from .client import CosmosClient
from .stargate import StargateClient
from .query import ProofVerifier, QueryGateway
from .search import TxSearchEngine
from .keys import account_key, balance_key
from .identifier import compute_tx_id
from .config import NetworkConfig
from .models import (
    Account, Block, BlockHeader, BroadcastFailure, BroadcastMode, BroadcastResult,
    BroadcastSuccess, Coin, IndexedTx, Log, NonceResult, PubKey, SearchByHeightQuery,
    SearchByIdQuery, SearchBySentFromOrToQuery, SearchByTagsQuery, SearchTxFilter,
    SearchTxQuery, Tag, is_broadcast_failure
)
from .exceptions import (
    CosmosQueryError, InvalidAddressError, QueryError, KeyMismatchError,
    ProofVerificationError, ResultSetTooLargeError, AccountNotFoundError,
    FormatError, DecodeError, UnsupportedTypeError
)
from .version import __version__

__all__ = [
    "CosmosClient",
    "StargateClient",
    "ProofVerifier",
    "QueryGateway",
    "TxSearchEngine",
    "account_key",
    "balance_key",
    "compute_tx_id",
    "NetworkConfig",
    "Account",
    "Block",
    "BlockHeader",
    "BroadcastFailure",
    "BroadcastMode",
    "BroadcastResult",
    "BroadcastSuccess",
    "Coin",
    "IndexedTx",
    "Log",
    "NonceResult",
    "PubKey",
    "SearchByHeightQuery",
    "SearchByIdQuery",
    "SearchBySentFromOrToQuery",
    "SearchByTagsQuery",
    "SearchTxFilter",
    "SearchTxQuery",
    "Tag",
    "is_broadcast_failure",
    "CosmosQueryError",
    "InvalidAddressError",
    "QueryError",
    "KeyMismatchError",
    "ProofVerificationError",
    "ResultSetTooLargeError",
    "AccountNotFoundError",
    "FormatError",
    "DecodeError",
    "UnsupportedTypeError",
    "__version__",
]
