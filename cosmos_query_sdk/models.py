"""
Data models for the Cosmos Query SDK.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Largest height the search filter can express (the 53-bit safe integer bound)
MAX_HEIGHT = 2**53 - 1


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BroadcastMode(str, Enum):
    """Point of transaction processing at which a broadcast returns."""
    BLOCK = "block"
    SYNC = "sync"
    ASYNC = "async"


class Coin(_Record):
    """A single balance entry; amount is a decimal integer string"""
    denom: str
    amount: str


class PubKey(_Record):
    """Amino JSON representation of a public key"""
    type: str
    value: str


class Account(_Record):
    address: str
    balance: List[Coin] = Field(default_factory=list)
    pubkey: Optional[PubKey] = None
    account_number: int = Field(..., ge=0)
    sequence: int = Field(..., ge=0)


class NonceResult(_Record):
    account_number: int = Field(..., ge=0)
    sequence: int = Field(..., ge=0)


class Attribute(_Record):
    key: str
    value: str = ""


class Event(_Record):
    type: str
    attributes: List[Attribute] = Field(default_factory=list)


class Log(_Record):
    msg_index: int
    log: str = ""
    events: List[Event] = Field(default_factory=list)


class IndexedTx(_Record):
    """A transaction that is indexed as part of the transaction history"""
    height: int
    # Upper-case hex, non-empty
    hash: str
    # 0 on success
    code: int = 0
    raw_log: str = ""
    logs: List[Log] = Field(default_factory=list)
    tx: Any = None
    gas_wanted: Optional[int] = None
    gas_used: Optional[int] = None
    # RFC 3339 time string, e.g. '2020-02-15T10:39:10.4696305Z'
    timestamp: str = ""


class BlockVersion(_Record):
    block: str
    app: str = "0"


class BlockHeader(_Record):
    version: BlockVersion
    height: int
    chain_id: str
    # RFC 3339 time string
    time: str


class Block(_Record):
    # Upper-case hex hash of the block header
    id: str
    header: BlockHeader
    txs: List[bytes] = Field(default_factory=list)


class BroadcastSuccess(_Record):
    transaction_hash: str
    logs: List[Log] = Field(default_factory=list)
    raw_log: str = ""
    data: Optional[bytes] = None


class BroadcastFailure(_Record):
    transaction_hash: str
    height: int
    code: int
    raw_log: str = ""


BroadcastResult = Union[BroadcastSuccess, BroadcastFailure]


def is_broadcast_failure(result: BroadcastResult) -> bool:
    """Check whether a broadcast result carries a non-zero result code"""
    return isinstance(result, BroadcastFailure)


class SearchByIdQuery(_Record):
    id: str


class SearchByHeightQuery(_Record):
    height: int


class SearchBySentFromOrToQuery(_Record):
    sent_from_or_to: str


class Tag(_Record):
    key: str
    value: str


class SearchByTagsQuery(_Record):
    """
    Arbitrary key/value pairs passed to the backend, combined with AND.

    More powerful and slightly lower level than the other search options.
    """
    tags: List[Tag]


SearchTxQuery = Union[
    SearchByIdQuery,
    SearchByHeightQuery,
    SearchBySentFromOrToQuery,
    SearchByTagsQuery,
]


class SearchTxFilter(_Record):
    min_height: int = Field(0, ge=0)
    max_height: int = MAX_HEIGHT


def raw_tags(tags: List[Dict[str, str]]) -> SearchByTagsQuery:
    """Build a tag query from plain ``{"key": ..., "value": ...}`` dicts"""
    return SearchByTagsQuery(tags=[Tag(**t) for t in tags])
