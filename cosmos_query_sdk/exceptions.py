"""
Exceptions for the Cosmos Query SDK.

Every error raised by the query layer derives from CosmosQueryError so callers
can catch the whole family, or branch on the specific subclass.
"""
from typing import Optional


class CosmosQueryError(Exception):
    """Base exception for all query-layer errors."""
    pass


class InvalidAddressError(CosmosQueryError, ValueError):
    """Raised when an address fails bech32 decoding or prefix validation."""
    pass


class QueryError(CosmosQueryError):
    """Raised when the node answers a query with a non-zero status code."""

    def __init__(self, message: str, code: int = 0, log: str = "", path: Optional[str] = None):
        self.code = code
        self.log = log
        self.path = path
        super().__init__(message)


class KeyMismatchError(CosmosQueryError):
    """
    Raised when a verified query returns a value for a different key.

    This is never tolerated: it means the responder is misbehaving or the
    request was routed to the wrong store.
    """

    def __init__(self, expected: bytes, actual: bytes, store: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.store = store
        super().__init__(
            f"Response key {actual.hex().upper()} doesn't match query key "
            f"{expected.hex().upper()}" + (f" (store: {store})" if store else "")
        )


class ProofVerificationError(CosmosQueryError):
    """Raised when an injected proof verifier rejects a query response."""
    pass


class ResultSetTooLargeError(CosmosQueryError):
    """Raised when a search matches more results than fit on a single page."""

    def __init__(self, total_count: int, limit: int):
        self.total_count = total_count
        self.limit = limit
        super().__init__(
            "Found more results on the backend than we can process currently. "
            f"Results: {total_count}, supported: {limit}"
        )


class AccountNotFoundError(CosmosQueryError):
    """Raised when an operation needs an account that does not exist on chain."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(
            f"Account {address} does not exist on chain. "
            "Send some tokens there before trying to query nonces."
        )


class FormatError(CosmosQueryError, ValueError):
    """Raised when the backend returns a malformed hash, height or amount."""
    pass


class DecodeError(FormatError):
    """Raised when a numeric field in a backend response cannot be decoded."""
    pass


class UnsupportedTypeError(CosmosQueryError):
    """Raised when a decoded protocol type is not known to this client."""

    def __init__(self, type_url: str):
        self.type_url = type_url
        super().__init__(f"Unsupported type: {type_url}")
