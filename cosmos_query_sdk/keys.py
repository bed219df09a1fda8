"""
Store keys for proof-backed state queries.

The node's prefix stores concatenate their prefix with the record key without
any separator, so these keys are plain byte concatenations.
"""
from typing import Optional

from .address import decode_address

# Module marker of the account store (x/auth)
ACCOUNT_KEY_PREFIX = b"\x01"
# Namespace label of the balance prefix store (x/bank)
BALANCES_PREFIX = b"balances"


def account_key(address: str, prefix: Optional[str] = None) -> bytes:
    """Key of the account record for ``address`` in the ``acc`` store"""
    return ACCOUNT_KEY_PREFIX + decode_address(address, prefix)


def balance_key(address: str, denom: str, prefix: Optional[str] = None) -> bytes:
    """Key of the ``denom`` balance entry for ``address`` in the ``bank`` store"""
    return BALANCES_PREFIX + decode_address(address, prefix) + denom.encode("ascii")
