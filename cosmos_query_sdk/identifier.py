"""
Transaction identifiers.

A transaction ID is the upper-case hex SHA-256 of its canonical encoding.
"""
import hashlib
from typing import Callable, Optional, Union


def sha256_hex(data: bytes) -> str:
    """Upper-case hex SHA-256 digest of ``data``"""
    return hashlib.sha256(data).hexdigest().upper()


def compute_tx_id(encoded_tx: bytes) -> str:
    """
    Compute the transaction ID from canonical encoded transaction bytes.

    Args:
        encoded_tx: Canonical encoding of the transaction

    Returns:
        64 character upper-case hex string
    """
    if not isinstance(encoded_tx, (bytes, bytearray)):
        raise TypeError(f"encoded_tx must be bytes, got {type(encoded_tx).__name__}")
    return sha256_hex(bytes(encoded_tx))


def get_identifier(
    tx: Union[bytes, bytearray, dict],
    remote_encoder: Optional[Callable[[dict], bytes]] = None,
) -> str:
    """
    Compute the ID of a transaction, locally when possible.

    Already-encoded bytes are hashed directly. Structured transactions need
    the node's canonical (amino) encoder, which has no local implementation,
    so ``remote_encoder`` is asked for the canonical bytes first.

    Raises:
        ValueError: If ``tx`` is structured and no remote encoder is given
    """
    if isinstance(tx, (bytes, bytearray)):
        return compute_tx_id(tx)
    if remote_encoder is None:
        raise ValueError("A remote encoder is required to identify a structured transaction")
    return compute_tx_id(remote_encoder(tx))
