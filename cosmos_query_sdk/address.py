"""
Bech32 address and public key decoding.
"""
import base64
from typing import Optional, Tuple

from bech32 import bech32_decode, convertbits

from .exceptions import InvalidAddressError
from .models import PubKey

# Amino prefixes of the supported public key types
_PUBKEY_PREFIXES = {
    bytes.fromhex("eb5ae98721"): ("tendermint/PubKeySecp256k1", 33),
    bytes.fromhex("1624de6420"): ("tendermint/PubKeyEd25519", 32),
    bytes.fromhex("0dfb100520"): ("tendermint/PubKeySr25519", 32),
}


def decode_bech32(text: str) -> Tuple[str, bytes]:
    """
    Decode a bech32 string into its human readable prefix and raw bytes.

    Raises:
        InvalidAddressError: If the checksum or encoding is invalid
    """
    if not isinstance(text, str) or not text:
        raise InvalidAddressError(f"Invalid bech32 string: {text!r}")
    hrp, data = bech32_decode(text)
    if hrp is None or data is None:
        raise InvalidAddressError(f"Invalid bech32 string: {text}")
    raw = convertbits(data, 5, 8, False)
    if raw is None:
        raise InvalidAddressError(f"Invalid bech32 payload padding: {text}")
    return hrp, bytes(raw)


def decode_address(address: str, prefix: Optional[str] = None) -> bytes:
    """
    Decode a bech32 account address into raw address bytes.

    Args:
        address: Bech32 address such as ``cosmos1...``
        prefix: Expected human readable prefix (optional)

    Returns:
        Raw address bytes

    Raises:
        InvalidAddressError: If the address is malformed or has the wrong prefix
    """
    hrp, raw = decode_bech32(address)
    if prefix is not None and hrp != prefix:
        raise InvalidAddressError(f"Address {address} has prefix {hrp}, expected {prefix}")
    if not raw:
        raise InvalidAddressError(f"Address {address} decodes to empty data")
    return raw


def decode_bech32_pubkey(text: str) -> PubKey:
    """
    Decode a bech32 encoded amino public key (e.g. ``cosmospub1addwnpep...``).

    Raises:
        InvalidAddressError: If the string is not valid bech32
        ValueError: If the amino prefix or key length is not recognized
    """
    _, raw = decode_bech32(text)
    for prefix, (key_type, key_length) in _PUBKEY_PREFIXES.items():
        if raw.startswith(prefix):
            key = raw[len(prefix):]
            if len(key) != key_length:
                raise ValueError(f"Invalid {key_type} length: {len(key)} bytes")
            return PubKey(type=key_type, value=base64.b64encode(key).decode("ascii"))
    raise ValueError(f"Unsupported public key prefix: {raw[:5].hex()}")
