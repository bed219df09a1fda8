"""
Normalization of node wire responses into typed results.

REST responses mix decimal-string and native integers, omit optional
fields and carry hex or base64 payloads. Everything here maps those raw
dicts into the models of ``cosmos_query_sdk.models`` and rejects malformed
values with FormatError (or its DecodeError subclass for numbers).
"""
import base64
import binascii
import re
from typing import Any, Dict, Optional

from .address import decode_bech32_pubkey
from .exceptions import DecodeError, FormatError
from .logs import parse_logs
from .models import (
    Account, Block, BlockHeader, BlockVersion, BroadcastFailure, BroadcastResult,
    BroadcastSuccess, Coin, IndexedTx, MAX_HEIGHT, PubKey
)

_DECIMAL = re.compile(r"[0-9]+")
_TX_HASH = re.compile(r"([0-9A-F][0-9A-F])+")


def parse_uint(value: Any, field: str = "value", maximum: Optional[int] = None) -> int:
    """
    Parse a non-negative integer sent either natively or as a decimal string.

    Raises:
        DecodeError: If the value is not a non-negative decimal integer
    """
    if isinstance(value, bool):
        raise DecodeError(f"Invalid {field}: {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DECIMAL.fullmatch(value):
        number = int(value, 10)
    else:
        raise DecodeError(f"Invalid {field}: {value!r}")
    if number < 0 or (maximum is not None and number > maximum):
        raise DecodeError(f"{field} out of range: {number}")
    return number


def parse_optional_uint(value: Any, field: str = "value") -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_uint(value, field)


def validate_tx_hash(tx_hash: Any) -> str:
    """
    Raises:
        FormatError: If the hash is not non-empty upper-case hex
    """
    if not isinstance(tx_hash, str) or not _TX_HASH.fullmatch(tx_hash):
        raise FormatError("Received ill-formatted txhash. Must be non-empty upper-case hex")
    return tx_hash


def coin_from_raw(raw: Dict[str, Any]) -> Coin:
    """
    Raises:
        FormatError: If denom or amount is missing, or amount is not a decimal
    """
    denom = raw.get("denom")
    amount = raw.get("amount")
    if not isinstance(denom, str) or not isinstance(amount, str):
        raise FormatError(f"Coin must have string denom and amount: {raw!r}")
    if not _DECIMAL.fullmatch(amount):
        raise FormatError(f"Invalid coin amount: {amount!r}")
    return Coin(denom=denom, amount=amount)


def indexed_tx_from_rest(item: Dict[str, Any]) -> IndexedTx:
    """Map one item of a ``/txs`` search response"""
    return IndexedTx(
        height=parse_uint(item.get("height"), "height"),
        hash=item.get("txhash", ""),
        code=parse_uint(item.get("code") or 0, "code"),
        raw_log=item.get("raw_log") or "",
        logs=parse_logs(item.get("logs") or []),
        tx=item.get("tx"),
        gas_wanted=parse_optional_uint(item.get("gas_wanted"), "gas_wanted"),
        gas_used=parse_optional_uint(item.get("gas_used"), "gas_used"),
        timestamp=item.get("timestamp") or "",
    )


def _pubkey_from_rest(raw: Any) -> Optional[PubKey]:
    if not raw:
        return None
    if isinstance(raw, str):
        try:
            return decode_bech32_pubkey(raw)
        except ValueError as e:
            raise FormatError(f"Invalid account public key: {e}") from e
    if isinstance(raw, dict) and "type" in raw and "value" in raw:
        return PubKey(type=raw["type"], value=raw["value"])
    raise FormatError(f"Unsupported public key format: {raw!r}")


def account_from_rest(value: Dict[str, Any]) -> Optional[Account]:
    """
    Map the ``result.value`` of an auth account response.

    Returns:
        The account, or None when the node reports an empty address (the
        account does not exist on chain)
    """
    address = value.get("address") or ""
    if address == "":
        return None
    return Account(
        address=address,
        balance=[coin_from_raw(c) for c in value.get("coins") or []],
        pubkey=_pubkey_from_rest(value.get("public_key")),
        account_number=parse_uint(value.get("account_number", 0), "account_number"),
        sequence=parse_uint(value.get("sequence", 0), "sequence"),
    )


def block_from_rest(response: Dict[str, Any]) -> Block:
    """Map a ``/blocks/<height>`` or ``/blocks/latest`` response"""
    try:
        block_id = response["block_id"]["hash"]
        header = response["block"]["header"]
        data = response["block"].get("data") or {}
    except (KeyError, TypeError) as e:
        raise FormatError(f"Malformed block response: missing {e}") from e

    try:
        txs = [base64.b64decode(tx, validate=True) for tx in data.get("txs") or []]
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid base64 transaction in block: {e}") from e

    version = header.get("version") or {}
    return Block(
        id=block_id,
        header=BlockHeader(
            version=BlockVersion(block=str(version.get("block", "")), app=str(version.get("app", "0"))),
            height=parse_uint(header.get("height"), "height"),
            chain_id=header.get("chain_id", ""),
            time=header.get("time", ""),
        ),
        txs=txs,
    )


def broadcast_result_from_rest(result: Dict[str, Any]) -> BroadcastResult:
    """
    Classify a ``POST /txs`` response.

    A present, non-zero ``code`` is a failure; an absent or zero code is a
    success.

    Raises:
        FormatError: If the returned hash is not non-empty upper-case hex
    """
    tx_hash = validate_tx_hash(result.get("txhash"))
    code = parse_uint(result.get("code") or 0, "code")
    raw_log = result.get("raw_log") or ""

    if code:
        return BroadcastFailure(
            transaction_hash=tx_hash,
            height=parse_uint(result.get("height"), "height", maximum=MAX_HEIGHT),
            code=code,
            raw_log=raw_log,
        )

    data = None
    if result.get("data"):
        try:
            data = bytes.fromhex(result["data"])
        except ValueError as e:
            raise FormatError(f"Invalid hex data in broadcast result: {e}") from e
    return BroadcastSuccess(
        transaction_hash=tx_hash,
        logs=parse_logs(result.get("logs") or []),
        raw_log=raw_log,
        data=data,
    )
