"""
Shared test constants and response builders.
"""
from bech32 import bech32_encode, convertbits

TEST_LCD_URL = "https://lcd.example.com"
TEST_RPC_URL = "https://rpc.example.com"

RAW_ADDRESS = bytes(range(1, 21))
OTHER_RAW_ADDRESS = bytes(range(101, 121))

HASH_1 = "1" * 64
HASH_2 = "2" * 64
HASH_3 = "3" * 64


def make_address(raw: bytes = RAW_ADDRESS, prefix: str = "cosmos") -> str:
    """Bech32 encode raw address bytes"""
    return bech32_encode(prefix, convertbits(raw, 8, 5))


def rest_tx(height, txhash, code=None, **extra):
    """One item of a /txs search response"""
    item = {
        "height": str(height),
        "txhash": txhash,
        "raw_log": "[]",
        "logs": [{"msg_index": 0, "log": "", "events": []}],
        "tx": {"type": "cosmos-sdk/StdTx", "value": {"msg": []}},
        "timestamp": "2020-02-15T10:39:10.4696305Z",
    }
    if code is not None:
        item["code"] = code
    item.update(extra)
    return item


def txs_page(txs, page_total="1", total_count=None):
    """A full /txs search response"""
    return {
        "total_count": str(total_count if total_count is not None else len(txs)),
        "count": str(len(txs)),
        "page_number": "1",
        "page_total": page_total,
        "limit": "100",
        "txs": txs,
    }
