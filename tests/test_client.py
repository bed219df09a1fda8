"""
Tests for the REST based CosmosClient.
"""
import base64
import hashlib

import pytest
import requests

from cosmos_query_sdk import CosmosClient
from cosmos_query_sdk.exceptions import AccountNotFoundError, FormatError, ResultSetTooLargeError
from cosmos_query_sdk.models import (
    BroadcastFailure, BroadcastMode, BroadcastSuccess, SearchByHeightQuery,
    SearchBySentFromOrToQuery, SearchTxFilter
)
from cosmos_query_sdk.transport.exceptions import (
    TransportConnectionError, TransportResponseError
)
from tests.test_helpers import HASH_1, HASH_2, HASH_3, TEST_LCD_URL, rest_tx, txs_page


def _account_response(address, height="1234"):
    return {
        "height": height,
        "result": {
            "type": "cosmos-sdk/Account",
            "value": {
                "address": address,
                "coins": [{"denom": "ucosm", "amount": "1000000"}],
                "public_key": "",
                "account_number": 4,
                "sequence": "17",
            },
        },
    }


EMPTY_ACCOUNT = {
    "height": "1234",
    "result": {
        "type": "cosmos-sdk/Account",
        "value": {"address": "", "coins": [], "public_key": "", "account_number": "0", "sequence": "0"},
    },
}


def _block_response(height="99"):
    return {
        "block_id": {"hash": "B10C"},
        "block": {
            "header": {
                "version": {"block": "10", "app": "0"},
                "height": height,
                "chain_id": "testing",
                "time": "2020-02-15T10:39:10.4696305Z",
            },
            "data": {"txs": None},
        },
    }


class TestConstruction:
    def test_rejects_insecure_remote_url(self):
        with pytest.raises(ValueError, match="https"):
            CosmosClient("http://lcd.example.com")

    def test_allows_localhost(self):
        client = CosmosClient("http://localhost:1317/")
        assert client.lcd.api_url == "http://localhost:1317"

    def test_insecure_env_override(self, monkeypatch):
        monkeypatch.setenv("COSMOS_QUERY_INSECURE", "1")
        CosmosClient("http://lcd.example.com")

    def test_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("COSMOS_QUERY_TIMEOUT", "7")
        assert CosmosClient(TEST_LCD_URL).lcd.timeout == 7


class TestChainInfo:
    def test_get_chain_id_is_cached(self, client, requests_mock):
        adapter = requests_mock.get(f"{TEST_LCD_URL}/node_info", json={"node_info": {"network": "testing"}})

        assert client.get_chain_id() == "testing"
        assert client.get_chain_id() == "testing"
        assert adapter.call_count == 1

    def test_empty_chain_id(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/node_info", json={"node_info": {"network": ""}})
        with pytest.raises(FormatError, match="Chain ID"):
            client.get_chain_id()

    def test_get_height_from_latest_block(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/blocks/latest", json=_block_response("321"))
        assert client.get_height() == 321

    def test_get_height_uses_known_address(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", json=_account_response(address, "555"))
        latest = requests_mock.get(f"{TEST_LCD_URL}/blocks/latest", json=_block_response("1"))

        client.get_account(address)
        assert client.any_valid_address == address
        assert client.get_height() == 555
        assert latest.call_count == 0

    def test_get_block_by_height(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/blocks/99", json=_block_response("99"))

        block = client.get_block(99)

        assert block.id == "B10C"
        assert block.header.height == 99
        assert block.txs == []

    def test_get_latest_block(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/blocks/latest", json=_block_response("100"))
        assert client.get_block().header.height == 100


class TestAccounts:
    def test_get_account(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", json=_account_response(address))

        account = client.get_account(address)

        assert account.address == address
        assert account.balance[0].amount == "1000000"
        assert account.account_number == 4
        assert account.sequence == 17

    def test_get_account_missing(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", json=EMPTY_ACCOUNT)

        assert client.get_account(address) is None
        assert client.any_valid_address is None

    def test_get_nonce(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", json=_account_response(address))

        nonce = client.get_nonce(address)

        assert (nonce.account_number, nonce.sequence) == (4, 17)

    def test_get_nonce_missing_account(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", json=EMPTY_ACCOUNT)

        with pytest.raises(AccountNotFoundError, match="does not exist on chain"):
            client.get_nonce(address)


class TestIdentifier:
    def test_remote_encoding(self, client, requests_mock):
        encoded = b"\x0a\x02canonical-amino-bytes"
        adapter = requests_mock.post(f"{TEST_LCD_URL}/txs/encode",
                                     json={"tx": base64.b64encode(encoded).decode()})
        tx = {"type": "cosmos-sdk/StdTx", "value": {"msg": [], "fee": {}, "signatures": [], "memo": ""}}

        tx_id = client.get_identifier(tx)

        assert tx_id == hashlib.sha256(encoded).hexdigest().upper()
        assert adapter.last_request.json() == tx

    def test_local_bytes(self, client, requests_mock):
        adapter = requests_mock.post(f"{TEST_LCD_URL}/txs/encode", json={})
        assert client.get_identifier(b"raw") == hashlib.sha256(b"raw").hexdigest().upper()
        assert adapter.call_count == 0

    def test_bad_encode_response(self, client, requests_mock):
        requests_mock.post(f"{TEST_LCD_URL}/txs/encode", json={"error": "nope"})
        with pytest.raises(FormatError, match="/txs/encode"):
            client.get_identifier({"type": "cosmos-sdk/StdTx"})


class TestSearch:
    def test_sent_or_received(self, client, requests_mock, address):
        adapter = requests_mock.get(f"{TEST_LCD_URL}/txs", [
            {"json": txs_page([rest_tx(10, HASH_1), rest_tx(11, HASH_2)])},
            {"json": txs_page([rest_tx(11, HASH_2), rest_tx(12, HASH_3)])},
        ])

        txs = client.search_tx(SearchBySentFromOrToQuery(sent_from_or_to=address),
                               SearchTxFilter(min_height=10))

        assert [tx.hash for tx in txs] == [HASH_1, HASH_2, HASH_3]
        first, second = adapter.request_history
        assert f"message.sender={address}" in first.url
        assert f"transfer.recipient={address}" in second.url
        assert "tx.minheight=10" in first.url
        assert first.url.endswith("limit=100")

    def test_too_many_results(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/txs", json=txs_page([], page_total="3", total_count=250))

        with pytest.raises(ResultSetTooLargeError, match="Results: 250, supported: 100"):
            client.search_tx(SearchByHeightQuery(height=5))

    def test_out_of_range_height_no_request(self, client, requests_mock):
        adapter = requests_mock.get(f"{TEST_LCD_URL}/txs", json=txs_page([]))

        txs = client.search_tx(SearchByHeightQuery(height=5), SearchTxFilter(min_height=10, max_height=20))

        assert txs == []
        assert adapter.call_count == 0


class TestBroadcast:
    def test_post_tx_success(self, client, requests_mock):
        adapter = requests_mock.post(f"{TEST_LCD_URL}/txs", json={
            "height": "42", "txhash": HASH_1, "raw_log": "[]",
            "logs": [{"msg_index": 0, "log": "", "events": []}],
        })
        tx = {"msg": [], "fee": {}, "signatures": [], "memo": ""}

        result = client.post_tx(tx)

        assert isinstance(result, BroadcastSuccess)
        assert result.transaction_hash == HASH_1
        assert adapter.last_request.json() == {"tx": tx, "mode": "block"}

    def test_post_tx_failure(self, client, requests_mock):
        requests_mock.post(f"{TEST_LCD_URL}/txs", json={
            "height": "42", "txhash": HASH_1, "code": 5, "raw_log": "insufficient funds",
        })

        result = client.broadcast_tx({"msg": []})

        assert isinstance(result, BroadcastFailure)
        assert result.code == 5
        assert result.height == 42

    def test_post_tx_bad_hash(self, client, requests_mock):
        requests_mock.post(f"{TEST_LCD_URL}/txs", json={"height": "0", "txhash": "deadbeef"})
        with pytest.raises(FormatError):
            client.post_tx({"msg": []})

    def test_broadcast_mode_sync(self, requests_mock):
        adapter = requests_mock.post(f"{TEST_LCD_URL}/txs", json={"height": "0", "txhash": HASH_1})
        client = CosmosClient(TEST_LCD_URL, broadcast_mode=BroadcastMode.SYNC)

        client.post_tx({"msg": []})

        assert adapter.last_request.json()["mode"] == "sync"


class TestErrors:
    def test_http_error_carries_status_and_detail(self, client, requests_mock, address):
        requests_mock.get(f"{TEST_LCD_URL}/auth/accounts/{address}", status_code=400,
                          json={"error": "decoding bech32 failed"})

        with pytest.raises(TransportResponseError) as exc_info:
            client.get_account(address)

        assert exc_info.value.status_code == 400
        assert "decoding bech32 failed" in str(exc_info.value)
        assert "/auth/accounts/" in str(exc_info.value)

    def test_connection_error(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/node_info", exc=requests.ConnectionError("down"))
        with pytest.raises(TransportConnectionError):
            client.get_chain_id()

    def test_invalid_json(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/blocks/latest", text="<html>")
        with pytest.raises(TransportResponseError, match="Invalid JSON"):
            client.get_block()

    def test_non_object_body(self, client, requests_mock):
        requests_mock.get(f"{TEST_LCD_URL}/node_info", json=["testing"])
        with pytest.raises(TransportResponseError, match="Unexpected response"):
            client.get_chain_id()


class TestFromNetwork:
    def test_uses_configured_lcd_url(self, monkeypatch):
        monkeypatch.delenv("LOCALNET_LCD_URL", raising=False)
        client = CosmosClient.from_network("localnet")
        assert client.lcd.api_url == "http://localhost:1317"

    def test_override_wins(self):
        client = CosmosClient.from_network("localnet", api_url=TEST_LCD_URL, search_limit=5)
        assert client.lcd.api_url == TEST_LCD_URL.rstrip("/")
        assert client.search_engine.limit == 5

    def test_unknown_network(self):
        with pytest.raises(ValueError, match="Unknown network"):
            CosmosClient.from_network("nope")
