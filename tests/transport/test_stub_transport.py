"""
Tests for the StubTransport implementation.
"""
import pytest

from cosmos_query_sdk.transport import AbciQueryResponse, get_transport
from cosmos_query_sdk.transport.exceptions import TransportConnectionError
from cosmos_query_sdk.transport.stub_transport import StubTransport


class TestStubTransport:
    """Tests for the StubTransport implementation."""

    def test_is_available(self):
        assert StubTransport().is_available() is True

    def test_initialization(self):
        transport = StubTransport()
        assert transport.initialized is False

        transport.initialize("stub://example")
        assert transport.initialized is True
        assert transport.url == "stub://example"

    def test_query_without_initialization(self):
        with pytest.raises(TransportConnectionError):
            StubTransport().abci_query("/store/acc/key", b"\x01")

    def test_proved_query_echoes_key(self, stub_transport):
        stub_transport.set_value("/store/bank/key", b"k", b"v")

        response = stub_transport.abci_query("/store/bank/key", b"k", prove=True)

        assert response.key == b"k"
        assert response.value == b"v"
        assert response.height == 42
        assert response.proof is not None

    def test_unset_slot_is_empty(self, stub_transport):
        response = stub_transport.abci_query("/store/bank/key", b"missing", prove=True)
        assert response.code == 0
        assert response.value == b""

    def test_unproved_query_has_no_key_or_proof(self, stub_transport):
        response = stub_transport.abci_query("/cosmos.bank.Query/AllBalances", b"req")
        assert response.key == b""
        assert response.proof is None

    def test_scripted_responses_fifo(self, stub_transport):
        stub_transport.push_response(AbciQueryResponse(code=1, log="first"))
        stub_transport.push_response(AbciQueryResponse(code=2, log="second"))

        assert stub_transport.abci_query("/x", b"").log == "first"
        assert stub_transport.abci_query("/x", b"").log == "second"
        assert stub_transport.abci_query("/x", b"").code == 0

    def test_calls_are_recorded(self, stub_transport):
        stub_transport.abci_query("/a", b"1", prove=True)
        stub_transport.abci_query("/b", b"2")
        assert stub_transport.calls == [("/a", b"1", True), ("/b", b"2", False)]

    def test_close(self, stub_transport):
        stub_transport.close()
        assert stub_transport.initialized is False


def test_get_transport_stub():
    transport = get_transport("stub://local")
    assert isinstance(transport, StubTransport)
    assert transport.initialized is True
