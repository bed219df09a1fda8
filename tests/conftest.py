"""
Pytest fixtures for the Cosmos Query SDK tests.
"""
import pytest

from cosmos_query_sdk import _rate_limited_log
from cosmos_query_sdk.client import CosmosClient
from cosmos_query_sdk.transport.stub_transport import StubTransport
from tests.test_helpers import TEST_LCD_URL, make_address


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Rate-limited warnings must not leak between tests"""
    _rate_limited_log._log_cache.clear()
    yield
    _rate_limited_log._log_cache.clear()


@pytest.fixture
def address():
    return make_address()


@pytest.fixture
def stub_transport():
    transport = StubTransport(height=42)
    transport.initialize("stub://local")
    return transport


@pytest.fixture
def client():
    with CosmosClient(TEST_LCD_URL) as c:
        yield c
