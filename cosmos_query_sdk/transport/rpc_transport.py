"""
Tendermint RPC transport implementation.

Sends ``abci_query`` requests as JSON-RPC 2.0 over HTTP(S).
"""
import base64
import binascii
import itertools
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import get_timeout, validate_url
from .exceptions import (
    TransportConnectionError, TransportResponseError, TransportTimeoutError
)
from .transport import AbciQueryResponse, QueryTransport

logger = logging.getLogger(__name__)


def _b64(value: Optional[str]) -> bytes:
    if not value:
        return b""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TransportResponseError(f"Invalid base64 in abci_query response: {e}") from e


class RpcTransport(QueryTransport):
    """
    JSON-RPC transport talking to a Tendermint RPC endpoint.
    """

    def __init__(self, retry_count: int = 3, timeout: Optional[int] = None):
        """
        Initialize the RPC transport.

        Args:
            retry_count: Number of retries for failed HTTP requests
            timeout: Request timeout in seconds (defaults to COSMOS_QUERY_TIMEOUT or 30s)
        """
        self.url: Optional[str] = None
        self.session: Optional[requests.Session] = None
        self.retry_count = retry_count
        self.timeout = timeout if timeout is not None else get_timeout()
        self.verify_ssl = True
        self._ids = itertools.count(1)

    def is_available(self) -> bool:
        return True

    def initialize(self, url: str, verify_ssl: bool = True) -> None:
        """
        Initialize the transport for the given RPC URL.

        Raises:
            ValueError: If the URL is invalid or insecure
        """
        validate_url(url, "rpc_url")
        self.url = url.rstrip('/')
        self.verify_ssl = verify_ssl

        # Setup HTTP session with retries
        self.session = requests.Session()
        retries = Retry(
            total=self.retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
            connect=self.retry_count,
            read=self.retry_count,
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))
        logger.debug(f"Initialized RPC transport for {self.url}")

    def _rpc(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.session is None:
            raise TransportConnectionError("RPC transport not initialized")

        request_id = next(self._ids)
        body = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout, verify=self.verify_ssl)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            raise TransportTimeoutError(f"{method} timed out after {self.timeout}s") from e
        except requests.ConnectionError as e:
            raise TransportConnectionError(f"Node unavailable at {self.url}: {e}") from e
        except requests.HTTPError as e:
            raise TransportResponseError(
                f"{method} failed with HTTP {e.response.status_code}", e.response.status_code
            ) from e
        except ValueError as e:
            raise TransportResponseError(f"Invalid JSON in {method} response: {e}") from e

        if not isinstance(payload, dict):
            raise TransportResponseError(f"Unexpected {method} response: {payload!r}")
        if payload.get("error"):
            error = payload["error"]
            message = str(error)
            if isinstance(error, dict):
                message = error.get("data") or error.get("message") or message
            raise TransportResponseError(f"{method} failed: {message}")
        if "result" not in payload:
            raise TransportResponseError(f"Missing result in {method} response")
        return payload["result"]

    def abci_query(self, path: str, data: bytes, prove: bool = False) -> AbciQueryResponse:
        logger.debug(f"abci_query path={path} data={data.hex()} prove={prove}")
        result = self._rpc("abci_query", {"path": path, "data": data.hex(), "prove": prove})

        response = result.get("response") or {}
        try:
            height = int(response.get("height") or 0)
            code = int(response.get("code") or 0)
        except (TypeError, ValueError) as e:
            raise TransportResponseError(f"Invalid number in abci_query response: {e}") from e

        return AbciQueryResponse(
            key=_b64(response.get("key")),
            value=_b64(response.get("value")),
            code=code,
            log=response.get("log") or "",
            height=height,
            proof=response.get("proofOps") or response.get("proof"),
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session is not None:
            self.session.close()
            self.session = None
            logger.debug("RPC transport closed")
