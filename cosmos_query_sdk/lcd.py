"""
Client for the REST API of a light client daemon (LCD).

Thin wrappers returning the decoded JSON bodies; mapping them into typed
results is the job of ``cosmos_query_sdk.normalize``.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import get_timeout, validate_url
from .models import BroadcastMode
from .transport.exceptions import (
    TransportConnectionError, TransportResponseError, TransportTimeoutError
)

logger = logging.getLogger(__name__)


class LcdClient:
    """
    HTTP client for the endpoints the query layer needs.
    """

    def __init__(
        self,
        api_url: str,
        broadcast_mode: BroadcastMode = BroadcastMode.BLOCK,
        retry_count: int = 3,
        timeout: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the LCD client.

        Args:
            api_url: URL of the REST server (e.g. "https://api.cosmos.network")
            broadcast_mode: When ``post_tx`` returns during transaction processing
            retry_count: Number of retries for HTTP requests
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost)
        """
        validate_url(api_url, "api_url")
        self.api_url = api_url.rstrip('/')
        self.broadcast_mode = BroadcastMode(broadcast_mode)
        self.timeout = timeout if timeout is not None else get_timeout()
        self.logger = logger or logging.getLogger(__name__)

        # Setup HTTP session with retries
        self.session = requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            # Broadcasting is not idempotent from the caller's view, only GETs retry
            allowed_methods=["GET"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise TransportTimeoutError(f"{method} {path} timed out after {self.timeout}s") from e
        except requests.ConnectionError as e:
            raise TransportConnectionError(f"REST server unavailable at {self.api_url}: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = (body.get("error") if isinstance(body, dict) else None) or response.text
            self.logger.error(f"{method} {path} failed with HTTP {response.status_code}: {detail}")
            raise TransportResponseError(
                f"{method} {path} failed with HTTP {response.status_code}: {detail}",
                response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportResponseError(f"Invalid JSON response from {path}: {e}") from e
        if not isinstance(body, dict):
            raise TransportResponseError(f"Unexpected response from {path}: {body!r}")
        return body

    def get(self, path: str, params: Optional[List[Tuple[str, Any]]] = None) -> Dict[str, Any]:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", path, json=body)

    def node_info(self) -> Dict[str, Any]:
        return self.get("/node_info")

    def blocks_latest(self) -> Dict[str, Any]:
        return self.get("/blocks/latest")

    def blocks(self, height: int) -> Dict[str, Any]:
        return self.get(f"/blocks/{height}")

    def auth_account(self, address: str) -> Dict[str, Any]:
        return self.get(f"/auth/accounts/{address}")

    def txs_query(self, terms: List[Tuple[str, Any]]) -> Dict[str, Any]:
        """
        Search transactions.

        Args:
            terms: Ordered ``(key, value)`` query terms, combined with AND
        """
        self.logger.debug(f"Searching transactions: {terms}")
        return self.get("/txs", params=terms)

    def encode_tx(self, tx: Dict[str, Any]) -> Dict[str, Any]:
        """Ask the node for the canonical (amino) encoding of a transaction"""
        return self.post("/txs/encode", tx)

    def post_tx(self, tx: Dict[str, Any]) -> Dict[str, Any]:
        """Broadcast a signed transaction (the ``value`` of a StdTx)"""
        return self.post("/txs", {"tx": tx, "mode": self.broadcast_mode.value})

    def close(self) -> None:
        self.session.close()
