"""
In-memory transport implementation.

Answers ABCI queries from a dictionary, for tests and local development
without a node.
"""
import logging
from typing import Dict, List, Optional, Tuple

from .exceptions import TransportConnectionError
from .transport import AbciQueryResponse, QueryTransport

logger = logging.getLogger(__name__)


class StubTransport(QueryTransport):
    """
    A dictionary-backed transport.

    Values are registered per ``(path, data)`` pair. Missing entries answer
    like a node does for an empty store slot: code 0, echoed key, empty value.
    Scripted responses, when queued, take precedence in FIFO order.
    """

    def __init__(self, height: int = 1):
        self.url: Optional[str] = None
        self.initialized = False
        self.height = height
        self.store: Dict[Tuple[str, bytes], bytes] = {}
        self.scripted: List[AbciQueryResponse] = []
        self.calls: List[Tuple[str, bytes, bool]] = []

    def is_available(self) -> bool:
        """Always True since the stub has no dependencies"""
        return True

    def initialize(self, url: str, verify_ssl: bool = True) -> None:
        self.url = url
        self.initialized = True
        logger.debug(f"Initialized stub transport for {url}")

    def set_value(self, path: str, data: bytes, value: bytes) -> None:
        self.store[(path, data)] = value

    def push_response(self, response: AbciQueryResponse) -> None:
        self.scripted.append(response)

    def abci_query(self, path: str, data: bytes, prove: bool = False) -> AbciQueryResponse:
        """
        Raises:
            TransportConnectionError: If the stub was not initialized
        """
        if not self.initialized:
            raise TransportConnectionError("Stub transport not initialized")

        self.calls.append((path, data, prove))
        if self.scripted:
            return self.scripted.pop(0)

        return AbciQueryResponse(
            key=data if prove else b"",
            value=self.store.get((path, data), b""),
            code=0,
            height=self.height,
            proof={"ops": []} if prove else None,
        )

    def close(self) -> None:
        self.initialized = False
