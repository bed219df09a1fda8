"""
Query gateway: single logical queries against a node's ABCI interface.

Verified queries ask the node for a Merkle proof and check that the echoed
key matches the requested one. Checking the proof itself against a trusted
state root is delegated to an optional ``ProofVerifier``; without one, values
are only as trustworthy as the node that served them.
"""
import logging
from typing import Optional, Protocol

from ._rate_limited_log import rate_limited_log
from .exceptions import KeyMismatchError, ProofVerificationError, QueryError
from .transport import AbciQueryResponse, QueryTransport

logger = logging.getLogger(__name__)


class ProofVerifier(Protocol):
    """Checks a proved query response against a trusted state root"""

    def verify(self, response: AbciQueryResponse, key: bytes) -> bool:
        ...


def store_path(store_name: str) -> str:
    # The store key of the module is needed here, not the module name
    return f"/store/{store_name}/key"


class QueryGateway:
    """
    Issues proved and unproved ABCI queries and enforces the response contract.
    """

    def __init__(
        self,
        transport: QueryTransport,
        proof_verifier: Optional[ProofVerifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            transport: Initialized transport used for every query
            proof_verifier: Optional verifier for returned proofs; when None,
                results are trusted as served by the node
            logger: Optional logger instance
        """
        self.transport = transport
        self.proof_verifier = proof_verifier
        self.logger = logger or logging.getLogger(__name__)

    @property
    def trustless(self) -> bool:
        """True when proofs are checked rather than the node being trusted"""
        return self.proof_verifier is not None

    def _check_code(self, response: AbciQueryResponse, path: str) -> None:
        if response.code:
            raise QueryError(
                f"Query {path} failed with ({response.code}): {response.log}",
                code=response.code,
                log=response.log,
                path=path,
            )

    def query_verified(self, store_name: str, key: bytes) -> bytes:
        """
        Query the value stored under ``key`` in ``store_name`` with a proof.

        Args:
            store_name: Store key of the module (e.g. ``acc``, ``bank``)
            key: Store key of the record

        Returns:
            Raw value bytes (empty if the slot is unset)

        Raises:
            QueryError: If the node answers with a non-zero code
            KeyMismatchError: If the node answers for a different key
            ProofVerificationError: If the injected verifier rejects the proof
        """
        path = store_path(store_name)
        response = self.transport.abci_query(path, key, prove=True)
        self._check_code(response, path)

        if bytes(response.key) != bytes(key):
            raise KeyMismatchError(expected=bytes(key), actual=bytes(response.key), store=store_name)

        if self.proof_verifier is None:
            rate_limited_log(
                "No proof verifier configured; verified query results are trusted as served by the node",
                level="warning",
                logger_instance=self.logger,
            )
        elif not self.proof_verifier.verify(response, key):
            raise ProofVerificationError(
                f"Proof for key {key.hex().upper()} in store {store_name} "
                f"at height {response.height} was rejected"
            )

        return response.value

    def query_unverified(self, path: str, request: bytes) -> bytes:
        """
        Send an unproved query, typically a gRPC method path such as
        ``/cosmos.bank.Query/AllBalances``.

        Raises:
            QueryError: If the node answers with a non-zero code
        """
        response = self.transport.abci_query(path, request, prove=False)
        self._check_code(response, path)
        return response.value
