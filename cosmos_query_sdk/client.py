"""
CosmosClient - REST based client for a Cosmos SDK chain.
"""
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Union

from .config import NetworkConfig
from .exceptions import AccountNotFoundError, FormatError
from .identifier import get_identifier
from .lcd import LcdClient
from .models import (
    Account, Block, BroadcastMode, BroadcastResult, IndexedTx, NonceResult,
    SearchTxFilter, SearchTxQuery
)
from .normalize import (
    account_from_rest, block_from_rest, broadcast_result_from_rest, parse_uint
)
from .search import TxSearchEngine


class CosmosClient:
    """
    Client for reading from and broadcasting to a chain through its REST API.

    This instance caches the chain ID and remembers one address the chain
    considers valid. To benefit from that, keep one instance per backend for
    the lifetime of your application; switching backends needs a new one.
    """

    def __init__(
        self,
        api_url: str,
        broadcast_mode: BroadcastMode = BroadcastMode.BLOCK,
        retry_count: int = 3,
        timeout: Optional[int] = None,
        search_limit: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
        lcd_client: Optional[LcdClient] = None
    ):
        """
        Initialize the CosmosClient

        Args:
            api_url: URL of a light client daemon REST API
            broadcast_mode: At which point of processing ``post_tx`` returns
            retry_count: Number of retries for HTTP requests
            timeout: Timeout for HTTP requests in seconds
            search_limit: Page size used by transaction searches
            logger: Optional logger instance to use for debug/info logging
            lcd_client: Pre-built REST client (overrides the URL arguments)

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.lcd = lcd_client or LcdClient(
            api_url,
            broadcast_mode=broadcast_mode,
            retry_count=retry_count,
            timeout=timeout,
            logger=self.logger,
        )
        self.search_engine = TxSearchEngine(self.lcd.txs_query, limit=search_limit, logger=self.logger)
        # Any address the chain considers valid. Only a hint that makes
        # get_height cheaper; stale or missing values are harmless.
        self.any_valid_address: Optional[str] = None
        self._chain_id: Optional[str] = None

    @classmethod
    def from_network(cls, network: str, api_url: Optional[str] = None, **kwargs) -> "CosmosClient":
        """
        Create a client for a network known to NetworkConfig.

        Args:
            network: Network name (e.g. "cosmoshub")
            api_url: Optional REST URL overriding the configured one
            **kwargs: Passed to the constructor
        """
        return cls(NetworkConfig.get_lcd_url(network, override=api_url), **kwargs)

    def __enter__(self) -> "CosmosClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.lcd.close()

    def get_chain_id(self) -> str:
        """
        Raises:
            FormatError: If the node reports an empty chain ID
        """
        if not self._chain_id:
            response = self.lcd.node_info()
            chain_id = (response.get("node_info") or {}).get("network")
            if not chain_id:
                raise FormatError("Chain ID must not be empty")
            self._chain_id = chain_id
        return self._chain_id

    def get_height(self) -> int:
        if self.any_valid_address:
            response = self.lcd.auth_account(self.any_valid_address)
            return parse_uint(response.get("height"), "height")
        # Gets inefficient when blocks contain a lot of transactions since
        # the whole block has to be downloaded and decoded
        latest = self.lcd.blocks_latest()
        return block_from_rest(latest).header.height

    def get_identifier(self, tx: Union[bytes, Dict[str, Any]]) -> str:
        """
        Returns a 32 byte upper-case hex transaction hash (the transaction ID).

        Args:
            tx: Canonical transaction bytes, or a StdTx record which is
                encoded by the node since there is no local amino encoder
        """
        return get_identifier(tx, remote_encoder=self._encode_remote)

    def _encode_remote(self, tx: Dict[str, Any]) -> bytes:
        response = self.lcd.encode_tx(tx)
        try:
            return base64.b64decode(response["tx"], validate=True)
        except (KeyError, TypeError, binascii.Error, ValueError) as e:
            raise FormatError(f"Invalid response from /txs/encode: {e}") from e

    def get_account(self, address: str) -> Optional[Account]:
        """
        Returns:
            The account, or None if it does not exist on chain
        """
        response = self.lcd.auth_account(address)
        value = (response.get("result") or {}).get("value") or {}
        account = account_from_rest(value)
        if account is not None:
            self.any_valid_address = account.address
        return account

    def get_nonce(self, address: str) -> NonceResult:
        """
        Returns account number and sequence.

        Raises:
            AccountNotFoundError: If the account does not exist on chain
        """
        account = self.get_account(address)
        if account is None:
            raise AccountNotFoundError(address)
        return NonceResult(account_number=account.account_number, sequence=account.sequence)

    def get_block(self, height: Optional[int] = None) -> Block:
        """
        Gets block header and transactions

        Args:
            height: The height of the block. If None, the latest block is used.
        """
        response = self.lcd.blocks(height) if height is not None else self.lcd.blocks_latest()
        return block_from_rest(response)

    def search_tx(self, query: SearchTxQuery, filter: Optional[SearchTxFilter] = None) -> List[IndexedTx]:
        return self.search_engine.search(query, filter)

    def post_tx(self, tx: Dict[str, Any]) -> BroadcastResult:
        """
        Broadcast a signed transaction.

        Raises:
            FormatError: If the node answers with an ill-formatted hash
        """
        result = self.lcd.post_tx(tx)
        broadcast = broadcast_result_from_rest(result)
        self.logger.info(f"Transaction broadcast: {broadcast.transaction_hash}")
        return broadcast

    broadcast_tx = post_tx
