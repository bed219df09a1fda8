"""
StargateClient - proof-backed state queries over ABCI.
"""
import logging
from typing import List, Optional

from google.protobuf.message import DecodeError as ProtobufDecodeError

from . import codec
from .address import decode_address
from .config import NetworkConfig
from .exceptions import AccountNotFoundError, FormatError, UnsupportedTypeError
from .keys import account_key, balance_key
from .models import Coin, NonceResult
from .normalize import coin_from_raw
from .query import ProofVerifier, QueryGateway
from .transport import QueryTransport, get_transport

ALL_BALANCES_PATH = "/cosmos.bank.Query/AllBalances"


class StargateClient:
    """
    Client reading account and bank state straight from the node's stores.
    """

    def __init__(
        self,
        transport: QueryTransport,
        proof_verifier: Optional[ProofVerifier] = None,
        logger: Optional[logging.Logger] = None,
        address_prefix: Optional[str] = None
    ):
        """
        Args:
            transport: Initialized transport used for every query
            proof_verifier: Optional verifier for returned proofs
            logger: Optional logger instance
            address_prefix: Expected bech32 prefix of addresses (not checked if None)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport
        self.address_prefix = address_prefix
        self.gateway = QueryGateway(transport, proof_verifier=proof_verifier, logger=self.logger)

    @classmethod
    def connect(cls, endpoint: str, proof_verifier: Optional[ProofVerifier] = None,
                **kwargs) -> "StargateClient":
        """Create a client for a Tendermint RPC endpoint"""
        return cls(get_transport(endpoint, **kwargs), proof_verifier=proof_verifier)

    @classmethod
    def from_network(cls, network: str, rpc_url: Optional[str] = None,
                     proof_verifier: Optional[ProofVerifier] = None, **kwargs) -> "StargateClient":
        """
        Create a client for a network known to NetworkConfig.

        Addresses are checked against the network's bech32 prefix.
        """
        endpoint = NetworkConfig.get_rpc_url(network, override=rpc_url)
        client = cls.connect(endpoint, proof_verifier=proof_verifier, **kwargs)
        client.address_prefix = NetworkConfig.get_bech32_prefix(network)
        return client

    def get_sequence(self, address: str) -> NonceResult:
        """
        Raises:
            AccountNotFoundError: If no account is stored for the address
            UnsupportedTypeError: If the stored account type is unknown
        """
        response_data = self.gateway.query_verified("acc", account_key(address, self.address_prefix))
        if not response_data:
            raise AccountNotFoundError(address)

        try:
            type_url, value = codec.decode_any(response_data)
        except ProtobufDecodeError as e:
            raise FormatError(f"Invalid account record for {address}: {e}") from e

        if type_url != codec.BASE_ACCOUNT_TYPE_URL:
            raise UnsupportedTypeError(type_url)
        try:
            account = codec.BaseAccount.FromString(value)
        except ProtobufDecodeError as e:
            raise FormatError(f"Invalid account record for {address}: {e}") from e

        return NonceResult(account_number=account.account_number, sequence=account.sequence)

    def get_balance(self, address: str, search_denom: str) -> Optional[Coin]:
        """
        Returns:
            The balance, or None if the address holds nothing of this denom
        """
        key = balance_key(address, search_denom, self.address_prefix)
        response_data = self.gateway.query_verified("bank", key)
        try:
            coin = codec.Coin.FromString(response_data)
        except ProtobufDecodeError as e:
            raise FormatError(f"Invalid balance record for {address}: {e}") from e
        if coin.denom == "":
            return None
        return coin_from_raw({"denom": coin.denom, "amount": coin.amount})

    def get_all_balances_unverified(self, address: str) -> List[Coin]:
        """
        Queries all balances for all denoms that belong to this address.

        Uses the gRPC query service, which iterates over the store internally,
        so no proof can be obtained for the result.
        """
        raw_address = decode_address(address, self.address_prefix)
        request = codec.QueryAllBalancesRequest(address=raw_address).SerializeToString()
        response_data = self.gateway.query_unverified(ALL_BALANCES_PATH, request)
        try:
            response = codec.QueryAllBalancesResponse.FromString(response_data)
        except ProtobufDecodeError as e:
            raise FormatError(f"Invalid AllBalances response for {address}: {e}") from e
        return [coin_from_raw({"denom": c.denom, "amount": c.amount}) for c in response.balances]

    def disconnect(self) -> None:
        self.transport.close()
