#!/usr/bin/env python3
"""
Example of reading account state with StargateClient.
"""
import os

from cosmos_query_sdk import AccountNotFoundError, StargateClient


def main():
    """
    Demonstrate ABCI store queries against a Tendermint RPC endpoint.

    This example shows how to:
    1. Connect to the RPC endpoint of a configured network
    2. Read account number and sequence
    3. Read a single balance (from the bank store)
    4. List all balances through the unverified gRPC query
    """
    # Read environment variables
    NETWORK = os.environ.get("NETWORK", "localnet")
    ADDRESS = os.environ.get("ADDRESS")
    DENOM = os.environ.get("DENOM", "ustake")

    # Verify configuration
    if not ADDRESS:
        print("ERROR: ADDRESS environment variable is required")
        return

    client = StargateClient.from_network(NETWORK)
    try:
        try:
            nonce = client.get_sequence(ADDRESS)
            print(f"Account number: {nonce.account_number}, sequence: {nonce.sequence}")
        except AccountNotFoundError:
            print(f"Account {ADDRESS} does not exist on chain yet")

        balance = client.get_balance(ADDRESS, DENOM)
        if balance is None:
            print(f"No {DENOM} balance")
        else:
            print(f"Balance: {balance.amount}{balance.denom}")

        print("All balances:")
        for coin in client.get_all_balances_unverified(ADDRESS):
            print(f"  {coin.amount}{coin.denom}")
    finally:
        client.disconnect()


if __name__ == "__main__":
    main()
