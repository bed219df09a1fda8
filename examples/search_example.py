#!/usr/bin/env python3
"""
Example of searching transactions with CosmosClient.
"""
import logging
import os

from cosmos_query_sdk import (
    CosmosClient,
    NetworkConfig,
    ResultSetTooLargeError,
    SearchBySentFromOrToQuery,
    SearchTxFilter,
)


def main():
    """
    Demonstrate transaction search against a REST server.

    This example shows how to:
    1. Initialize the client from a network configuration
    2. Read chain ID and current height
    3. Search transfers sent from or to an address in a height range
    4. Handle result sets larger than one page
    """
    logging.basicConfig(level=logging.INFO)

    # Read environment variables
    NETWORK = os.environ.get("NETWORK", "localnet")
    ADDRESS = os.environ.get("ADDRESS")
    MIN_HEIGHT = int(os.environ.get("MIN_HEIGHT", "0"))

    # Verify configuration
    if not ADDRESS:
        print("ERROR: ADDRESS environment variable is required")
        return

    print("Available networks:")
    for network_name in NetworkConfig.load_networks().keys():
        print(f"  - {network_name}")
    print()

    with CosmosClient.from_network(NETWORK) as client:
        print(f"Connected to chain: {client.get_chain_id()}")
        height = client.get_height()
        print(f"Current height: {height}")

        query = SearchBySentFromOrToQuery(sent_from_or_to=ADDRESS)
        search_filter = SearchTxFilter(min_height=MIN_HEIGHT, max_height=height)
        try:
            txs = client.search_tx(query, search_filter)
        except ResultSetTooLargeError as e:
            print(f"ERROR: {e}")
            print("Narrow the height range with MIN_HEIGHT and try again")
            return

        print(f"Found {len(txs)} transactions")
        for tx in txs:
            status = "ok" if tx.code == 0 else f"failed (code {tx.code})"
            print(f"  {tx.height:>10}  {tx.hash}  {status}")


if __name__ == "__main__":
    main()
