"""
Network configuration for the Cosmos Query SDK.

Known networks ship in ``networks.json``. URLs can be overridden per call or
through ``<NETWORK>_RPC_URL`` / ``<NETWORK>_LCD_URL`` environment variables.
"""
import json
import logging
import os
import urllib.parse
from importlib import resources
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_SEARCH_LIMIT = 100


def _env_name(network: str, suffix: str) -> str:
    return f"{network.upper().replace('-', '_')}_{suffix}"


def get_timeout(default: int = DEFAULT_TIMEOUT) -> int:
    """HTTP timeout in seconds, from ``COSMOS_QUERY_TIMEOUT`` if set"""
    return int(os.environ.get("COSMOS_QUERY_TIMEOUT", default))


def get_search_limit(default: int = DEFAULT_SEARCH_LIMIT) -> int:
    """Search page size, from ``COSMOS_QUERY_SEARCH_LIMIT`` if set"""
    return int(os.environ.get("COSMOS_QUERY_SEARCH_LIMIT", default))


def validate_url(url: str, url_name: str = "url") -> None:
    """
    Validate that a node URL is secure.

    Plain http is accepted for loopback hosts, or anywhere when
    ``COSMOS_QUERY_INSECURE=1`` is set for development.

    Raises:
        ValueError: If URL is invalid or uses insecure HTTP
    """
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"Invalid {url_name} '{url}'")
    is_local = parsed.hostname in ("localhost", "127.0.0.1", "::1")
    if parsed.scheme != "https" and not is_local:
        if os.environ.get("COSMOS_QUERY_INSECURE") != "1":
            raise ValueError(
                f"{url_name} must use https:// for security (got: {parsed.scheme}://). "
                "Set COSMOS_QUERY_INSECURE=1 to allow HTTP for development."
            )


class NetworkConfig:
    """Lookup of known network endpoints and chain parameters."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the packaged network definitions (cached after the first call).

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            text = resources.files("cosmos_query_sdk").joinpath("networks.json").read_text()
            cls._networks_cache = json.loads(text)
            logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        if override:
            return override
        env_url = os.environ.get(_env_name(network, "RPC_URL"))
        if env_url:
            return env_url
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_lcd_url(cls, network: str, override: Optional[str] = None) -> str:
        if override:
            return override
        env_url = os.environ.get(_env_name(network, "LCD_URL"))
        if env_url:
            return env_url
        return cls.get_network(network)["lcd"]

    @classmethod
    def get_chain_id(cls, network: str) -> str:
        return cls.get_network(network)["chainId"]

    @classmethod
    def get_bech32_prefix(cls, network: str) -> str:
        return cls.get_network(network).get("bech32Prefix", "cosmos")
