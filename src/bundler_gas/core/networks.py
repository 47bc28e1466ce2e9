"""
Chain identifiers for the networks a bundler can be deployed against.

The catalog is built once at import time and exposed read-only.
"""

from types import MappingProxyType
from typing import Final, Mapping

ETHEREUM_CHAIN_ID: Final[int] = 1
GOERLI_CHAIN_ID: Final[int] = 5
ARBITRUM_ONE_CHAIN_ID: Final[int] = 42161
ARBITRUM_GOERLI_CHAIN_ID: Final[int] = 421613

CHAIN_IDS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "ethereum": ETHEREUM_CHAIN_ID,
        "goerli": GOERLI_CHAIN_ID,
        "arbitrum_one": ARBITRUM_ONE_CHAIN_ID,
        "arbitrum_goerli": ARBITRUM_GOERLI_CHAIN_ID,
    }
)


class UnknownNetworkError(ValueError):
    """Raised when a network name or chain id is not in the catalog."""


class Networks:
    """Lookup helpers over the network catalog."""

    @staticmethod
    def supported() -> list[str]:
        """Names of all supported networks."""
        return list(CHAIN_IDS)

    @staticmethod
    def chain_id(name: str) -> int:
        """Resolve a network name to its chain id.

        Args:
            name: Network name, e.g. "arbitrum_one"

        Returns:
            Chain id of the network

        Raises:
            UnknownNetworkError: If the name is not in the catalog
        """
        try:
            return CHAIN_IDS[name]
        except KeyError:
            raise UnknownNetworkError(
                f"Unknown network '{name}'. Must be one of: {Networks.supported()}"
            ) from None

    @staticmethod
    def name_for(chain_id: int) -> str:
        """Reverse lookup of a chain id to its network name."""
        for name, known_id in CHAIN_IDS.items():
            if known_id == chain_id:
                return name
        raise UnknownNetworkError(f"Unknown chain id {chain_id}")
