"""
Ethereum JSON-RPC client abstraction for node queries.
"""

import asyncio
import itertools
from typing import Any

import aiohttp
from eth_utils import is_0x_prefixed, is_hexstr, to_int

from bundler_gas.core.errors import RpcError
from bundler_gas.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT: float = 10.0


def decode_quantity(value: str | int) -> int:
    """Decode a JSON-RPC quantity into an integer.

    Plain non-negative ints are accepted as-is so that JSON fixtures may use
    either form.

    Args:
        value: 0x-prefixed hex string or int

    Returns:
        Decoded non-negative integer

    Raises:
        ValueError: If the value is not a valid quantity
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Quantity must be non-negative, got {value}")
        return value
    # is_hexstr alone accepts unprefixed and empty digit strings
    if (
        not isinstance(value, str)
        or not is_0x_prefixed(value)
        or len(value) == 2
        or not is_hexstr(value)
    ):
        raise ValueError(f"Quantity must be a 0x-prefixed hex string, got {value!r}")
    return to_int(hexstr=value)


class EthClient:
    """Abstraction for Ethereum JSON-RPC operations."""

    def __init__(self, rpc_endpoint: str, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the client with an RPC endpoint.

        Args:
            rpc_endpoint: HTTP(S) URL of the node
            timeout: Total timeout in seconds for each request
        """
        self.rpc_endpoint = rpc_endpoint
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "EthClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def post_rpc(self, method: str, params: list[Any] | None = None) -> Any:
        """
        Send a JSON-RPC request to the node and return its result.

        Args:
            method: JSON-RPC method name.
            params: Positional parameters for the method.

        Returns:
            The ``result`` member of the response.

        Raises:
            RpcError: If the request fails or the node returns an error.
        """
        body = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        session = await self.get_session()
        try:
            async with session.post(self.rpc_endpoint, json=body) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"RPC request {method} failed: {e!s}")
            raise RpcError(method, str(e)) from e
        except asyncio.TimeoutError as e:
            logger.error(f"RPC request {method} timed out after {self.timeout}s")
            raise RpcError(method, "request timed out") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            logger.error(f"Failed to decode RPC response for {method}: {e!s}")
            raise RpcError(method, "invalid JSON response") from e

        if not isinstance(payload, dict):
            raise RpcError(method, "malformed JSON-RPC response")
        if payload.get("error") is not None:
            error = payload["error"]
            if isinstance(error, dict):
                raise RpcError(method, error.get("message", "unknown error"), error.get("code"))
            raise RpcError(method, str(error))
        if "result" not in payload:
            raise RpcError(method, "response has no result")
        return payload["result"]

    async def get_quantity(self, method: str, params: list[Any] | None = None) -> int:
        """Call a method whose result is a hex quantity and decode it."""
        result = await self.post_rpc(method, params)
        try:
            return decode_quantity(result)
        except ValueError as e:
            raise RpcError(method, str(e)) from e

    async def get_max_priority_fee_per_gas(self) -> int:
        """Get the node's suggested priority fee in wei."""
        return await self.get_quantity("eth_maxPriorityFeePerGas")

    async def get_gas_price(self) -> int:
        """Get the node's suggested legacy gas price in wei."""
        return await self.get_quantity("eth_gasPrice")

    async def get_chain_id(self) -> int:
        """Get the chain id the node is serving."""
        return await self.get_quantity("eth_chainId")

    async def get_base_fee(self) -> int | None:
        """Get the base fee of the latest block.

        Returns:
            Base fee in wei, or None if the chain does not use EIP-1559
        """
        block = await self.post_rpc("eth_getBlockByNumber", ["latest", False])
        if not isinstance(block, dict):
            raise RpcError("eth_getBlockByNumber", "latest block not returned")
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            return None
        try:
            return decode_quantity(base_fee)
        except ValueError as e:
            raise RpcError("eth_getBlockByNumber", str(e)) from e
