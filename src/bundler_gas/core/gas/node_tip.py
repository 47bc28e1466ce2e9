from bundler_gas.core.client import EthClient
from bundler_gas.core.errors import BaselineUnavailableError, RpcError
from bundler_gas.core.gas import TipBaselineProvider
from bundler_gas.utils.logger import get_logger

logger = get_logger(__name__)


class NodeTipBaseline(TipBaselineProvider):
    """Priority fee baseline using eth_maxPriorityFeePerGas."""

    def __init__(self, client: EthClient):
        """
        Initialize the node baseline provider.

        Args:
            client: Ethereum RPC client for network requests.
        """
        self.client = client

    async def get_max_priority_fee_per_gas(self) -> int:
        """
        Ask the node for its suggested priority fee.

        Performs exactly one RPC round trip; nothing is cached or retried.

        Returns:
            int: Suggested priority fee per gas in wei.

        Raises:
            BaselineUnavailableError: If the request or decoding fails.
        """
        try:
            tip = await self.client.get_max_priority_fee_per_gas()
        except RpcError as e:
            raise BaselineUnavailableError(str(e)) from e

        logger.debug(f"Node suggested priority fee: {tip} wei")
        return tip
