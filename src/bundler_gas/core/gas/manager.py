from collections.abc import Sequence
from dataclasses import dataclass

from bundler_gas.core.client import EthClient
from bundler_gas.core.errors import GasPricingError
from bundler_gas.core.gas.mean_fee import (
    suggest_mean_gas_fee_cap,
    suggest_mean_gas_price,
    suggest_mean_gas_tip_cap,
)
from bundler_gas.core.gas.node_tip import NodeTipBaseline
from bundler_gas.core.networks import Networks
from bundler_gas.core.userop import UserOperation
from bundler_gas.utils.logger import get_logger

logger = get_logger(__name__)

FEE_MODES = ("auto", "eip1559", "legacy")


@dataclass(frozen=True)
class GasPrices:
    """Gas pricing fields for a bundle transaction.

    Dynamic-fee bundles set the two fee caps, legacy bundles set gas_price.
    """
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    gas_price: int | None = None

    @property
    def is_dynamic_fee(self) -> bool:
        return self.max_fee_per_gas is not None

    def to_dict(self) -> dict[str, int]:
        return {
            name: value
            for name, value in (
                ("maxFeePerGas", self.max_fee_per_gas),
                ("maxPriorityFeePerGas", self.max_priority_fee_per_gas),
                ("gasPrice", self.gas_price),
            )
            if value is not None
        }


class GasPriceManager:
    """Manager for gas price calculation of bundle transactions."""

    def __init__(self, client: EthClient, fee_mode: str = "auto"):
        """
        Initialize the gas price manager.

        Args:
            client: Ethereum RPC client for node queries.
            fee_mode: "eip1559", "legacy", or "auto" to follow the latest block.
        """
        if fee_mode not in FEE_MODES:
            raise ValueError(f"fee_mode must be one of {list(FEE_MODES)}")

        self.client = client
        self.fee_mode = fee_mode
        self.tip_baseline = NodeTipBaseline(client)

    async def verify_network(self, network: str) -> int:
        """
        Check that the node serves the configured network.

        Args:
            network: Network name from the catalog.

        Returns:
            int: The node's chain id.

        Raises:
            GasPricingError: If the node reports a different chain id.
        """
        expected = Networks.chain_id(network)
        chain_id = await self.client.get_chain_id()
        if chain_id != expected:
            raise GasPricingError(
                f"Node chain id {chain_id} does not match network '{network}' ({expected})"
            )
        return chain_id

    async def calculate_gas_prices(self, batch: Sequence[UserOperation]) -> GasPrices:
        """
        Calculate the gas prices for a bundle of user operations.

        Errors from the node are propagated so the bundling attempt is
        aborted rather than priced against a made-up baseline.

        Returns:
            GasPrices: Fields to set on the bundle transaction.
        """
        base_fee = None
        if self.fee_mode != "legacy":
            base_fee = await self.client.get_base_fee()

        if base_fee is None:
            if self.fee_mode == "eip1559":
                raise GasPricingError("Latest block has no base fee; EIP-1559 pricing unavailable")
            return await self._legacy_prices(batch)

        return await self._dynamic_fee_prices(base_fee, batch)

    async def _dynamic_fee_prices(
        self, base_fee: int, batch: Sequence[UserOperation]
    ) -> GasPrices:
        tip = await suggest_mean_gas_tip_cap(self.tip_baseline, batch)
        fee_cap = suggest_mean_gas_fee_cap(base_fee, batch)

        # A tip above the fee cap makes the transaction invalid
        if tip > fee_cap:
            logger.warning(f"Tip cap {tip} exceeds fee cap {fee_cap}. Raising fee cap to tip.")
            fee_cap = tip

        logger.info(
            f"Dynamic fee pricing for {len(batch)} ops: maxFeePerGas={fee_cap} maxPriorityFeePerGas={tip}"
        )
        return GasPrices(max_fee_per_gas=fee_cap, max_priority_fee_per_gas=tip)

    async def _legacy_prices(self, batch: Sequence[UserOperation]) -> GasPrices:
        gas_price = suggest_mean_gas_price(await self.client.get_gas_price(), batch)
        logger.info(f"Legacy pricing for {len(batch)} ops: gasPrice={gas_price}")
        return GasPrices(gas_price=gas_price)
