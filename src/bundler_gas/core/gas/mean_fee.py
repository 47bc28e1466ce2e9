"""
Gas price suggestions reconciling the node's baseline with the fees a batch
of user operations is willing to pay.

Each suggestion is the larger of the baseline and the mean of the batch's
declared values, so a bundle is never priced below either signal.
"""

from collections.abc import Iterable, Sequence

from bundler_gas.core.gas import TipBaselineProvider
from bundler_gas.core.userop import UserOperation
from bundler_gas.utils.logger import get_logger

logger = get_logger(__name__)

# The fee cap baseline leaves room for the base fee to double before the
# bundle stops being includable.
BASE_FEE_MULTIPLIER: int = 2


def mean_of(values: Iterable[int]) -> int:
    """Integer arithmetic mean using floor division.

    Args:
        values: Non-negative integers of any magnitude

    Returns:
        Mean of the values, or 0 for an empty input

    Raises:
        ValueError: If a value is negative
    """
    total = 0
    count = 0
    for value in values:
        if value < 0:
            raise ValueError(f"Fee values must be non-negative, got {value}")
        total += value
        count += 1

    if count == 0:
        return 0
    return total // count


def _mean_max_priority_fee(batch: Sequence[UserOperation]) -> int:
    return mean_of(op.max_priority_fee_per_gas for op in batch)


def _mean_max_fee(batch: Sequence[UserOperation]) -> int:
    return mean_of(op.max_fee_per_gas for op in batch)


async def suggest_mean_gas_tip_cap(
    provider: TipBaselineProvider, batch: Sequence[UserOperation]
) -> int:
    """
    Suggest a priority fee for the bundle.

    Under normal load the node's suggested tip is used. When the batch's
    average tip is higher the operations want faster inclusion and their
    average is used instead.

    Args:
        provider: Source of the node's suggested priority fee.
        batch: User operations being bundled.

    Returns:
        int: max(node tip, mean of maxPriorityFeePerGas).

    Raises:
        BaselineUnavailableError: If the node tip could not be fetched.
    """
    tip = await provider.get_max_priority_fee_per_gas()
    mean_tip = _mean_max_priority_fee(batch)
    logger.debug(f"Tip cap: node={tip} batch_mean={mean_tip} ops={len(batch)}")
    return max(tip, mean_tip)


def suggest_mean_gas_fee_cap(base_fee: int, batch: Sequence[UserOperation]) -> int:
    """
    Suggest a max fee per gas for the bundle.

    Args:
        base_fee: Base fee of the latest block in wei.
        batch: User operations being bundled.

    Returns:
        int: max(base_fee * 2, mean of maxFeePerGas).
    """
    recommended = base_fee * BASE_FEE_MULTIPLIER
    mean_fee = _mean_max_fee(batch)
    logger.debug(f"Fee cap: recommended={recommended} batch_mean={mean_fee} ops={len(batch)}")
    return max(recommended, mean_fee)


def suggest_mean_gas_price(gas_price: int, batch: Sequence[UserOperation]) -> int:
    """
    Suggest a legacy gas price for the bundle.

    Args:
        gas_price: Current gas price in wei.
        batch: User operations being bundled.

    Returns:
        int: max(gas_price, mean of maxFeePerGas).
    """
    mean_fee = _mean_max_fee(batch)
    logger.debug(f"Gas price: current={gas_price} batch_mean={mean_fee} ops={len(batch)}")
    return max(gas_price, mean_fee)
