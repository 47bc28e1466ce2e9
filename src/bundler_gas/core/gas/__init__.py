from abc import ABC, abstractmethod


class TipBaselineProvider(ABC):
    """Source of the network's suggested priority fee."""

    @abstractmethod
    async def get_max_priority_fee_per_gas(self) -> int:
        """
        Fetch the currently suggested priority fee.

        Returns:
            int: Priority fee per gas in wei.

        Raises:
            BaselineUnavailableError: If the fee could not be fetched.
        """
        pass
