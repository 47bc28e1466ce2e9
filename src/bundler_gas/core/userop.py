"""
User operation records as submitted to the bundler.

Only the two fee fields are read by the gas pricing code; the remaining
fields are carried so that operations round-trip through the JSON shape
clients submit.
"""

from dataclasses import dataclass
from typing import Any

from eth_utils import to_hex

from bundler_gas.core.client import decode_quantity


@dataclass(frozen=True)
class UserOperation:
    """ERC-4337 user operation."""
    sender: str
    nonce: int
    call_gas_limit: int
    verification_gas_limit: int
    pre_verification_gas: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    init_code: str = "0x"
    call_data: str = "0x"
    paymaster_and_data: str = "0x"
    signature: str = "0x"

    def __post_init__(self):
        for name in ("max_fee_per_gas", "max_priority_fee_per_gas"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserOperation":
        """Create a UserOperation from its JSON-RPC representation.

        Args:
            data: Dictionary with camelCase keys and hex quantities

        Returns:
            UserOperation instance

        Raises:
            ValueError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"User operation must be a JSON object, got {type(data).__name__}")
        try:
            return cls(
                sender=data["sender"],
                nonce=decode_quantity(data["nonce"]),
                call_gas_limit=decode_quantity(data["callGasLimit"]),
                verification_gas_limit=decode_quantity(data["verificationGasLimit"]),
                pre_verification_gas=decode_quantity(data["preVerificationGas"]),
                max_fee_per_gas=decode_quantity(data["maxFeePerGas"]),
                max_priority_fee_per_gas=decode_quantity(data["maxPriorityFeePerGas"]),
                init_code=data.get("initCode", "0x"),
                call_data=data.get("callData", "0x"),
                paymaster_and_data=data.get("paymasterAndData", "0x"),
                signature=data.get("signature", "0x"),
            )
        except KeyError as e:
            raise ValueError(f"Missing user operation field: {e.args[0]}") from None

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON-RPC representation.

        Returns:
            Dictionary representation
        """
        return {
            "sender": self.sender,
            "nonce": to_hex(self.nonce),
            "initCode": self.init_code,
            "callData": self.call_data,
            "callGasLimit": to_hex(self.call_gas_limit),
            "verificationGasLimit": to_hex(self.verification_gas_limit),
            "preVerificationGas": to_hex(self.pre_verification_gas),
            "maxFeePerGas": to_hex(self.max_fee_per_gas),
            "maxPriorityFeePerGas": to_hex(self.max_priority_fee_per_gas),
            "paymasterAndData": self.paymaster_and_data,
            "signature": self.signature,
        }
