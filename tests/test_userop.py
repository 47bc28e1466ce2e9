import pytest

from bundler_gas.core.client import decode_quantity
from bundler_gas.core.userop import UserOperation
from testutils import SENDER, mock_user_op

USER_OP_JSON = {
    "sender": SENDER,
    "nonce": "0x0",
    "initCode": "0x",
    "callData": "0xb61d27f6",
    "callGasLimit": "0x88b8",
    "verificationGasLimit": "0x55730",
    "preVerificationGas": "0x5208",
    "maxFeePerGas": "0x3b9aca00",
    "maxPriorityFeePerGas": "0x59682f00",
    "paymasterAndData": "0x",
    "signature": "0x" + "cd" * 65,
}


class TestHexQuantities:
    @pytest.mark.parametrize(
        "value,expected", [("0x0", 0), ("0x2a", 42), ("0X2A", 42), (7, 7)]
    )
    def test_decode(self, value, expected):
        assert decode_quantity(value) == expected

    @pytest.mark.parametrize("value", ["", "0x", "2a", "0xzz", "0x-5", "0xf_f", -1, None, True, 1.5])
    def test_decode_rejects(self, value):
        with pytest.raises(ValueError):
            decode_quantity(value)

    def test_decode_uint256(self):
        assert decode_quantity("0x" + "f" * 64) == 2**256 - 1


class TestUserOperation:
    def test_from_dict(self):
        op = UserOperation.from_dict(USER_OP_JSON)
        assert op.sender == SENDER
        assert op.max_fee_per_gas == 1_000_000_000
        assert op.max_priority_fee_per_gas == 1_500_000_000
        assert op.call_data == "0xb61d27f6"

    def test_to_dict_matches_input(self):
        assert UserOperation.from_dict(USER_OP_JSON).to_dict() == USER_OP_JSON

    def test_missing_field(self):
        data = dict(USER_OP_JSON)
        del data["maxFeePerGas"]
        with pytest.raises(ValueError, match="maxFeePerGas"):
            UserOperation.from_dict(data)

    def test_optional_fields_default(self):
        data = {k: v for k, v in USER_OP_JSON.items() if k not in ("initCode", "paymasterAndData")}
        op = UserOperation.from_dict(data)
        assert op.init_code == "0x"
        assert op.paymaster_and_data == "0x"

    def test_rejects_negative_fee(self):
        with pytest.raises(ValueError):
            mock_user_op(max_fee_per_gas=-1)

    def test_immutable(self):
        op = mock_user_op()
        with pytest.raises(AttributeError):
            op.max_fee_per_gas = 10

    def test_large_fee_round_trips(self):
        op = mock_user_op(max_fee_per_gas=2**256 - 1)
        assert op.to_dict()["maxFeePerGas"] == "0x" + "f" * 64
        assert UserOperation.from_dict(op.to_dict()) == op

    @pytest.mark.parametrize("data", [1, "0xabc", None, [USER_OP_JSON]])
    def test_rejects_non_object(self, data):
        with pytest.raises(ValueError, match="JSON object"):
            UserOperation.from_dict(data)
