"""EVM wallet address and transaction hash validation."""

import pytest

from grantees.auth.address_validation import (
    is_valid_tx_hash,
    is_valid_wallet_address,
    same_address,
    validate_wallet_address,
)


class TestWalletAddress:
    def test_valid_lowercase(self):
        addr = "0x" + "a" * 40
        assert validate_wallet_address(addr) == addr

    def test_valid_checksummed(self):
        assert is_valid_wallet_address("0x52908400098527886E0F7030069857D2E4169EE7")

    def test_strips_whitespace(self):
        assert validate_wallet_address("  0x" + "1" * 40 + "\n") == "0x" + "1" * 40

    @pytest.mark.parametrize(
        "addr",
        [None, "", "0x1234", "1" * 42, "0x" + "g" * 40, "0x" + "1" * 41, "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"],
    )
    def test_invalid(self, addr):
        with pytest.raises(ValueError):
            validate_wallet_address(addr)
        assert is_valid_wallet_address(addr) is False

    def test_same_address_case_insensitive(self):
        assert same_address("0xABCDEF" + "0" * 34, "0xabcdef" + "0" * 34)
        assert not same_address(None, "0x" + "0" * 40)


class TestTxHash:
    def test_valid(self):
        assert is_valid_tx_hash("0x" + "f" * 64)

    @pytest.mark.parametrize("tx_hash", [None, "", "0x" + "f" * 63, "f" * 66, "demo_1700000000000"])
    def test_invalid(self, tx_hash):
        assert is_valid_tx_hash(tx_hash) is False
