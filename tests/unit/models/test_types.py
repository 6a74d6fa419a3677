"""Tests for address helpers."""

import pytest

from quoter.models.types import is_valid_address, normalize_address
from tests.helpers import TOKEN_A, USDC


class TestIsValidAddress:
    @pytest.mark.parametrize("address", [TOKEN_A, USDC, "0x" + "Ab" * 20])
    def test_valid(self, address):
        assert is_valid_address(address)

    @pytest.mark.parametrize(
        "address",
        [
            "",
            "0x1234",
            TOKEN_A[2:],
            TOKEN_A + "a",
            "0x" + "g" * 40,
            # int(..., 16) would accept the underscore
            "0x_" + "1" * 39,
            " " + TOKEN_A,
            None,
        ],
    )
    def test_invalid(self, address):
        assert not is_valid_address(address)


class TestNormalizeAddress:
    def test_lowercases_and_strips(self):
        assert normalize_address("  0x" + TOKEN_A[2:].upper() + " ") == TOKEN_A

    def test_adds_missing_prefix(self):
        assert normalize_address(TOKEN_A[2:]) == TOKEN_A
        assert normalize_address("a") == normalize_address("0xa")

    def test_validate(self):
        assert normalize_address(TOKEN_A, validate=True) == TOKEN_A
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_address("weth", validate=True)
