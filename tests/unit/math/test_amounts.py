"""Tests for human decimal <-> smallest-unit conversion."""

import pytest

from quoter.amounts import format_units, parse_units


class TestParseUnits:
    @pytest.mark.parametrize(
        "value,decimals,expected",
        [
            ("1", 18, 10**18),
            ("1.5", 6, 1_500_000),
            ("0.000001", 6, 1),
            ("1000", 0, 1000),
            (" 2.25 ", 2, 225),
            ("0", 18, 0),
        ],
    )
    def test_valid_values(self, value, decimals, expected):
        assert parse_units(value, decimals) == expected

    def test_strict_rejects_excess_precision(self):
        with pytest.raises(ValueError, match="decimal places"):
            parse_units("1.0000001", 6)

    def test_non_strict_truncates(self):
        assert parse_units("1.0000009", 6, strict=False) == 1_000_000

    @pytest.mark.parametrize("value", ["", "abc", "1.2.3", "NaN", "Infinity", "-1"])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            parse_units(value, 18)

    def test_uint256_overflow(self):
        with pytest.raises(ValueError, match="uint256"):
            parse_units("1" + "0" * 70, 18)

    @pytest.mark.parametrize("strict", [True, False])
    def test_exponent_beyond_decimal_range(self, strict):
        """Scaling past the context exponent limit is a ValueError, not decimal.Overflow."""
        with pytest.raises(ValueError, match="out of range"):
            parse_units("1e999999", 18, strict=strict)

    def test_negative_decimals(self):
        with pytest.raises(ValueError):
            parse_units("1", -1)


class TestFormatUnits:
    @pytest.mark.parametrize(
        "amount,decimals,expected",
        [
            (1_500_000, 6, "1.5"),
            (2_000_000, 6, "2"),
            (1, 6, "0.000001"),
            (0, 18, "0"),
            (1234, 0, "1234"),
            (10**18 + 1, 18, "1.000000000000000001"),
        ],
    )
    def test_format(self, amount, decimals, expected):
        assert format_units(amount, decimals) == expected

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            format_units(-1, 6)
