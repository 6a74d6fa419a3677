"""Conversion between human-readable decimal strings and smallest-unit integers.

All parsing happens in a 78-digit Decimal context, enough for uint256
values (up to ~10^77), so no precision is lost before truncation.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal, DecimalException, InvalidOperation

from quoter.constants import UINT256_MAX

# 78 digits of precision - enough for uint256 values
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def parse_units(value: str, decimals: int, *, strict: bool = True) -> int:
    """Convert a human decimal string into an integer amount of smallest units.

    Args:
        value: Decimal string such as "1.5" or "1000"
        decimals: Token decimal precision
        strict: If True, reject values with more fractional digits than the
            token supports. If False, extra digits are truncated (used when
            ingesting reserves, which the indexer reports at full precision).

    Returns:
        Amount in smallest units

    Raises:
        ValueError: If value is not a finite non-negative number, is too
            precise (strict mode), or exceeds uint256
    """
    if decimals < 0:
        raise ValueError(f"decimals cannot be negative: {decimals}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        try:
            parsed = Decimal(value.strip())
        except (InvalidOperation, AttributeError) as err:
            raise ValueError(f"Not a decimal number: {value!r}") from err

        if not parsed.is_finite():
            raise ValueError(f"Amount must be finite: {value!r}")
        if parsed < 0:
            raise ValueError(f"Amount cannot be negative: {value!r}")

        try:
            scaled = parsed.scaleb(decimals)
            integral = scaled.to_integral_value(rounding=ROUND_DOWN)
        except DecimalException as err:
            # Exponents beyond the context range overflow before the uint256 check
            raise ValueError(f"Amount out of range: {value!r}") from err
        if strict and integral != scaled:
            raise ValueError(f"Amount {value!r} has more than {decimals} decimal places")

    amount = int(integral)
    if amount > UINT256_MAX:
        raise ValueError(f"Amount overflows uint256: {value!r}")
    return amount


def format_units(amount: int, decimals: int) -> str:
    """Format a smallest-unit integer as a human decimal string.

    Trailing fractional zeros are dropped: 1_500_000 with 6 decimals gives
    "1.5", and 2_000_000 gives "2".
    """
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    if decimals < 0:
        raise ValueError(f"decimals cannot be negative: {decimals}")

    whole, fraction = divmod(amount, 10**decimals)
    if fraction == 0:
        return str(whole)
    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{fraction_str}"


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "parse_units",
    "format_units",
]
