"""Conversions between human-readable decimal strings and on-chain base units."""
from __future__ import annotations

import re
from decimal import Decimal

_AMOUNT_PATTERN = re.compile(r"^([0-9]+)(?:\.([0-9]+))?$")

HEALTH_FACTOR_DECIMALS = 18
LEVERAGE_DECIMALS = 18
UINT256_MAX = 2**256 - 1


def parse_units(amount: str, decimals: int) -> int:
    """Scale a non-negative base-10 decimal string to integer base units.

    Trailing fractional zeros do not count against the token precision, so
    ``"1.500"`` is accepted for a 1-decimal token.
    """

    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if not isinstance(amount, str):
        raise ValueError("amount must be a decimal string")

    match = _AMOUNT_PATTERN.match(amount.strip())
    if match is None:
        raise ValueError(f"'{amount}' is not a non-negative decimal number")

    whole, fraction = match.group(1), (match.group(2) or "").rstrip("0")
    if len(fraction) > decimals:
        raise ValueError(
            f"'{amount}' has {len(fraction)} fractional digits, token supports {decimals}"
        )
    return int(whole) * 10**decimals + int(fraction.ljust(decimals, "0") or "0")


def format_units(value: int, decimals: int) -> str:
    """Render base units as a decimal string that always carries a fraction."""

    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    value = int(value)
    sign = "-" if value < 0 else ""
    whole, remainder = divmod(abs(value), 10**decimals)
    fraction = str(remainder).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{fraction or '0'}"


def number_to_units(value: float | int | Decimal, decimals: int) -> int:
    """Scale a numeric value (e.g. leverage) to fixed-point base units."""

    text = format(Decimal(str(value)).normalize(), "f")
    return parse_units(text, decimals)
