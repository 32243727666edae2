"""Conversions between raw chain integers and decimal-scaled strings."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext

from .models import TokenValue

MAX_UINT256 = 2**256 - 1


def format_units(value: int, decimals: int) -> str:
    """Render ``value / 10**decimals`` with exactly ``decimals`` fractional digits.

    >>> format_units(1500000, 6)
    '1.500000'
    """

    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if decimals == 0:
        return sign + digits
    digits = digits.rjust(decimals + 1, "0")
    return f"{sign}{digits[:-decimals]}.{digits[-decimals:]}"


def token_value_to_string(token_value: TokenValue) -> str:
    return format_units(token_value.value, token_value.decimals)


def parse_units(amount: str, decimals: int) -> int:
    """Scale a human amount string to the token's integer base.

    Raises ``ValueError`` for non-numeric input, more fractional digits
    than the token supports, or a scaled value above ``MAX_UINT256``.
    """

    try:
        parsed = Decimal(amount.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"invalid amount: {amount!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"invalid amount: {amount!r}")

    with localcontext() as ctx:
        # Wide enough that scaling never rounds the coefficient.
        ctx.prec = len(parsed.as_tuple().digits) + decimals + 1
        scaled = parsed.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"amount {amount} exceeds {decimals} decimals")
    if scaled > MAX_UINT256:
        raise ValueError(f"amount {amount} exceeds the largest allowance")
    return int(scaled)
