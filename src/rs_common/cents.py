"""Integer arithmetic utilities for money.

All prices, costs and balances use int (cents). No float, no Decimal.
Two-decimal currency amounts map 1:1 onto cents.
"""

from src.rs_common.errors import NegativeAmountError


def validate_amount(field: str, cents: int) -> None:
    """Reject negative amounts; zero is a valid amount."""
    if cents < 0:
        raise NegativeAmountError(field, cents)


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def line_total(quantity: int, unit_price: int) -> int:
    return quantity * unit_price
