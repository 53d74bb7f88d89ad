"""Decimal helpers for ODIN amounts."""

from decimal import ROUND_DOWN, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Parse an amount given as str/int/float/Decimal. None counts as zero."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str() so 5.2 stays 5.2 and not 5.2000000000000001776...
        value = str(value)
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def quantize_down(amount: Decimal) -> Decimal:
    """Truncate to whole cents."""
    return amount.quantize(CENT, rounding=ROUND_DOWN)


def format_amount(amount) -> str:
    """Render an amount without trailing zeros: 78.0 -> "78", 528.25 -> "528.25"."""
    amount = to_decimal(amount)
    if amount == 0:
        return "0"
    return format(amount.normalize(), "f")
