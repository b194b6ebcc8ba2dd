"""
Money helpers for the RVG fee engine.

All monetary values are Decimal, rounded to the cent with ROUND_HALF_UP.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal('0.01')
ZERO = Decimal('0')


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (commercial rounding, half up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """Convert ints, floats and numeric strings without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def format_money(value: Decimal) -> str:
    """Format an amount for descriptions, e.g. '230.43 EUR'."""
    return f"{value:,.2f} EUR"


def format_rate(rate: Decimal) -> str:
    """Format a fee rate exactly, with at least one decimal: 1.3, 0.625, 2.0"""
    text = f"{rate.normalize():f}"
    return text if '.' in text else text + '.0'
