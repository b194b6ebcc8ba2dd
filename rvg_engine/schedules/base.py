"""
Shared lookup rules for all fee schedule families.

Every schedule is a right-continuous step function: an amount is rounded UP
to the next tabulated threshold and gets that threshold's fee. Amounts beyond
the last threshold are extrapolated in whole steps.
"""

from datetime import date
from decimal import ROUND_CEILING, Decimal
from typing import Sequence, TypeVar

from ..money import quantize_money

V = TypeVar('V')


def is_valid_on(version, on: date) -> bool:
    """True if `on` lies within [valid_from, valid_until)."""
    if on < version.valid_from:
        return False
    return version.valid_until is None or on < version.valid_until


def select_version(on: date, versions: Sequence[V]) -> V:
    """
    Pick the version valid on the given date.

    `versions` is ordered newest first. Falls back to the newest version
    when no validity interval contains the date.
    """
    for version in versions:
        if is_valid_on(version, on):
            return version
    return versions[0]


def round_up_lookup(pairs: Sequence[tuple[Decimal, Decimal]], amount: Decimal) -> Decimal | None:
    """Return the fee of the first threshold >= amount, None if above the table."""
    for threshold, fee in pairs:
        if amount <= threshold:
            return fee
    return None


def extrapolate(
    amount: Decimal,
    last_threshold: Decimal,
    last_fee: Decimal,
    step_size: Decimal,
    increment: Decimal,
) -> Decimal:
    """last_fee + ceil((amount - last_threshold) / step_size) * increment"""
    steps = ((amount - last_threshold) / step_size).to_integral_value(rounding=ROUND_CEILING)
    return quantize_money(last_fee + steps * increment)
