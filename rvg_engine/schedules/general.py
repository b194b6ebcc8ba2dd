"""
General Fee Table - Anlage 2 zu § 13 RVG

Versioned fee tables defined by the statutory step algorithm. The lookup
pairs are built once per version and memoized.
"""

from datetime import date
from decimal import Decimal
from functools import lru_cache

from ..models import FeeScheduleVersion, RangeDefinition
from ..money import ZERO, quantize_money, to_decimal
from .base import extrapolate, round_up_lookup, select_version


def _ranges(*rows: tuple[int, int, str]) -> tuple[RangeDefinition, ...]:
    return tuple(
        RangeDefinition(range_end=Decimal(end), step_size=Decimal(step), increment=Decimal(inc))
        for end, step, inc in rows
    )


# KostBRaeG 2025, effective 2025-06-01
#   up to 500: 51.50
#   500-2000: +41.50 per 500 | 2000-10000: +59.50 per 1000
#   10000-25000: +55.00 per 3000 | 25000-50000: +86.00 per 5000
#   50000-200000: +99.50 per 15000 | 200000-500000: +140.00 per 30000
#   above 500000: +175.00 per 50000
RVG_2025 = FeeScheduleVersion(
    id='RVG_2025',
    name='RVG Gebuehrentabelle 2025',
    law_reference='KostBRaeG 2025, Anlage 2 zu § 13 RVG',
    valid_from=date(2025, 6, 1),
    valid_until=None,
    ranges=_ranges(
        (2_000, 500, '41.50'),
        (10_000, 1_000, '59.50'),
        (25_000, 3_000, '55.00'),
        (50_000, 5_000, '86.00'),
        (200_000, 15_000, '99.50'),
        (500_000, 30_000, '140.00'),
    ),
    initial_fee=Decimal('51.50'),
    above_table_increment=Decimal('175.00'),
    above_table_step_size=Decimal('50000'),
)

# KostRaeG 2021, effective 2021-01-01 through 2025-05-31
RVG_2021 = FeeScheduleVersion(
    id='RVG_2021',
    name='RVG Gebuehrentabelle 2021',
    law_reference='KostRaeG 2021, Anlage 2 zu § 13 RVG',
    valid_from=date(2021, 1, 1),
    valid_until=date(2025, 6, 1),
    ranges=_ranges(
        (2_000, 500, '39.00'),
        (10_000, 1_000, '56.00'),
        (25_000, 3_000, '52.00'),
        (50_000, 5_000, '81.00'),
        (200_000, 15_000, '94.00'),
        (500_000, 30_000, '132.00'),
    ),
    initial_fee=Decimal('49.00'),
    above_table_increment=Decimal('165.00'),
    above_table_step_size=Decimal('50000'),
)

# Newest first
FEE_SCHEDULES: tuple[FeeScheduleVersion, ...] = (RVG_2025, RVG_2021)


def get_schedule_for_date(on: date) -> FeeScheduleVersion:
    """Select the RVG table for a date of engagement (Auftragseingang)."""
    return select_version(on, FEE_SCHEDULES)


@lru_cache(maxsize=None)
def build_lookup(version: FeeScheduleVersion) -> tuple[tuple[Decimal, Decimal], ...]:
    """
    Expand the step algorithm into ordered (threshold, fee) pairs.

    The fee is rounded to the cent after every increment so that hundreds
    of steps cannot accumulate drift.
    """
    threshold = version.first_threshold
    fee = version.initial_fee
    pairs = [(threshold, fee)]

    for segment in version.ranges:
        while threshold < segment.range_end:
            threshold += segment.step_size
            fee = quantize_money(fee + segment.increment)
            pairs.append((threshold, fee))

    return tuple(pairs)


def get_lookup_table(version: FeeScheduleVersion = RVG_2025) -> tuple[tuple[Decimal, Decimal], ...]:
    """The complete tabulated schedule, e.g. for display."""
    return build_lookup(version)


def compute_base_fee(amount, version: FeeScheduleVersion = RVG_2025) -> Decimal:
    """
    Compute the base fee (rate 1.0) for a disputed amount.

    Args:
        amount: Streitwert / Gegenstandswert in EUR
        version: Fee table version to use

    Returns:
        0 for non-positive amounts, the tabulated fee rounded up to the next
        threshold, or the extrapolated fee above the table.
    """
    amount = to_decimal(amount)
    if amount <= 0:
        return ZERO

    pairs = build_lookup(version)
    fee = round_up_lookup(pairs, amount)
    if fee is not None:
        return fee

    last_threshold, last_fee = pairs[-1]
    return extrapolate(
        amount,
        last_threshold,
        last_fee,
        version.above_table_step_size,
        version.above_table_increment,
    )
