"""
Court Fee Table - Anlage 2 GKG

Tabulated court fee per 1.0 fee unit. Multiply by the court fee rate
(e.g. 3.0 for civil proceedings, KV 1210 GKG) for the actual court fee.
"""

from datetime import date
from decimal import Decimal

from ..models import AboveTableFormula, CourtFeeScheduleVersion, FeeTableEntry
from ..money import ZERO, quantize_money, to_decimal
from .base import extrapolate, round_up_lookup, select_version


def _entries(*rows: tuple[int, str]) -> tuple[FeeTableEntry, ...]:
    return tuple(FeeTableEntry(up_to=Decimal(up_to), fee=Decimal(fee)) for up_to, fee in rows)


# KostBRaeG 2025, effective 2025-06-01
GKG_2025 = CourtFeeScheduleVersion(
    id='GKG_2025',
    name='GKG Gebuehrentabelle 2025',
    law_reference='KostBRaeG 2025, Anlage 2 GKG',
    valid_from=date(2025, 6, 1),
    valid_until=None,
    entries=_entries(
        (500, '41.00'),
        (1_000, '63.00'),
        (1_500, '83.00'),
        (2_000, '103.00'),
        (3_000, '127.00'),
        (4_000, '151.00'),
        (5_000, '170.50'),
        (6_000, '198.50'),
        (7_000, '226.50'),
        (8_000, '254.50'),
        (9_000, '282.50'),
        (10_000, '310.50'),
        (13_000, '354.50'),
        (16_000, '398.50'),
        (19_000, '435.50'),
        (22_000, '435.50'),
        (25_000, '435.50'),
        (30_000, '499.00'),
        (35_000, '547.00'),
        (40_000, '595.00'),
        (45_000, '612.00'),
        (50_000, '638.00'),
        (65_000, '752.00'),
        (80_000, '866.00'),
        (95_000, '980.00'),
        (110_000, '1094.00'),
        (125_000, '1208.00'),
        (140_000, '1322.00'),
        (155_000, '1436.00'),
        (170_000, '1550.00'),
        (185_000, '1664.00'),
        (200_000, '1778.00'),
        (230_000, '2018.00'),
        (260_000, '2258.00'),
        (290_000, '2498.00'),
        (320_000, '2738.00'),
        (350_000, '2978.00'),
        (380_000, '3218.00'),
        (410_000, '3458.00'),
        (440_000, '3698.00'),
        (470_000, '3938.00'),
        (500_000, '4138.00'),
    ),
    above_table=AboveTableFormula(
        base_fee=Decimal('4138.00'),
        increment=Decimal('180.00'),
        step_size=Decimal('50000'),
    ),
)

COURT_FEE_SCHEDULES: tuple[CourtFeeScheduleVersion, ...] = (GKG_2025,)


def get_court_schedule_for_date(on: date) -> CourtFeeScheduleVersion:
    return select_version(on, COURT_FEE_SCHEDULES)


def compute_court_fee(amount, version: CourtFeeScheduleVersion = GKG_2025) -> Decimal:
    """Court fee per 1.0 fee unit for a disputed amount."""
    amount = to_decimal(amount)
    if amount <= 0:
        return ZERO

    fee = round_up_lookup([(e.up_to, e.fee) for e in version.entries], amount)
    if fee is not None:
        return fee

    formula = version.above_table
    return extrapolate(
        amount,
        version.entries[-1].up_to,
        formula.base_fee,
        formula.step_size,
        formula.increment,
    )


def compute_court_fee_for_rate(amount, rate, version: CourtFeeScheduleVersion = GKG_2025) -> Decimal:
    """Court fee for a fee rate, e.g. 3.0 x fee unit for a civil lawsuit."""
    return quantize_money(compute_court_fee(amount, version) * to_decimal(rate))
