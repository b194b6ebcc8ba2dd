"""
Legal Aid Fee Table - § 49 RVG

Reduced fees for cases with Prozesskostenhilfe / Verfahrenskostenhilfe.
Above the table cap the reduced table does not apply and the full RVG
table is used instead.
"""

from datetime import date
from decimal import Decimal

from ..models import FeeScheduleVersion, FeeTableEntry, ReducedFeeScheduleVersion
from ..money import ZERO, to_decimal
from .base import round_up_lookup, select_version
from .general import RVG_2025, compute_base_fee


def _entries(*rows: tuple[int, str]) -> tuple[FeeTableEntry, ...]:
    return tuple(FeeTableEntry(up_to=Decimal(up_to), fee=Decimal(fee)) for up_to, fee in rows)


PKH_2025 = ReducedFeeScheduleVersion(
    id='PKH_2025',
    name='PKH Gebuehrentabelle 2025',
    law_reference='KostBRaeG 2025, § 49 RVG',
    valid_from=date(2025, 6, 1),
    valid_until=None,
    cap=Decimal('80000'),
    entries=_entries(
        (500, '51.50'),
        (1_000, '82.00'),
        (1_500, '109.00'),
        (2_000, '136.00'),
        (3_000, '175.00'),
        (4_000, '214.00'),
        (5_000, '253.00'),
        (6_000, '278.00'),
        (7_000, '303.00'),
        (8_000, '328.00'),
        (9_000, '353.00'),
        (10_000, '378.00'),
        (13_000, '410.00'),
        (16_000, '442.00'),
        (19_000, '474.00'),
        (22_000, '506.00'),
        (25_000, '538.00'),
        (30_000, '579.00'),
        (35_000, '620.00'),
        (40_000, '661.00'),
        (45_000, '702.00'),
        (50_000, '743.00'),
        (65_000, '798.00'),
        (80_000, '853.00'),
    ),
)

PKH_2021 = ReducedFeeScheduleVersion(
    id='PKH_2021',
    name='PKH Gebuehrentabelle 2021',
    law_reference='KostRaeG 2021, § 49 RVG',
    valid_from=date(2021, 1, 1),
    valid_until=date(2025, 6, 1),
    cap=Decimal('50000'),
    entries=_entries(
        (500, '49.00'),
        (1_000, '78.00'),
        (1_500, '104.00'),
        (2_000, '130.00'),
        (3_000, '166.00'),
        (4_000, '202.00'),
        (5_000, '238.00'),
        (6_000, '262.00'),
        (7_000, '286.00'),
        (8_000, '310.00'),
        (9_000, '334.00'),
        (10_000, '358.00'),
        (13_000, '388.00'),
        (16_000, '418.00'),
        (19_000, '448.00'),
        (22_000, '478.00'),
        (25_000, '508.00'),
        (30_000, '547.00'),
        (35_000, '586.00'),
        (40_000, '625.00'),
        (45_000, '664.00'),
        (50_000, '703.00'),
    ),
)

# Newest first
REDUCED_FEE_SCHEDULES: tuple[ReducedFeeScheduleVersion, ...] = (PKH_2025, PKH_2021)


def get_reduced_schedule_for_date(on: date) -> ReducedFeeScheduleVersion:
    return select_version(on, REDUCED_FEE_SCHEDULES)


def compute_reduced_fee(amount, version: ReducedFeeScheduleVersion = PKH_2025) -> Decimal | None:
    """
    Reduced base fee for a disputed amount.

    Returns None above the cap: the reduced table is not applicable and the
    caller has to use the general table.
    """
    amount = to_decimal(amount)
    if amount <= 0:
        return ZERO
    if amount > version.cap:
        return None
    return round_up_lookup([(e.up_to, e.fee) for e in version.entries], amount)


def compute_legal_aid_fee(
    amount,
    reduced: ReducedFeeScheduleVersion = PKH_2025,
    general: FeeScheduleVersion = RVG_2025,
) -> Decimal:
    """Reduced base fee, falling back to the general table above the cap."""
    fee = compute_reduced_fee(amount, reduced)
    if fee is None:
        return compute_base_fee(amount, general)
    return fee
