"""
Anrechnung Calculator

Credits half of the out-of-court business fee (VV 2300), at most a rate of
0.75, against the procedural fee of the following lawsuit (VV 3100),
Vorbem. 3 Abs. 4 VV RVG.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from .. import catalog
from ..models import CalculationItem, CreditResult, FeeScheduleVersion
from ..money import ZERO, format_money, format_rate, quantize_money, to_decimal
from ..schedules import compute_base_fee

logger = logging.getLogger(__name__)

MAX_CREDIT_RATE = Decimal('0.75')


def compute_credit(
    source_rate,
    target_rate,
    base_fee,
    source_code: str = '2300',
    target_code: str = '3100',
) -> CreditResult:
    """
    Compute the Anrechnung of a source fee onto a target fee.

    The credit is half the source rate, capped at 0.75, times the base fee.
    It never exceeds the target fee and is never negative.

    Args:
        source_rate: Rate of the fee being credited (e.g. 1.3 for VV 2300)
        target_rate: Rate of the fee being reduced (e.g. 1.3 for VV 3100)
        base_fee: Base fee at the target's disputed amount

    Returns:
        CreditResult with the intermediate rates and the credit amount
    """
    source_rate = to_decimal(source_rate)
    target_rate = to_decimal(target_rate)
    base_fee = to_decimal(base_fee)

    halved_rate = source_rate / 2
    capped_rate = min(halved_rate, MAX_CREDIT_RATE)
    nominal_credit = quantize_money(capped_rate * base_fee)
    target_amount = quantize_money(target_rate * base_fee)
    credit_amount = max(ZERO, min(nominal_credit, target_amount))

    description = (
        f"Anrechnung gem. Vorbem. 3 Abs. 4 VV RVG: "
        f"{format_rate(source_rate)} Geschaeftsgebuehr (VV {source_code}) / 2 = "
        f"{format_rate(halved_rate)}"
    )
    if capped_rate < halved_rate:
        description += f", begrenzt auf {format_rate(MAX_CREDIT_RATE)}"
    description += (
        f"; {format_rate(capped_rate)} x {format_money(base_fee)} = "
        f"{format_money(credit_amount)} angerechnet auf VV {target_code}"
    )
    if credit_amount < nominal_credit:
        description += f" (begrenzt auf die Hoehe der Gebuehr VV {target_code})"

    return CreditResult(
        source_code=source_code,
        target_code=target_code,
        source_rate=source_rate,
        halved_rate=halved_rate,
        capped_rate=capped_rate,
        credit_amount=credit_amount,
        description=description,
    )


class CreditApplicator:
    """Detects the Anrechnung pair among calculated items and applies it."""

    def apply(
        self,
        items: list[CalculationItem],
        version: FeeScheduleVersion,
    ) -> tuple[list[CalculationItem], CreditResult | None]:
        """
        Apply the credit if both source and target positions are present.

        Detection is by code, so the order in which positions were added does
        not matter. The base fee is taken at the target's disputed amount.

        Returns:
            The (possibly updated) items and the applied credit, if any
        """
        pair = catalog.credit_pair()
        if pair is None:
            return items, None

        source_code, target_code = pair
        source = next((i for i in items if i.code == source_code), None)
        target = next((i for i in items if i.code == target_code), None)

        if source is None or target is None or source.rate is None or target.rate is None:
            return items, None

        base_fee = compute_base_fee(target.disputed_amount, version)
        result = compute_credit(source.rate, target.rate, base_fee, source_code, target_code)

        note = f"Anrechnung: -{format_money(result.credit_amount)}"
        credited = replace(
            target,
            credit_deduction=-result.credit_amount,
            final_amount=quantize_money(target.amount - result.credit_amount),
            notes=f"{target.notes}; {note}" if target.notes else note,
        )
        logger.debug(f"Applied credit {source_code} -> {target_code}: {result.credit_amount}")

        return [credited if item is target else item for item in items], result
