"""
Totals Calculator

Net, VAT and gross totals of a finished item list.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..catalog import VAT_CODE
from ..models import CalculationItem
from ..money import ZERO, quantize_money


@dataclass(frozen=True)
class Totals:
    net_total: Decimal
    vat_amount: Decimal
    gross_total: Decimal


class TotalsCalculator:
    """Sums items into net, VAT and gross totals."""

    def calculate(self, items: list[CalculationItem]) -> Totals:
        net_total = sum((i.final_amount for i in items if i.code != VAT_CODE), ZERO)
        vat_item = next((i for i in items if i.code == VAT_CODE), None)
        vat_amount = vat_item.final_amount if vat_item else ZERO

        return Totals(
            net_total=quantize_money(net_total),
            vat_amount=quantize_money(vat_amount),
            gross_total=quantize_money(net_total + vat_amount),
        )
