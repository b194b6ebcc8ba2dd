"""
Output Builder

Constructs the API response from a CalculationResult.
"""

from decimal import Decimal

from .catalog import VAT_CODE
from .models import (
    CalculationItem,
    CalculationResult,
    CreditResult,
    FeeScheduleVersion,
    PositionDefinition,
)
from .money import format_money, format_rate, to_money
from .presets import CALCULATOR_PRESETS, DISPUTED_AMOUNT_SUGGESTIONS
from .schedules import compute_base_fee

# VAT rate applied to invoice lines; the VAT line itself is not taxed again
INVOICE_VAT_RATE = 19


def _rate(value) -> float | None:
    return float(value) if value is not None else None


class OutputBuilder:
    """Builds the final output response."""

    def build(self, result: CalculationResult) -> dict:
        """Construct the complete response dict from a result."""
        return {
            "summary": self._build_summary(result),
            "items": [self._build_item(item) for item in result.items],
            "credit": self._build_credit(result.credit),
            "totals": self._build_totals(result),
            "notices": list(result.notices),
            "invoice_lines": self._build_invoice_lines(result),
        }

    def _build_summary(self, result: CalculationResult) -> dict:
        return {
            "disputed_amount": to_money(result.disputed_amount),
            "reference_date": result.reference_date.isoformat(),
            "schedule_version": result.schedule_version,
            "position_count": len(result.items),
        }

    def _build_item(self, item: CalculationItem) -> dict:
        return {
            "code": item.code,
            "name": item.name,
            "fee_family": item.fee_family,
            "rate": _rate(item.rate),
            "base_fee": to_money(item.base_fee) if item.base_fee is not None else None,
            "disputed_amount": to_money(item.disputed_amount),
            "amount": to_money(item.amount),
            "credit_deduction": to_money(item.credit_deduction),
            "final_amount": to_money(item.final_amount),
            "notes": item.notes,
        }

    def _build_credit(self, credit: CreditResult | None) -> dict | None:
        if credit is None:
            return None
        return {
            "source_code": credit.source_code,
            "target_code": credit.target_code,
            "source_rate": _rate(credit.source_rate),
            "halved_rate": _rate(credit.halved_rate),
            "capped_rate": _rate(credit.capped_rate),
            "credit_amount": to_money(credit.credit_amount),
            "description": credit.description,
        }

    def _build_totals(self, result: CalculationResult) -> dict:
        """Build totals section with value and description for each field."""
        fee_count = sum(1 for i in result.items if i.code != VAT_CODE)
        vat_item = result.find_item(VAT_CODE)

        return {
            "net_total": {
                "value": to_money(result.net_total),
                "description": f"Sum of {fee_count} fee and expense positions = {format_money(result.net_total)}",
            },
            "vat_amount": {
                "value": to_money(result.vat_amount),
                "description": (
                    f"VV {VAT_CODE}: {format_rate(vat_item.rate)} x {format_money(result.net_total)} = "
                    f"{format_money(result.vat_amount)}"
                    if vat_item is not None and vat_item.rate is not None
                    else "No VAT charged"
                ),
            },
            "gross_total": {
                "value": to_money(result.gross_total),
                "description": (
                    f"net ({format_money(result.net_total)}) + VAT ({format_money(result.vat_amount)}) = "
                    f"{format_money(result.gross_total)}"
                ),
            },
        }

    def _build_invoice_lines(self, result: CalculationResult) -> list[dict]:
        """Pre-filled invoice positions for transferring the result to an invoice."""
        lines = []
        for item in result.items:
            lines.append({
                "code": item.code,
                "description": f"{item.name} ({item.notes})" if item.notes else item.name,
                "quantity": 1,
                "unit_price": to_money(item.final_amount),
                "vat_rate": 0 if item.code == VAT_CODE else INVOICE_VAT_RATE,
                "amount": to_money(item.final_amount),
            })
        return lines

    def build_positions(self, positions: list[PositionDefinition]) -> list[dict]:
        """Catalog entries for position search."""
        return [
            {
                "code": p.code,
                "name": p.name,
                "fee_family": p.fee_family,
                "default_rate": float(p.default_rate),
                "min_rate": _rate(p.min_rate),
                "max_rate": _rate(p.max_rate),
                "category": p.category,
                "description": p.description,
            }
            for p in positions
        ]

    def build_presets(self) -> dict:
        """Presets and disputed amount suggestions."""
        return {
            "presets": [
                {"id": p.id, "name": p.name, "description": p.description, "codes": list(p.codes)}
                for p in CALCULATOR_PRESETS
            ],
            "suggestions": [
                {
                    "id": s.id,
                    "name": s.name,
                    "formula": s.formula,
                    "example": to_money(s.example),
                    "multiplier": _rate(s.multiplier),
                    "base_unit": s.base_unit,
                }
                for s in DISPUTED_AMOUNT_SUGGESTIONS
            ],
        }

    def build_base_fee(self, amount: Decimal, schedule: FeeScheduleVersion) -> dict:
        return {
            "amount": to_money(amount),
            "schedule_version": schedule.id,
            "base_fee": to_money(compute_base_fee(amount, schedule)),
        }
