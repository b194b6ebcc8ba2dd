"""
Position Calculator

Resolves the amount of a single VV position. Each formula is a separate
method; the position's `computation` field selects which one applies.
All amounts use Decimal with ROUND_HALF_UP rounding.
"""

import logging
from decimal import Decimal

from .. import catalog
from ..models import (
    AD_VALOREM,
    AMOUNT,
    FEE_SHARE,
    PARTY_COUNT,
    PER_DAY,
    PER_UNIT,
    RATE,
    VAT,
    CalculationItem,
    FeeScheduleVersion,
    PositionDefinition,
    PositionOptions,
)
from ..money import ZERO, format_money, format_rate, quantize_money
from ..schedules import compute_base_fee

logger = logging.getLogger(__name__)


class PositionCalculator:
    """Calculates the line item for one position."""

    # Surcharge per additional client and maximum total surcharge (VV 1008)
    PARTY_SURCHARGE_RATE = Decimal('0.3')
    PARTY_SURCHARGE_MAX = Decimal('2.0')
    DEFAULT_PARTY_COUNT = 2

    def calculate(
        self,
        position: PositionDefinition,
        options: PositionOptions,
        disputed_amount: Decimal,
        version: FeeScheduleVersion,
        items: list[CalculationItem],
    ) -> CalculationItem:
        """
        Build the line item for a position.

        Args:
            position: Catalog definition
            options: Caller overrides
            disputed_amount: The calculation's Streitwert
            version: Fee table bound to the calculation
            items: Items calculated so far (for percentage formulas)
        """
        amount_basis = options.amount_override if options.amount_override is not None else disputed_amount
        base_fee = compute_base_fee(amount_basis, version)
        rate = None
        notes = ''

        if position.computation == RATE:
            rate, notes = self._clamp_rate(position, options.rate)
            amount = quantize_money(rate * base_fee)
        elif position.computation == PARTY_COUNT:
            rate, notes = self._party_surcharge_rate(options.party_count)
            amount = quantize_money(rate * base_fee)
        elif position.computation == FEE_SHARE:
            amount, notes = self._calculate_fee_share(position, items)
        elif position.computation == VAT:
            rate = position.default_rate
            amount, notes = self._calculate_vat(position, items)
        elif position.computation == PER_UNIT:
            amount, notes = self._calculate_per_unit(position, options.distance_km)
        elif position.computation == PER_DAY:
            amount, notes = self._calculate_per_day(options)
        elif position.computation == AMOUNT:
            amount = options.fixed_amount if options.fixed_amount is not None else ZERO
        else:
            amount = ZERO

        return CalculationItem(
            code=position.code,
            name=position.name,
            fee_family=position.fee_family,
            rate=rate,
            base_fee=base_fee if position.fee_family == AD_VALOREM else None,
            disputed_amount=amount_basis,
            amount=amount,
            credit_deduction=ZERO,
            final_amount=amount,
            notes=notes,
        )

    def _clamp_rate(self, position: PositionDefinition, requested: Decimal | None) -> tuple[Decimal, str]:
        """Use the requested or default rate, clamped into the position's bounds."""
        rate = requested if requested is not None else position.default_rate
        clamped = rate
        if position.min_rate is not None and clamped < position.min_rate:
            clamped = position.min_rate
        if position.max_rate is not None and clamped > position.max_rate:
            clamped = position.max_rate
        if clamped == rate:
            return rate, ''
        logger.debug(f"Rate {rate} for VV {position.code} clamped to {clamped}")
        return clamped, f"Satz {format_rate(rate)} auf {format_rate(clamped)} begrenzt"

    def _party_surcharge_rate(self, party_count: int | None) -> tuple[Decimal, str]:
        """0.3 per additional client, at most 2.0 in total."""
        count = party_count if party_count is not None else self.DEFAULT_PARTY_COUNT
        additional = max(count - 1, 0)
        rate = min(self.PARTY_SURCHARGE_RATE * additional, self.PARTY_SURCHARGE_MAX)
        return rate, f"{count} Auftraggeber ({additional} zusaetzlich), Erhoehung {format_rate(rate)}"

    def _calculate_fee_share(
        self, position: PositionDefinition, items: list[CalculationItem]
    ) -> tuple[Decimal, str]:
        """Percentage of all ad-valorem fees after credit, capped (VV 7002)."""
        fees_total = sum((i.final_amount for i in items if i.fee_family == AD_VALOREM), ZERO)
        amount = quantize_money(fees_total * position.default_rate)
        if position.cap_amount is not None:
            amount = min(amount, position.cap_amount)
            return amount, (
                f"{position.default_rate * 100:.0f}% von {format_money(fees_total)}, "
                f"max. {format_money(position.cap_amount)}"
            )
        return amount, f"{position.default_rate * 100:.0f}% von {format_money(fees_total)}"

    def _calculate_vat(
        self, position: PositionDefinition, items: list[CalculationItem]
    ) -> tuple[Decimal, str]:
        """Percentage of everything except VAT itself (VV 7008)."""
        net_total = sum((i.final_amount for i in items if i.code != position.code), ZERO)
        amount = quantize_money(net_total * position.default_rate)
        return amount, f"{position.default_rate * 100:.0f}% von {format_money(net_total)}"

    def _calculate_per_unit(
        self, position: PositionDefinition, units: Decimal | None
    ) -> tuple[Decimal, str]:
        """Units (kilometres) times the unit rate (VV 7003)."""
        km = units if units is not None else ZERO
        amount = quantize_money(km * position.default_rate)
        return amount, f"{km} km x {format_money(position.default_rate)}"

    def _calculate_per_day(self, options: PositionOptions) -> tuple[Decimal, str]:
        """Days times the daily rate of the absence tier (VV 7005)."""
        days = options.days if options.days is not None else Decimal('1')
        if options.fixed_amount is not None:
            daily_rate = options.fixed_amount
        else:
            daily_rate = self._absence_daily_rate(options.hours)
        amount = quantize_money(days * daily_rate)
        return amount, f"{days} Tag(e) x {format_money(daily_rate)}"

    @staticmethod
    def _absence_daily_rate(hours: Decimal | None) -> Decimal:
        if hours is None:
            return catalog.ABSENCE_MONEY_FULL_DAY
        for max_hours, rate in catalog.ABSENCE_MONEY_TIERS:
            if hours <= max_hours:
                return rate
        return catalog.ABSENCE_MONEY_FULL_DAY
