"""
RVG Calculator - Builder

Accumulates VV positions for one disputed amount and finalizes them into a
CalculationResult.

Usage:
    result = (
        RvgCalculator(Decimal('5000'))
        .add_position('3100')   # Verfahrensgebuehr 1.3
        .add_position('3104')   # Terminsgebuehr 1.2
        .finalize()
    )

Finalizing:
1. Applies the Anrechnung when both 2300 and 3100 are present
2. Appends VV 7002 (Auslagenpauschale) unless disabled
3. Appends VV 7008 (Umsatzsteuer) unless disabled
4. Computes net, VAT and gross totals

An explicitly added 7002 or 7008 is always resolved in finalize(), after
every fee exists, and appears once however often it was added.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from . import catalog
from .calculators import CreditApplicator, PositionCalculator, TotalsCalculator
from .errors import CalculationFinalizedError
from .models import (
    CalculationItem,
    CalculationResult,
    FeeScheduleVersion,
    PositionOptions,
    PositionRequest,
)
from .money import quantize_money, to_decimal
from .schedules import RVG_2025, compute_base_fee, get_schedule_for_date

logger = logging.getLogger(__name__)


class RvgCalculator:
    """
    Single-use calculator for one disputed amount.

    The fee table is selected once from the reference date. After
    finalize() the instance rejects further use.
    """

    def __init__(self, disputed_amount, reference_date: date | None = None):
        self.disputed_amount = to_decimal(disputed_amount)
        self.reference_date = reference_date or date.today()
        self.schedule: FeeScheduleVersion = get_schedule_for_date(self.reference_date)

        self.position_calculator = PositionCalculator()
        self.credit_applicator = CreditApplicator()
        self.totals_calculator = TotalsCalculator()

        self._items: list[CalculationItem] = []
        self._notices: list[str] = []
        self._auto_expenses = True
        self._auto_vat = True
        self._credit_detection = True
        self._expenses_requested = False
        self._vat_requested = False
        self._finalized = False

    @property
    def items(self) -> tuple[CalculationItem, ...]:
        return tuple(self._items)

    def add_position(self, code: str, options: PositionOptions | None = None) -> "RvgCalculator":
        """
        Add a VV position to the calculation.

        Raises:
            UnknownPositionError: The code is not in the catalog
            CalculationFinalizedError: finalize() was already called
        """
        self._check_open()
        position = catalog.require_position(code)

        # Expenses and VAT depend on all other items, so they are resolved in finalize()
        if position.code == catalog.EXPENSE_FLAT_RATE_CODE:
            self._expenses_requested = True
            return self
        if position.code == catalog.VAT_CODE:
            self._vat_requested = True
            return self

        self._append(position.code, options)
        return self

    def without_expense_auto_append(self) -> "RvgCalculator":
        """Do not append VV 7002 automatically."""
        self._check_open()
        self._auto_expenses = False
        return self

    def without_vat_auto_append(self) -> "RvgCalculator":
        """Do not append VV 7008 automatically."""
        self._check_open()
        self._auto_vat = False
        return self

    def without_credit_detection(self) -> "RvgCalculator":
        """Do not apply the Anrechnung."""
        self._check_open()
        self._credit_detection = False
        return self

    def finalize(self) -> CalculationResult:
        """Apply credit, auto-complete expenses and VAT, and compute totals."""
        self._check_open()

        # Step 1: Anrechnung
        credit = None
        if self._credit_detection:
            self._items, credit = self.credit_applicator.apply(self._items, self.schedule)
            if credit is not None:
                self._notices.append(credit.description)

        # Step 2: Auslagenpauschale (base: fees after credit)
        if self._auto_expenses or self._expenses_requested:
            self._append(catalog.EXPENSE_FLAT_RATE_CODE)

        # Step 3: Umsatzsteuer (base includes the Auslagenpauschale)
        if self._auto_vat or self._vat_requested:
            self._append(catalog.VAT_CODE)

        # Step 4: Totals
        totals = self.totals_calculator.calculate(self._items)
        self._finalized = True

        logger.debug(
            f"Calculated {len(self._items)} items on {self.disputed_amount} "
            f"({self.schedule.id}): gross {totals.gross_total}"
        )

        return CalculationResult(
            items=tuple(self._items),
            credit=credit,
            disputed_amount=self.disputed_amount,
            reference_date=self.reference_date,
            schedule_version=self.schedule.id,
            net_total=totals.net_total,
            vat_amount=totals.vat_amount,
            gross_total=totals.gross_total,
            notices=tuple(self._notices),
        )

    def _append(self, code: str, options: PositionOptions | None = None) -> None:
        item = self.position_calculator.calculate(
            catalog.require_position(code),
            options or PositionOptions(),
            self.disputed_amount,
            self.schedule,
            self._items,
        )
        self._items.append(item)

    def _check_open(self) -> None:
        if self._finalized:
            raise CalculationFinalizedError("Calculation already finalized; create a new RvgCalculator")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def compute_fee(disputed_amount, rate, version: FeeScheduleVersion = RVG_2025) -> Decimal:
    """Compute a single ad-valorem fee: rate x base fee."""
    return quantize_money(compute_base_fee(disputed_amount, version) * to_decimal(rate))


def _as_position_request(position) -> PositionRequest:
    if isinstance(position, PositionRequest):
        return position
    if isinstance(position, str):
        return PositionRequest(code=position)
    if isinstance(position, dict):
        return PositionRequest.from_dict(position)
    code, options = position
    return PositionRequest(code=code, options=options or PositionOptions())


def build_calculation(
    disputed_amount,
    positions: Iterable,
    reference_date: date | None = None,
    disable_credit: bool = False,
    disable_expenses: bool = False,
    disable_vat: bool = False,
) -> CalculationResult:
    """
    Build a complete calculation in one call.

    Args:
        disputed_amount: Streitwert in EUR
        positions: PositionRequests, (code, options) pairs, dicts or codes
        reference_date: Date of engagement, selects the fee table

    Returns:
        The finalized CalculationResult
    """
    calc = RvgCalculator(disputed_amount, reference_date)

    if disable_credit:
        calc.without_credit_detection()
    if disable_expenses:
        calc.without_expense_auto_append()
    if disable_vat:
        calc.without_vat_auto_append()

    for position in positions:
        request = _as_position_request(position)
        calc.add_position(request.code, request.options)

    return calc.finalize()
