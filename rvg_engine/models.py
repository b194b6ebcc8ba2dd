"""
Domain Models for the RVG Fee Engine

These dataclasses provide type-safe representations of fee schedules,
catalog positions and calculation results.
All monetary values and rates use Decimal for precision.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .money import to_decimal

# =============================================================================
# FEE FAMILIES AND FORMULAS
# =============================================================================

# Fee families (how the law classifies a position)
AD_VALOREM = 'ad_valorem'      # Wertgebuehr: rate x base fee
FIXED = 'fixed'                # Festgebuehr: caller-supplied amount
RANGE_BOUND = 'range_bound'    # Betragsrahmengebuehr: caller-supplied amount
EXPENSE = 'expense'            # Auslagen: percentage or per-unit formulas

FEE_FAMILIES = (AD_VALOREM, FIXED, RANGE_BOUND, EXPENSE)

# Formulas (how the engine computes the amount)
RATE = 'rate'                  # rate x base fee, rate clamped to bounds
PARTY_COUNT = 'party_count'    # rate derived from number of clients
FEE_SHARE = 'fee_share'        # percentage of current ad-valorem fees, capped
VAT = 'vat'                    # percentage of everything else
PER_UNIT = 'per_unit'          # units x unit rate
PER_DAY = 'per_day'            # days x daily rate
AMOUNT = 'amount'              # caller-supplied amount, default 0


# =============================================================================
# FEE SCHEDULE MODELS
# =============================================================================


@dataclass(frozen=True)
class RangeDefinition:
    """One segment of the statutory step algorithm."""

    range_end: Decimal
    step_size: Decimal
    increment: Decimal


@dataclass(frozen=True)
class FeeTableEntry:
    """An explicit (up_to, fee) row of a tabulated schedule."""

    up_to: Decimal
    fee: Decimal


@dataclass(frozen=True)
class AboveTableFormula:
    """Extrapolation parameters for amounts beyond the last table row."""

    base_fee: Decimal
    increment: Decimal
    step_size: Decimal


@dataclass(frozen=True)
class FeeScheduleVersion:
    """An edition of the general fee table (Anlage 2 zu § 13 RVG)."""

    id: str
    name: str
    law_reference: str
    valid_from: date
    valid_until: date | None  # exclusive, None = currently valid
    ranges: tuple[RangeDefinition, ...]
    initial_fee: Decimal
    above_table_increment: Decimal
    above_table_step_size: Decimal
    first_threshold: Decimal = Decimal('500')


@dataclass(frozen=True)
class CourtFeeScheduleVersion:
    """An edition of the court fee table (Anlage 2 GKG)."""

    id: str
    name: str
    law_reference: str
    valid_from: date
    valid_until: date | None
    entries: tuple[FeeTableEntry, ...]
    above_table: AboveTableFormula


@dataclass(frozen=True)
class ReducedFeeScheduleVersion:
    """An edition of the legal aid fee table (§ 49 RVG).

    Above `cap` the reduced table does not apply.
    """

    id: str
    name: str
    law_reference: str
    valid_from: date
    valid_until: date | None
    cap: Decimal
    entries: tuple[FeeTableEntry, ...]


# =============================================================================
# CATALOG MODELS
# =============================================================================


@dataclass(frozen=True)
class PositionDefinition:
    """A position of the Verguetungsverzeichnis (VV RVG)."""

    code: str
    name: str
    fee_family: str
    computation: str
    default_rate: Decimal
    part: int
    category: str
    min_rate: Decimal | None = None
    max_rate: Decimal | None = None
    credit_source: bool = False
    credit_target: str | None = None
    auto_addable: bool = False
    cap_amount: Decimal | None = None
    description: str = ''


# =============================================================================
# INPUT MODELS
# =============================================================================


def _optional_decimal(value) -> Decimal | None:
    return to_decimal(value) if value is not None else None


@dataclass
class PositionOptions:
    """Per-position overrides supplied by the caller."""

    rate: Decimal | None = None
    amount_override: Decimal | None = None  # Gegenstandswert for this position
    party_count: int | None = None
    distance_km: Decimal | None = None
    days: Decimal | None = None
    hours: Decimal | None = None
    fixed_amount: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PositionOptions":
        party_count = data.get("party_count")
        return cls(
            rate=_optional_decimal(data.get("rate")),
            # Support both 'amount_override' and legacy 'gegenstandswert'
            amount_override=_optional_decimal(
                data.get("amount_override", data.get("gegenstandswert"))
            ),
            party_count=int(party_count) if party_count is not None else None,
            distance_km=_optional_decimal(data.get("distance_km")),
            days=_optional_decimal(data.get("days")),
            hours=_optional_decimal(data.get("hours")),
            fixed_amount=_optional_decimal(data.get("fixed_amount")),
        )


@dataclass
class PositionRequest:
    """A position code together with its options."""

    code: str
    options: PositionOptions = field(default_factory=PositionOptions)

    @classmethod
    def from_dict(cls, data: dict) -> "PositionRequest":
        return cls(code=str(data.get("code", "")).strip(), options=PositionOptions.from_dict(data))


@dataclass
class CalculationRequest:
    """Complete input for one calculation."""

    disputed_amount: Decimal
    positions: list[PositionRequest] = field(default_factory=list)
    reference_date: date | None = None
    preset: str | None = None
    auto_credit: bool = True
    auto_expenses: bool = True
    auto_vat: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationRequest":
        reference = data.get("reference_date")
        return cls(
            disputed_amount=to_decimal(data["disputed_amount"]),
            positions=[PositionRequest.from_dict(p) for p in data.get("positions", [])],
            reference_date=date.fromisoformat(reference[:10]) if reference else None,
            preset=data.get("preset"),
            auto_credit=data.get("auto_credit", True),
            auto_expenses=data.get("auto_expenses", True),
            auto_vat=data.get("auto_vat", True),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class CalculationItem:
    """A single calculated line item."""

    code: str
    name: str
    fee_family: str
    rate: Decimal | None
    base_fee: Decimal | None
    disputed_amount: Decimal
    amount: Decimal
    credit_deduction: Decimal = Decimal('0')  # <= 0
    final_amount: Decimal = Decimal('0')
    notes: str = ''


@dataclass(frozen=True)
class CreditResult:
    """An applied Anrechnung of one fee onto another."""

    source_code: str
    target_code: str
    source_rate: Decimal
    halved_rate: Decimal
    capped_rate: Decimal
    credit_amount: Decimal
    description: str


@dataclass(frozen=True)
class CalculationResult:
    """Final, immutable output of a calculation."""

    items: tuple[CalculationItem, ...]
    credit: CreditResult | None
    disputed_amount: Decimal
    reference_date: date
    schedule_version: str
    net_total: Decimal
    vat_amount: Decimal
    gross_total: Decimal
    notices: tuple[str, ...] = ()

    def find_item(self, code: str) -> CalculationItem | None:
        return next((item for item in self.items if item.code == code), None)
