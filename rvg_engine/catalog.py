"""
VV Position Catalog - Verguetungsverzeichnis (Anlage 1 RVG)

Read-only registry of the fee positions the engine can compute.

Organized by VV part:
- Part 1: General fees (1000-1008)
- Part 2: Out-of-court representation (2300)
- Part 3: Civil proceedings (3100-3307)
- Part 7: Expenses (7002-7008)
"""

from decimal import Decimal

from .errors import UnknownPositionError
from .models import (
    AD_VALOREM,
    AMOUNT,
    EXPENSE,
    FEE_SHARE,
    PARTY_COUNT,
    PER_DAY,
    PER_UNIT,
    RATE,
    VAT,
    PositionDefinition,
)

# Codes the engine appends on its own
EXPENSE_FLAT_RATE_CODE = '7002'
VAT_CODE = '7008'

# Daily absence money tiers for VV 7005: (max hours, daily rate)
ABSENCE_MONEY_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal('4'), Decimal('30.00')),
    (Decimal('8'), Decimal('50.00')),
)
ABSENCE_MONEY_FULL_DAY = Decimal('80.00')


POSITIONS: tuple[PositionDefinition, ...] = (
    # ---------------------------------------------------------------------
    # Part 1 - General fees
    # ---------------------------------------------------------------------
    PositionDefinition(
        code='1000',
        name='Einigungsgebuehr (aussergerichtlich)',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.5'),
        min_rate=Decimal('0.2'),
        max_rate=Decimal('1.5'),
        part=1,
        category='einigung',
        description='Einigungsgebuehr fuer aussergerichtliche Einigung (VV 1000 RVG)',
    ),
    PositionDefinition(
        code='1003',
        name='Einigungsgebuehr (gerichtlich)',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.0'),
        min_rate=Decimal('0.2'),
        max_rate=Decimal('1.0'),
        part=1,
        category='einigung',
        description='Einigungsgebuehr fuer gerichtliche Einigung/Vergleich (VV 1003 RVG)',
    ),
    PositionDefinition(
        code='1008',
        name='Erhoehungsgebuehr (Streitgenossen)',
        fee_family=AD_VALOREM,
        computation=PARTY_COUNT,
        default_rate=Decimal('0.3'),
        min_rate=Decimal('0.3'),
        max_rate=Decimal('2.0'),
        part=1,
        category='zuschlag',
        description=(
            'Erhoehung fuer mehrere Auftraggeber: 0.3 je weiterem Auftraggeber, '
            'max. Gesamterhoehung 2.0 (VV 1008 RVG)'
        ),
    ),
    # ---------------------------------------------------------------------
    # Part 2 - Out-of-court representation
    # ---------------------------------------------------------------------
    PositionDefinition(
        code='2300',
        name='Geschaeftsgebuehr',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.3'),
        min_rate=Decimal('0.5'),
        max_rate=Decimal('2.5'),
        part=2,
        category='geschaeft',
        credit_source=True,
        credit_target='3100',
        description=(
            'Geschaeftsgebuehr fuer aussergerichtliche Vertretung. '
            'Anrechnung auf VV 3100 nach Vorbem. 3 Abs. 4 VV RVG.'
        ),
    ),
    # ---------------------------------------------------------------------
    # Part 3 - Civil proceedings
    # ---------------------------------------------------------------------
    PositionDefinition(
        code='3100',
        name='Verfahrensgebuehr',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.3'),
        min_rate=Decimal('0.5'),
        max_rate=Decimal('1.3'),
        part=3,
        category='verfahren',
        description='Verfahrensgebuehr 1. Instanz (VV 3100 RVG)',
    ),
    PositionDefinition(
        code='3104',
        name='Terminsgebuehr',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.2'),
        min_rate=Decimal('0.5'),
        max_rate=Decimal('1.2'),
        part=3,
        category='termin',
        description='Terminsgebuehr 1. Instanz (VV 3104 RVG)',
    ),
    PositionDefinition(
        code='3200',
        name='Verfahrensgebuehr Berufung',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.6'),
        min_rate=Decimal('0.5'),
        max_rate=Decimal('1.6'),
        part=3,
        category='verfahren',
        description='Verfahrensgebuehr in der Berufungsinstanz (VV 3200 RVG)',
    ),
    PositionDefinition(
        code='3202',
        name='Terminsgebuehr Berufung',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('1.2'),
        min_rate=Decimal('0.5'),
        max_rate=Decimal('1.2'),
        part=3,
        category='termin',
        description='Terminsgebuehr in der Berufungsinstanz (VV 3202 RVG)',
    ),
    PositionDefinition(
        code='3305',
        name='Verfahrensgebuehr Mahnverfahren',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('0.5'),
        part=3,
        category='mahnverfahren',
        description='Verfahrensgebuehr im Mahnverfahren (VV 3305 RVG). Halbe Gebuehr.',
    ),
    PositionDefinition(
        code='3307',
        name='Verfahrensgebuehr Mahnverfahren (Widerspruch)',
        fee_family=AD_VALOREM,
        computation=RATE,
        default_rate=Decimal('0.5'),
        part=3,
        category='mahnverfahren',
        description='Verfahrensgebuehr bei Widerspruch/Einspruch im Mahnverfahren (VV 3307 RVG)',
    ),
    # ---------------------------------------------------------------------
    # Part 7 - Expenses
    # ---------------------------------------------------------------------
    PositionDefinition(
        code='7002',
        name='Auslagenpauschale',
        fee_family=EXPENSE,
        computation=FEE_SHARE,
        default_rate=Decimal('0.20'),
        part=7,
        category='auslagen',
        auto_addable=True,
        cap_amount=Decimal('20.00'),
        description=(
            'Pauschale fuer Entgelte fuer Post- und Telekommunikationsdienstleistungen: '
            '20% der Gebuehren, max. 20.00 EUR (VV 7002 RVG)'
        ),
    ),
    PositionDefinition(
        code='7003',
        name='Fahrtkosten',
        fee_family=EXPENSE,
        computation=PER_UNIT,
        default_rate=Decimal('0.42'),
        part=7,
        category='reisekosten',
        description='Fahrtkosten: 0.42 EUR je gefahrenen km (VV 7003 RVG)',
    ),
    PositionDefinition(
        code='7005',
        name='Abwesenheitsgeld',
        fee_family=EXPENSE,
        computation=PER_DAY,
        default_rate=Decimal('0'),
        part=7,
        category='reisekosten',
        description='Tage-/Abwesenheitsgeld: bis 4h = 30 EUR, 4-8h = 50 EUR, ueber 8h = 80 EUR (VV 7005 RVG)',
    ),
    PositionDefinition(
        code='7008',
        name='Umsatzsteuer (19%)',
        fee_family=EXPENSE,
        computation=VAT,
        default_rate=Decimal('0.19'),
        part=7,
        category='steuer',
        auto_addable=True,
        description='Umsatzsteuer auf die Verguetung: 19% (VV 7008 RVG)',
    ),
)

_BY_CODE: dict[str, PositionDefinition] = {p.code: p for p in POSITIONS}


def get_position(code: str) -> PositionDefinition | None:
    """Look up a position by its exact VV number, None if unknown."""
    return _BY_CODE.get(code)


def require_position(code: str) -> PositionDefinition:
    """Look up a position, raising UnknownPositionError if unknown."""
    position = _BY_CODE.get(code)
    if position is None:
        raise UnknownPositionError(code)
    return position


def credit_pair() -> tuple[str, str] | None:
    """The (source, target) codes of the Anrechnung rule."""
    for position in POSITIONS:
        if position.credit_source and position.credit_target:
            return position.code, position.credit_target
    return None


def search_positions(query: str) -> list[PositionDefinition]:
    """
    Search positions by VV number prefix, name or category.

    Ranking: exact number first, then number prefix, then other matches.
    Within a rank the catalog order is kept.
    """
    if not query or not query.strip():
        return []

    needle = query.strip().lower()

    def rank(position: PositionDefinition) -> int:
        if position.code == needle:
            return 0
        if position.code.startswith(needle):
            return 1
        return 2

    matches = [
        p for p in POSITIONS
        if p.code.startswith(needle)
        or needle in p.name.lower()
        or needle in p.category.lower()
    ]
    return sorted(matches, key=rank)
