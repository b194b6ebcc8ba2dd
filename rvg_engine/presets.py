"""
Calculator Presets

Standard position combinations for common case types, and suggestions for
estimating the disputed amount.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .calculator import build_calculation
from .models import CalculationResult
from .money import quantize_money, to_decimal


@dataclass(frozen=True)
class CalculatorPreset:
    id: str
    name: str
    description: str
    codes: tuple[str, ...]


@dataclass(frozen=True)
class DisputedAmountSuggestion:
    """How the disputed amount is usually estimated for a case type."""

    id: str
    name: str
    formula: str
    example: Decimal
    multiplier: Decimal | None = None
    base_unit: str | None = None


CALCULATOR_PRESETS: tuple[CalculatorPreset, ...] = (
    CalculatorPreset(
        id='klageverfahren-1-instanz',
        name='Typisches Klageverfahren 1. Instanz',
        description='Verfahrensgebuehr + Terminsgebuehr + Auslagen + USt',
        codes=('3100', '3104', '7002', '7008'),
    ),
    CalculatorPreset(
        id='aussergerichtlich',
        name='Aussergerichtliche Vertretung',
        description='Geschaeftsgebuehr + Auslagen + USt',
        codes=('2300', '7002', '7008'),
    ),
    CalculatorPreset(
        id='klageverfahren-einigung',
        name='Klageverfahren mit Einigung',
        description='Verfahrensgebuehr + Terminsgebuehr + Einigungsgebuehr + Auslagen + USt',
        codes=('3100', '3104', '1003', '7002', '7008'),
    ),
    CalculatorPreset(
        id='berufung',
        name='Berufung',
        description='Verfahrensgebuehr Berufung + Terminsgebuehr + Auslagen + USt',
        codes=('3200', '3202', '7002', '7008'),
    ),
    CalculatorPreset(
        id='mahnverfahren',
        name='Mahnverfahren',
        description='Verfahrensgebuehr Mahnverfahren + Auslagen + USt',
        codes=('3305', '7002', '7008'),
    ),
)

DISPUTED_AMOUNT_SUGGESTIONS: tuple[DisputedAmountSuggestion, ...] = (
    DisputedAmountSuggestion(
        id='kuendigungsschutz',
        name='Kuendigungsschutzklage',
        formula='3 x Bruttomonatsgehalt',
        example=Decimal('12000'),
        multiplier=Decimal('3'),
        base_unit='Bruttomonatsgehalt',
    ),
    DisputedAmountSuggestion(
        id='mietstreit',
        name='Mietstreitigkeit',
        formula='12 x Monatsmiete (Jahresnettokaltmiete)',
        example=Decimal('9600'),
        multiplier=Decimal('12'),
        base_unit='Monatsmiete (nettokalt)',
    ),
    DisputedAmountSuggestion(
        id='verkehrsunfall',
        name='Verkehrsunfall',
        formula='Schadenshoehe (Reparatur + Mietwagen + Schmerzensgeld)',
        example=Decimal('8000'),
    ),
    DisputedAmountSuggestion(
        id='schmerzensgeld',
        name='Schmerzensgeld',
        formula='Geschaetzte Schmerzensgeldsumme',
        example=Decimal('5000'),
    ),
    DisputedAmountSuggestion(
        id='kaufvertrag',
        name='Kaufvertragsstreitigkeit',
        formula='Kaufpreis bzw. Wertminderung',
        example=Decimal('3000'),
    ),
    DisputedAmountSuggestion(
        id='werkvertrag',
        name='Werkvertragsstreitigkeit',
        formula='Maengelbeseitigungskosten oder Minderungsbetrag',
        example=Decimal('15000'),
    ),
    DisputedAmountSuggestion(
        id='unterhalt',
        name='Unterhaltsstreitigkeit',
        formula='12 x monatlicher Unterhaltsbetrag',
        example=Decimal('6000'),
        multiplier=Decimal('12'),
        base_unit='monatlicher Unterhalt',
    ),
    DisputedAmountSuggestion(
        id='raeumungsklage',
        name='Raeumungsklage',
        formula='12 x Monatsmiete',
        example=Decimal('9600'),
        multiplier=Decimal('12'),
        base_unit='Monatsmiete',
    ),
)


def get_preset(preset_id: str) -> CalculatorPreset | None:
    return next((p for p in CALCULATOR_PRESETS if p.id == preset_id), None)


def get_suggestion(suggestion_id: str) -> DisputedAmountSuggestion | None:
    return next((s for s in DISPUTED_AMOUNT_SUGGESTIONS if s.id == suggestion_id), None)


def suggest_disputed_amount(base_value, suggestion_id: str) -> Decimal:
    """
    Estimate the disputed amount from a base value.

    E.g. a monthly salary of 4000 for 'kuendigungsschutz' gives 12000.
    Returns the base value unchanged for unknown ids or suggestions
    without a multiplier.
    """
    base_value = to_decimal(base_value)
    suggestion = get_suggestion(suggestion_id)
    if suggestion is None or suggestion.multiplier is None:
        return base_value
    return quantize_money(base_value * suggestion.multiplier)


def build_preset_calculation(
    preset_id: str,
    disputed_amount,
    reference_date: date | None = None,
    disable_credit: bool = False,
) -> CalculationResult:
    """Run a preset's positions through build_calculation()."""
    preset = get_preset(preset_id)
    if preset is None:
        raise ValueError(f"Unknown preset: {preset_id}")
    return build_calculation(
        disputed_amount,
        preset.codes,
        reference_date=reference_date,
        disable_credit=disable_credit,
    )
