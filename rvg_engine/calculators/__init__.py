"""
Calculators Package

Provides the calculation components used by the RVG calculator.
"""

from .credit import CreditApplicator, compute_credit
from .positions import PositionCalculator
from .totals import Totals, TotalsCalculator

__all__ = [
    "PositionCalculator",
    "CreditApplicator",
    "compute_credit",
    "TotalsCalculator",
    "Totals",
]
