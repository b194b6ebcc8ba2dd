"""
RVG FEE ENGINE
Statutory legal fee calculation (RVG / GKG / PKH)
"""

from .calculator import RvgCalculator, build_calculation, compute_fee
from .errors import CalculationFinalizedError, UnknownPositionError
from .models import CalculationResult, PositionOptions
from .processor import CalculationProcessor

__all__ = [
    'RvgCalculator',
    'build_calculation',
    'compute_fee',
    'CalculationProcessor',
    'CalculationResult',
    'PositionOptions',
    'UnknownPositionError',
    'CalculationFinalizedError',
]
