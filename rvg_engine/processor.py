"""
Calculation Processor - Request Orchestrator

Turns API requests into calculations through discrete, testable steps.
"""

import json
from datetime import date
from typing import Any, Dict

from . import catalog
from .calculator import build_calculation
from .models import CalculationRequest, CalculationResult, PositionRequest
from .money import to_decimal
from .output import OutputBuilder
from .presets import get_preset
from .schedules import get_schedule_for_date
from .validators import RequestValidator


class CalculationProcessor:
    """
    Main orchestrator for API calculations.

    Pipeline:
    1. Validate Input
    2. Expand Preset
    3. Build Calculation (credit, expenses, VAT, totals)
    4. Build Output
    """

    def __init__(self):
        self.validator = RequestValidator()
        self.output_builder = OutputBuilder()

    def process(self, request: CalculationRequest) -> CalculationResult:
        """
        Run a request through the calculator.

        Args:
            request: Parsed CalculationRequest

        Returns:
            The finalized CalculationResult
        """
        # Step 1: Validate
        self.validator.validate(request)

        # Step 2: Preset fees, then explicit positions, then preset expenses
        positions = self._expand_positions(request)

        # Step 3: Calculate
        return build_calculation(
            request.disputed_amount,
            positions,
            reference_date=request.reference_date,
            disable_credit=not request.auto_credit,
            disable_expenses=not request.auto_expenses,
            disable_vat=not request.auto_vat,
        )

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process a calculation from raw dictionary input.

        Convenience method for API usage.
        """
        request = CalculationRequest.from_dict(data)
        result = self.process(request)
        return self.output_builder.build(result)

    def search_positions(self, query: str) -> Dict[str, Any]:
        """Catalog search for the API."""
        return {"positions": self.output_builder.build_positions(catalog.search_positions(query))}

    def list_presets(self) -> Dict[str, Any]:
        return self.output_builder.build_presets()

    def base_fee(self, amount, on: str | None = None) -> Dict[str, Any]:
        """
        Base fee (rate 1.0) for an amount on a date (ISO format, default today).

        Raises ValueError (or decimal.InvalidOperation) for malformed input.
        """
        schedule = get_schedule_for_date(date.fromisoformat(on[:10]) if on else date.today())
        return self.output_builder.build_base_fee(to_decimal(amount), schedule)

    def _expand_positions(self, request: CalculationRequest) -> list[PositionRequest]:
        if not request.preset:
            return list(request.positions)

        # Expense and VAT positions of a preset go last so they cover explicit fees
        codes = get_preset(request.preset).codes
        fees = [PositionRequest(code=c) for c in codes if not catalog.require_position(c).auto_addable]
        explicit = {p.code for p in request.positions}
        trailing = [
            PositionRequest(code=c) for c in codes
            if catalog.require_position(c).auto_addable and c not in explicit
        ]
        return fees + list(request.positions) + trailing


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_calculation_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process a calculation from Python dict and return Python dict.
    """
    processor = CalculationProcessor()
    return processor.process_from_dict(input_data)


def process_calculation_from_json(json_input: str) -> str:
    """
    Process a calculation from JSON string input and return JSON string output.
    """
    try:
        input_data = json.loads(json_input)
        processor = CalculationProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
