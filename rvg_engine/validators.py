"""
Input Validation for the RVG Fee Engine

Validates request data before a calculation is built.
Raises ValueError with clear messages for any constraint violations.

The calculator itself never rejects numeric input (it normalizes instead);
these checks apply to requests arriving over the API.
"""

from . import catalog
from .models import CalculationRequest, PositionRequest
from .presets import get_preset


class RequestValidator:
    """Validates calculation requests."""

    def validate(self, request: CalculationRequest) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self._validate_amount(request)
        self._validate_preset(request)

        for position in request.positions:
            self._validate_position(position)

    def _validate_amount(self, request: CalculationRequest) -> None:
        if request.disputed_amount <= 0:
            raise ValueError(f"disputed_amount must be positive, got: {request.disputed_amount}")

    def _validate_preset(self, request: CalculationRequest) -> None:
        if request.preset is not None and get_preset(request.preset) is None:
            raise ValueError(f"Unknown preset: {request.preset}")

        if request.preset is None and not request.positions:
            raise ValueError("At least one position or a preset is required")

    def _validate_position(self, position: PositionRequest) -> None:
        if not position.code:
            raise ValueError("Every position needs a code")

        # Raises UnknownPositionError (a ValueError)
        catalog.require_position(position.code)

        options = position.options
        for name in ("rate", "amount_override", "distance_km", "days", "hours", "fixed_amount"):
            value = getattr(options, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} cannot be negative for VV {position.code}, got: {value}")

        if options.party_count is not None and options.party_count < 1:
            raise ValueError(
                f"party_count must be at least 1 for VV {position.code}, got: {options.party_count}"
            )
