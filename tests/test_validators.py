"""
Unit Tests for Request Validation
"""

from decimal import Decimal

import pytest

from rvg_engine.errors import UnknownPositionError
from rvg_engine.models import CalculationRequest, PositionOptions, PositionRequest
from rvg_engine.validators import RequestValidator


def _request(amount='5000', positions=None, preset=None):
    if positions is None and preset is None:
        positions = [PositionRequest(code='3100')]
    return CalculationRequest(
        disputed_amount=Decimal(amount),
        positions=positions or [],
        preset=preset,
    )


class TestRequestValidator:

    @pytest.fixture
    def validator(self):
        return RequestValidator()

    def test_valid_request(self, validator):
        validator.validate(_request())

    def test_valid_preset_only(self, validator):
        validator.validate(_request(preset='berufung'))

    @pytest.mark.parametrize("amount", ['0', '-100'])
    def test_non_positive_amount(self, validator, amount):
        with pytest.raises(ValueError, match="disputed_amount must be positive"):
            validator.validate(_request(amount=amount))

    def test_unknown_preset(self, validator):
        with pytest.raises(ValueError, match="Unknown preset"):
            validator.validate(_request(preset='nope'))

    def test_no_positions_and_no_preset(self, validator):
        with pytest.raises(ValueError, match="At least one position"):
            validator.validate(_request(positions=[]))

    def test_empty_code(self, validator):
        with pytest.raises(ValueError, match="needs a code"):
            validator.validate(_request(positions=[PositionRequest(code='')]))

    def test_unknown_code(self, validator):
        with pytest.raises(UnknownPositionError):
            validator.validate(_request(positions=[PositionRequest(code='9999')]))

    @pytest.mark.parametrize("field", ['rate', 'amount_override', 'distance_km', 'days', 'hours', 'fixed_amount'])
    def test_negative_option(self, validator, field):
        options = PositionOptions(**{field: Decimal('-1')})
        with pytest.raises(ValueError, match=f"{field} cannot be negative"):
            validator.validate(_request(positions=[PositionRequest(code='3100', options=options)]))

    def test_party_count_below_one(self, validator):
        options = PositionOptions(party_count=0)
        with pytest.raises(ValueError, match="party_count must be at least 1"):
            validator.validate(_request(positions=[PositionRequest(code='1008', options=options)]))
