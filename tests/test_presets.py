"""Tests for calculator presets and disputed amount suggestions."""

from datetime import date
from decimal import Decimal

import pytest

from rvg_engine import catalog
from rvg_engine.presets import (
    CALCULATOR_PRESETS,
    DISPUTED_AMOUNT_SUGGESTIONS,
    build_preset_calculation,
    get_preset,
    get_suggestion,
    suggest_disputed_amount,
)


class TestPresets:

    def test_all_preset_codes_exist(self):
        for preset in CALCULATOR_PRESETS:
            for code in preset.codes:
                assert catalog.get_position(code) is not None, (preset.id, code)

    def test_ids_are_unique(self):
        ids = [p.id for p in CALCULATOR_PRESETS]
        assert len(ids) == len(set(ids))

    def test_get_preset(self):
        assert get_preset('berufung').codes == ('3200', '3202', '7002', '7008')
        assert get_preset('unknown') is None

    def test_build_first_instance_preset(self):
        result = build_preset_calculation('klageverfahren-1-instanz', 5000, date(2025, 7, 1))

        assert [i.code for i in result.items] == ['3100', '3104', '7002', '7008']
        assert result.gross_total == Decimal('1078.44')

    def test_build_out_of_court_preset(self):
        result = build_preset_calculation('aussergerichtlich', 5000, date(2025, 7, 1))

        # 460.85 + 20.00 = 480.85, VAT 91.36
        assert result.net_total == Decimal('480.85')
        assert result.gross_total == Decimal('572.21')

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            build_preset_calculation('nope', 5000)


class TestDisputedAmountSuggestions:

    def test_ids_are_unique(self):
        ids = [s.id for s in DISPUTED_AMOUNT_SUGGESTIONS]
        assert len(ids) == len(set(ids))

    def test_multiplier_examples_consistent(self):
        suggestion = get_suggestion('kuendigungsschutz')
        assert suggestion.multiplier == Decimal('3')
        assert suggestion.example == Decimal('12000')

    def test_suggest_with_multiplier(self):
        """Three monthly salaries for an unfair dismissal claim."""
        assert suggest_disputed_amount(4000, 'kuendigungsschutz') == Decimal('12000.00')
        assert suggest_disputed_amount('800', 'mietstreit') == Decimal('9600.00')

    def test_suggest_without_multiplier_returns_base(self):
        assert suggest_disputed_amount(8000, 'verkehrsunfall') == Decimal('8000')

    def test_suggest_unknown_id_returns_base(self):
        assert suggest_disputed_amount(5000, 'unknown') == Decimal('5000')
