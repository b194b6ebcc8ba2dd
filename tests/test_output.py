"""
Unit Tests for the Output Builder
"""

from datetime import date
from decimal import Decimal

import pytest

from rvg_engine import RvgCalculator
from rvg_engine.output import OutputBuilder


@pytest.fixture
def builder():
    return OutputBuilder()


@pytest.fixture
def credited_result():
    return (
        RvgCalculator(Decimal('5000'), date(2025, 7, 1))
        .add_position('2300')
        .add_position('3100')
        .finalize()
    )


class TestBuild:

    def test_sections(self, builder, credited_result):
        output = builder.build(credited_result)
        assert set(output) == {"summary", "items", "credit", "totals", "notices", "invoice_lines"}

    def test_summary(self, builder, credited_result):
        summary = builder.build(credited_result)["summary"]
        assert summary == {
            "disputed_amount": 5000.0,
            "reference_date": "2025-07-01",
            "schedule_version": "RVG_2025",
            "position_count": 4,
        }

    def test_items_are_floats(self, builder, credited_result):
        target = builder.build(credited_result)["items"][1]

        assert target["code"] == '3100'
        assert target["rate"] == 1.3
        assert target["base_fee"] == 354.5
        assert target["amount"] == 460.85
        assert target["credit_deduction"] == -230.43
        assert target["final_amount"] == 230.42

    def test_expense_item_has_no_base_fee(self, builder, credited_result):
        expense = builder.build(credited_result)["items"][2]
        assert expense["code"] == '7002'
        assert expense["base_fee"] is None
        assert expense["rate"] is None

    def test_credit_section(self, builder, credited_result):
        credit = builder.build(credited_result)["credit"]
        assert credit["halved_rate"] == 0.65
        assert credit["credit_amount"] == 230.43
        assert 'Vorbem. 3 Abs. 4' in credit["description"]

    def test_totals_have_value_and_description(self, builder, credited_result):
        totals = builder.build(credited_result)["totals"]

        assert totals["net_total"]["value"] == 711.27
        assert totals["vat_amount"]["value"] == 135.14
        assert totals["gross_total"]["value"] == 846.41
        assert "3 fee and expense positions" in totals["net_total"]["description"]
        assert "VV 7008: 0.19" in totals["vat_amount"]["description"]

    def test_no_vat_description(self, builder):
        result = (
            RvgCalculator(Decimal('5000'), date(2025, 7, 1))
            .without_vat_auto_append()
            .add_position('3100')
            .finalize()
        )
        totals = builder.build(result)["totals"]
        assert totals["vat_amount"]["description"] == "No VAT charged"


class TestInvoiceLines:

    def test_one_line_per_item(self, builder, credited_result):
        lines = builder.build(credited_result)["invoice_lines"]
        assert [line["code"] for line in lines] == ['2300', '3100', '7002', '7008']

    def test_credited_line_uses_final_amount(self, builder, credited_result):
        line = builder.build(credited_result)["invoice_lines"][1]

        assert line["unit_price"] == 230.42
        assert line["amount"] == 230.42
        assert line["quantity"] == 1
        assert 'Anrechnung' in line["description"]

    def test_vat_rates(self, builder, credited_result):
        lines = builder.build(credited_result)["invoice_lines"]
        assert [line["vat_rate"] for line in lines] == [19, 19, 19, 0]


class TestLookupOutput:

    def test_build_presets(self, builder):
        output = builder.build_presets()
        first = output["presets"][0]
        assert first["codes"] == ['3100', '3104', '7002', '7008']

        rent = next(s for s in output["suggestions"] if s["id"] == 'mietstreit')
        assert rent["multiplier"] == 12.0
        assert rent["example"] == 9600.0
