"""Unit tests for the federal tax estimate.

Values use the 2025 brackets and credit parameters shipped in
``fincalc/data/tax_tables.json``.
"""

import copy
import math

import pytest

from fincalc.calculators import taxes as tax_calc
from fincalc.calculators.errors import CalculationError


def test_single_filer_example():
    """Single filer with $50k of wages and the standard deduction."""
    result = tax_calc.calculate_tax(tax_calc.TaxInputs(filing_status="single", gross_income=50000))
    assert result.taxable_income == 34250
    assert math.isclose(result.federal_tax, 3871.5)
    assert result.marginal_rate == 12.0
    assert math.isclose(result.effective_rate, 3871.5 / 34250 * 100)
    assert result.deduction_type == "standard"


def test_tax_by_bracket_breakdown():
    by_bracket = tax_calc.calculate_tax_by_bracket(34250, "single")
    assert [row.bracket for row in by_bracket.breakdown] == ["10%", "12%"]
    assert math.isclose(sum(row.tax for row in by_bracket.breakdown), by_bracket.federal_tax)


def test_married_joint_uses_wider_brackets():
    single = tax_calc.calculate_tax_by_bracket(80000, "single")
    joint = tax_calc.calculate_tax_by_bracket(80000, "married_joint")
    assert joint.federal_tax < single.federal_tax
    assert tax_calc.standard_deduction("married_joint") == 31500


def test_child_tax_credit_below_phase_out():
    credit = tax_calc.calculate_child_tax_credit(2, 0, 50000)
    assert credit.total == 4400
    assert credit.refundable == 3400
    assert credit.non_refundable == 1000


def test_child_tax_credit_fully_phased_out():
    """$50k over the single threshold removes $2,500, more than one child's credit."""
    assert tax_calc.calculate_child_tax_credit(1, 0, 250000).total == 0


def test_child_tax_credit_joint_phase_out():
    credit = tax_calc.calculate_child_tax_credit(2, 0, 450000, "married_joint")
    assert credit.total == 1900


def test_child_tax_credit_with_other_dependents():
    credit = tax_calc.calculate_child_tax_credit(1, 2, 100000)
    assert credit.total == 3200
    assert credit.refundable == 1700


def test_eitc_phase_in_and_out():
    assert tax_calc.calculate_eitc(5000, "single", 1) == 1700
    assert tax_calc.calculate_eitc(20000, "single", 1) == 4328
    assert tax_calc.calculate_eitc(50000, "single", 0) == 0
    mid = tax_calc.calculate_eitc(37017, "single", 1)
    assert 0 < mid < 4328


def test_eitc_caps_children_at_three():
    assert tax_calc.calculate_eitc(20000, "single", 5) == tax_calc.calculate_eitc(20000, "single", 3)


def test_refundable_credits_increase_refund():
    inputs = tax_calc.TaxInputs(filing_status="single", gross_income=20000, dependents_under_17=1, federal_withholding=500)
    result = tax_calc.calculate_tax(inputs)
    assert result.tax_after_credits < 0
    assert result.refund_or_owed > 500
    assert result.total_tax_liability == result.estimated_state_tax


def test_itemized_deduction_used_when_larger():
    inputs = tax_calc.TaxInputs(
        filing_status="single",
        gross_income=120000,
        mortgage_interest=12000,
        state_local_taxes=15000,
        charitable_donations=2000,
    )
    result = tax_calc.calculate_tax(inputs)
    assert result.deduction_type == "itemized"
    assert result.deduction_used == 12000 + 10000 + 2000


def test_take_home_pay():
    inputs = tax_calc.TaxInputs(filing_status="single", gross_income=50000, pre_tax_deductions=5000)
    result = tax_calc.calculate_tax(inputs)
    assert math.isclose(result.take_home_pay, 50000 - 5000 - result.total_tax_liability)
    assert math.isclose(result.biweekly_take_home * 26, result.take_home_pay)


def test_tax_tables_override():
    """A caller-supplied table replaces the bundled one."""
    tables = copy.deepcopy(tax_calc.load_tax_tables())
    tables["2025"]["federal"]["single"] = {
        "standard_deduction": 0,
        "brackets": [{"start": 0, "end": None, "rate": 0.10}],
    }
    result = tax_calc.calculate_tax_by_bracket(10000, "single", tax_tables=tables)
    assert result.federal_tax == 1000
    assert tax_calc.standard_deduction("single", tax_tables=tables) == 0


def test_unknown_year():
    with pytest.raises(CalculationError):
        tax_calc.calculate_tax_by_bracket(10000, "single", year=1999)


def test_validation_messages():
    errors = tax_calc.validate_tax_inputs(tax_calc.TaxInputs(filing_status="widowed", gross_income=-1))
    assert "Unknown filing status: widowed" in errors
    assert "Gross income cannot be negative" in errors
