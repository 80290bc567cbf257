"""Unit tests for the pension comparisons.

Covers lump sum vs monthly pension, single life vs joint and survivor, and
retiring at two different ages.
"""

import math

import pytest

from fincalc.calculators import pension
from fincalc.calculators.annuity import present_value
from fincalc.calculators.errors import CalculationError

LUMP = pension.LumpSumInputs(
    retirement_age=65, lump_sum=300000, monthly_pension=2000, investment_return=5, cola=2, life_expectancy=85
)

JOINT = pension.JointSurvivorInputs(
    retirement_age=65,
    life_expectancy=80,
    spouse_age=62,
    spouse_life_expectancy=90,
    single_life_amount=2500,
    joint_amount=2200,
    survivor_percent=50,
    investment_return=5,
    cola=0,
)

WORK = pension.WorkLongerInputs(
    current_age=55,
    option1_retirement_age=62,
    option1_monthly_amount=2000,
    option2_retirement_age=65,
    option2_monthly_amount=2500,
    life_expectancy=85,
    investment_return=5,
    cola=0,
)


def test_lump_sum_vs_pension_example():
    """A COLA pension worth ~$360k today beats a $300k lump sum."""
    result = pension.calculate_lump_sum_vs_pension(LUMP)
    assert result.comparison.better_option == "monthly-pension"
    assert result.pension_present_value > LUMP.lump_sum
    assert math.isclose(result.lump_sum_monthly_withdrawal, 1000.0)
    assert math.isclose(result.lump_sum_total_withdrawn, 240000.0)
    assert result.pension_final_amount > LUMP.monthly_pension


def test_lump_sum_break_even_age():
    """Nominal pension payments pass $300k during the 12th year (~$24k/yr growing 2%)."""
    result = pension.calculate_lump_sum_vs_pension(LUMP)
    assert result.break_even_age == 77


def test_lump_sum_projection_spans_retirement():
    result = pension.calculate_lump_sum_vs_pension(LUMP)
    assert len(result.projection) == 21
    assert result.projection[0].age == 65
    assert result.projection[-1].age == 85
    assert result.projection[0].option1_value == LUMP.lump_sum
    assert result.projection[0].option2_cumulative == 0.0


def test_lump_sum_rejects_zero_amount():
    bad = pension.LumpSumInputs(65, 0, 2000, 5, 2, 85)
    with pytest.raises(CalculationError, match="Lump sum"):
        pension.calculate_lump_sum_vs_pension(bad)
    assert "Lump sum amount must be greater than zero" in pension.validate_lump_sum_inputs(bad)


def test_joint_present_value_includes_survivor():
    """The joint value is the joint annuity plus the deferred survivor annuity."""
    result = pension.calculate_single_life_vs_joint(JOINT)
    i = 0.05 / 12
    own = present_value(2200, 180, i, 0.0)
    survivor = present_value(1100, 156, i, 0.0) / (1 + i) ** 180
    assert math.isclose(result.joint_present_value, own + survivor, rel_tol=1e-9)
    assert result.survivor_monthly_amount == 1100.0
    assert math.isclose(result.survivor_total, 1100.0 * 156)
    assert result.joint_months == 336


def test_joint_break_even_years():
    """$300 a month for 15 years is recovered by $1,100 survivor payments in 50 months."""
    result = pension.calculate_single_life_vs_joint(JOINT)
    assert math.isclose(result.break_even_years, 50 / 12)


def test_joint_without_survivor_benefit():
    no_survivor = pension.JointSurvivorInputs(65, 80, 62, 90, 2500, 2200, 0, 5, 0)
    result = pension.calculate_single_life_vs_joint(no_survivor)
    assert result.break_even_years is None
    assert result.survivor_total == 0
    assert result.comparison.better_option == "single-life"


def test_joint_projection_covers_longer_life():
    result = pension.calculate_single_life_vs_joint(JOINT)
    assert len(result.projection) == 29
    assert result.projection[-1].option1_monthly == 0.0


def test_joint_validation_rejects_larger_joint_amount():
    bad = pension.JointSurvivorInputs(65, 80, 62, 90, 2000, 2200, 50, 5, 0)
    assert "Joint survivor pension amount cannot exceed single life amount" in pension.validate_joint_survivor_inputs(bad)


def test_work_longer_values_at_earlier_retirement():
    """The later option's value is discounted over the three waiting years."""
    result = pension.calculate_work_longer(WORK)
    i = 0.05 / 12
    assert math.isclose(result.option1.present_value, present_value(2000, 276, i, 0.0))
    assert math.isclose(result.option2.present_value, present_value(2500, 240, i, 0.0) / (1 + i) ** 36)
    assert result.additional_years_worked == 3
    assert result.option1.years == 23


def test_work_longer_break_even_age():
    """Retiring at 62 banks $72k by 65; the extra $500/month catches up at 77."""
    result = pension.calculate_work_longer(WORK)
    assert result.break_even_age == 77


def test_work_longer_projection_starts_at_current_age():
    result = pension.calculate_work_longer(WORK)
    assert result.projection[0].age == 55
    assert result.projection[-1].age == 85
    assert result.projection[7].option1_monthly == 2000.0
    assert result.projection[7].option2_monthly == 0.0


def test_work_longer_same_ages():
    same = pension.WorkLongerInputs(55, 65, 2000, 65, 2500, 85, 5, 0)
    with pytest.raises(CalculationError, match="different"):
        pension.calculate_work_longer(same)
    assert "Retirement ages must be different to compare options" in pension.validate_work_longer_inputs(same)


def test_validators_deduplicate():
    bad = pension.LumpSumInputs(65, 300000, 2000, -1, -1, 85)
    errors = pension.validate_lump_sum_inputs(bad)
    assert len(errors) == len(set(errors)) == 2
