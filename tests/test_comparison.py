"""Unit tests for the two-option comparison helpers."""

import math

import numpy as np

from fincalc.calculators.comparison import compare_options, project_monthly_streams


def test_tie_goes_to_first_option():
    outcome = compare_options("a", 100.0, "b", 100.0)
    assert outcome.better_option == "a"
    assert outcome.difference_dollars == 0
    assert outcome.difference_percent == 0


def test_percent_against_larger_value():
    outcome = compare_options("a", 80.0, "b", 100.0)
    assert outcome.better_option == "b"
    assert math.isclose(outcome.difference_dollars, 20.0)
    assert math.isclose(outcome.difference_percent, 20.0)


def test_both_zero():
    assert compare_options("a", 0.0, "b", 0.0).difference_percent == 0.0


def test_projection_rows_span_every_year():
    """Row k reports what was received before month 12k and the payment due then."""
    rows = project_monthly_streams(65, 2, np.full(24, 100.0), np.full(12, 300.0))
    assert [row.age for row in rows] == [65, 66, 67]
    assert [row.option1_cumulative for row in rows] == [0.0, 1200.0, 2400.0]
    assert [row.option2_cumulative for row in rows] == [0.0, 3600.0, 3600.0]
    assert [row.option2_monthly for row in rows] == [300.0, 0.0, 0.0]


def test_projection_value_override():
    rows = project_monthly_streams(60, 1, np.ones(12), np.ones(12), option1_values=[10, 20])
    assert rows[1].option1_value == 20.0
    assert rows[1].option2_value == rows[1].option2_cumulative
