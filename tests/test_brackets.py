"""Unit tests for progressive bands and phase-outs."""

import math

import pytest

from fincalc.calculators.brackets import (
    Bracket,
    BracketSet,
    apply_phase_out,
    evaluate_brackets,
    phase_out_reduction,
)

BANDS = BracketSet.from_table([
    {"start": 0, "end": 11925, "rate": 0.10},
    {"start": 11925, "end": 48475, "rate": 0.12},
    {"start": 48475, "end": None, "rate": 0.22},
])


def test_breakdown_sums_to_total():
    result = evaluate_brackets(60000, BANDS)
    assert math.isclose(sum(s.tax for s in result.breakdown), result.total)
    assert math.isclose(sum(s.income for s in result.breakdown), 60000)
    assert [s.bracket for s in result.breakdown] == ["10%", "12%", "22%"]


def test_marginal_and_effective_rates():
    result = evaluate_brackets(30000, BANDS)
    assert result.marginal_rate == 0.12
    assert result.effective_rate <= result.marginal_rate
    assert math.isclose(result.total, 11925 * 0.10 + (30000 - 11925) * 0.12)


def test_zero_amount():
    result = evaluate_brackets(0, BANDS)
    assert result.total == 0
    assert result.marginal_rate == 0
    assert result.effective_rate == 0
    assert result.breakdown == ()


def test_amount_on_band_edge_skips_next_band():
    result = evaluate_brackets(11925, BANDS)
    assert len(result.breakdown) == 1
    assert result.marginal_rate == 0.10


@pytest.mark.parametrize(
    "bands",
    [
        (),
        (Bracket(100, None, 0.1),),
        (Bracket(0, 100, 0.1), Bracket(150, None, 0.2)),
        (Bracket(0, 100, 0.2), Bracket(100, None, 0.1)),
        (Bracket(0, 100, 0.1), Bracket(100, 200, 0.2)),
    ],
)
def test_invalid_bracket_sets(bands):
    """Gaps, falling rates and a bounded top band are rejected."""
    with pytest.raises(ValueError):
        BracketSet(bands)


def test_phase_out_counts_full_steps_only():
    assert phase_out_reduction(200999, 200000, 50, 1000) == 0
    assert phase_out_reduction(201000, 200000, 50, 1000) == 50
    assert phase_out_reduction(250000, 200000, 50, 1000) == 2500
    assert phase_out_reduction(150000, 200000, 50, 1000) == 0


def test_apply_phase_out_floors_at_zero():
    assert apply_phase_out(2200, 2500) == 0
    assert apply_phase_out(2200, 300) == 1900
    assert apply_phase_out(2200, -10) == 2200
