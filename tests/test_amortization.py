"""Unit tests for the amortization engine.

Payments are checked against the closed-form annuity formula and the
inverse solvers against each other.  Schedules must conserve principal and
land on a zero balance.
"""

import math

import pytest

from fincalc.calculators import amortization as am
from fincalc.calculators.errors import CalculationError, InvalidInputCountError, PaymentTooLowError


def test_monthly_payment_example():
    """$25k at 5.5% over ten years."""
    assert math.isclose(am.calculate_monthly_payment(25000, 5.5, 120), 271.32, abs_tol=0.01)


def test_monthly_payment_zero_rate():
    """A zero rate spreads the principal evenly."""
    assert math.isclose(am.calculate_monthly_payment(12000, 0, 24), 500.0)


def test_loan_term_never_amortizes():
    """$50 a month never covers the ~$114.58 monthly interest on $25k at 5.5%."""
    term = am.calculate_loan_term(25000, 50, 5.5)
    assert term.never_amortizes
    assert term.months is None


def test_loan_term_round_trip():
    """A cent above the level payment still takes the full original term."""
    payment = am.calculate_monthly_payment(25000, 5.5, 120)
    assert am.calculate_loan_term(25000, payment + 0.01, 5.5).months == 120


def test_principal_round_trip():
    payment = am.calculate_monthly_payment(18000, 6.0, 60)
    assert math.isclose(am.calculate_principal(payment, 6.0, 60), 18000, rel_tol=1e-9)


def test_interest_rate_solver():
    """Bisection recovers the rate to within a few hundredths of a percent."""
    payment = am.calculate_monthly_payment(25000, 5.5, 120)
    assert math.isclose(am.calculate_interest_rate(25000, payment, 120), 5.5, abs_tol=0.05)


def test_solve_loan_requires_three_values():
    with pytest.raises(InvalidInputCountError, match="exactly 3"):
        am.solve_loan(principal=25000, annual_rate=5.5)
    with pytest.raises(InvalidInputCountError):
        am.solve_loan(principal=25000, term_months=120, annual_rate=5.5, payment=300)


def test_solve_loan_reports_infinite_term():
    solved = am.solve_loan(principal=25000, annual_rate=5.5, payment=50)
    assert solved.solved_for == "term"
    assert math.isinf(solved.term_months)


def test_solve_loan_fills_payment():
    solved = am.solve_loan(principal=25000, term_months=120, annual_rate=5.5)
    assert solved.solved_for == "payment"
    assert math.isclose(solved.monthly_payment, 271.32, abs_tol=0.01)


def test_schedule_conserves_principal():
    """Principal portions sum to the loan and the last row closes it out."""
    payment = am.calculate_monthly_payment(25000, 5.5, 120)
    schedule = am.generate_schedule(25000, payment, 5.5)
    assert len(schedule) == 120
    assert math.isclose(sum(row.principal for row in schedule), 25000, abs_tol=0.01)
    assert schedule[-1].balance < am.BALANCE_EPSILON
    for row in schedule:
        assert math.isclose(row.payment, row.principal + row.interest, rel_tol=1e-12)


def test_schedule_zero_rate_has_no_interest():
    schedule = am.generate_schedule(1200, 100, 0)
    assert len(schedule) == 12
    assert all(row.interest == 0 for row in schedule)


def test_extra_payments_shorten_the_loan():
    """Each kind of extra payment reduces months and interest."""
    payment = am.calculate_monthly_payment(25000, 5.5, 120)
    base = am.summarize_schedule(am.generate_schedule(25000, payment, 5.5), payment)
    for extras in ({"extra_monthly": 100}, {"extra_annual": 1000}, {"one_time": 5000}):
        faster = am.summarize_schedule(am.generate_schedule(25000, payment, 5.5, **extras), payment)
        assert faster.total_months < base.total_months
        assert faster.total_interest < base.total_interest


def test_one_time_payment_covering_balance_leaves_empty_schedule():
    assert am.generate_schedule(5000, 100, 5.0, one_time=6000) == ()


def test_schedule_is_capped():
    """A payment barely above the interest stops at the period cap."""
    schedule = am.generate_schedule(100000, 500.01, 6.0)
    assert len(schedule) == am.MAX_SCHEDULE_PERIODS
    assert schedule[-1].balance > 0


def test_staged_balance_without_in_school_interest():
    """Additions accumulate without interest, then the grace period compounds."""
    staged = am.project_staged_balance(0, 6.0, 4, 10000, False, 0, 120)
    assert staged.after_accumulation == 40000
    assert staged.after_grace == 40000
    assert math.isclose(staged.monthly_payment, am.calculate_monthly_payment(40000, 6.0, 120))


def test_loan_terms_check():
    am.LoanTerms(0, 5.0, 120).check()
    with pytest.raises(CalculationError, match="principal cannot be negative"):
        am.LoanTerms(-1, 5.0, 120).check()
    with pytest.raises(CalculationError, match="Interest rate"):
        am.LoanTerms(1000, -0.5, 120).check()
    with pytest.raises(CalculationError, match="Loan term"):
        am.LoanTerms(1000, 5.0, 0).check()
    assert math.isclose(am.LoanTerms(25000, 5.5, 120).monthly_payment, 271.32, abs_tol=0.01)


def test_negligible_rate_spreads_principal_evenly():
    """(1 + i) ** n rounds to 1.0 here, so the zero-rate branch applies."""
    assert am.calculate_monthly_payment(10000, 1e-13, 60) == pytest.approx(10000 / 60)
    assert am.calculate_principal(100, 1e-13, 60) == pytest.approx(6000)
    assert am.calculate_loan_term(6000, 100, 1e-13).months == 60


def test_solve_rate_for_interest_free_loan():
    """Payments that exactly repay the balance imply a rate near zero."""
    solved = am.solve_loan(principal=6000, term_months=60, payment=100)
    assert solved.solved_for == "rate"
    assert solved.annual_rate == pytest.approx(0, abs=0.05)


def test_solve_rate_rejects_payments_short_of_principal():
    with pytest.raises(PaymentTooLowError, match="any interest rate"):
        am.solve_loan(principal=10000, term_months=60, payment=100)


@pytest.mark.parametrize(
    "values, label",
    [
        ({"principal": -25000, "term_months": 120, "payment": 300}, "Loan balance"),
        ({"principal": 25000, "term_months": -120, "annual_rate": 5.5}, "Loan term"),
        ({"principal": 25000, "term_months": 120, "annual_rate": -5, "payment": 300}, "Interest rate"),
        ({"principal": 25000, "annual_rate": 5.5, "payment": -300}, "Monthly payment"),
    ],
)
def test_solve_loan_rejects_negative_values(values, label):
    with pytest.raises(CalculationError, match=f"{label} cannot be negative"):
        am.solve_loan(**values)


def test_underpaid_schedule_warns_and_grows(caplog):
    """$10 a month against $50 of monthly interest."""
    with caplog.at_level("WARNING", logger="fincalc.calculators.amortization"):
        schedule = am.generate_schedule(10000, 10, 6.0)
    assert len(schedule) == am.MAX_SCHEDULE_PERIODS
    assert schedule[0].principal < 0
    assert schedule[-1].balance > 10000
    assert "does not cover interest" in caplog.text


def test_staged_balance_compounds_in_school():
    """Each year's loan joins at the start of the year and compounds monthly."""
    staged = am.project_staged_balance(5000, 5.5, 3, 10000, True, 6, 120)
    expected = 5000.0
    for _year in range(3):
        expected = (expected + 10000) * (1 + 0.055 / 12) ** 12
    assert staged.after_accumulation == pytest.approx(expected)
    assert staged.after_grace == pytest.approx(expected * (1 + 0.055 / 12) ** 6)


def test_staged_balance_zero_length_stages_leave_balance_unchanged():
    for compound in (True, False):
        staged = am.project_staged_balance(12345.67, 6.0, 0, 10000, compound, 0, 60)
        assert staged.after_accumulation == 12345.67
        assert staged.after_grace == 12345.67
        assert staged.monthly_payment == pytest.approx(am.calculate_monthly_payment(12345.67, 6.0, 60))
