"""Unit tests for the student loan calculator's three modes."""

import math

import pytest

from fincalc.calculators import student_loan as sl
from fincalc.calculators.amortization import calculate_monthly_payment
from fincalc.calculators.errors import CalculationError, InvalidInputCountError, PaymentTooLowError


def test_simple_solves_payment():
    result = sl.calculate_simple(sl.SimpleInputs(loan_balance=25000, remaining_term=10, interest_rate=5.5))
    assert result.solved_for == "payment"
    assert result.monthly_payment == pytest.approx(271.32, abs=0.01)
    assert result.total_payments == pytest.approx(result.monthly_payment * 120)
    assert math.isclose(result.principal_percentage + result.interest_percentage, 100.0)


def test_simple_solves_term():
    result = sl.calculate_simple(sl.SimpleInputs(loan_balance=25000, interest_rate=5.5, monthly_payment=300))
    assert result.solved_for == "term"
    # 106 months at $300 clears $25k at 5.5%
    assert result.remaining_term == pytest.approx(106 / 12)


def test_simple_payment_too_low():
    with pytest.raises(PaymentTooLowError):
        sl.calculate_simple(sl.SimpleInputs(loan_balance=25000, interest_rate=5.5, monthly_payment=50))


def test_simple_needs_three_values():
    with pytest.raises(InvalidInputCountError):
        sl.calculate_simple(sl.SimpleInputs(loan_balance=25000, interest_rate=5.5))
    assert sl.validate_simple_inputs(sl.SimpleInputs(25000, 10, 5.5, 300)) == [
        "Please provide exactly 3 values (leave one blank)"
    ]
    assert "Please provide at least 3 values" in sl.validate_simple_inputs(sl.SimpleInputs(25000))


def test_repayment_savings():
    """Extra payments cut both the term and the interest."""
    result = sl.calculate_repayment(sl.RepaymentInputs(loan_balance=25000, monthly_payment=300, interest_rate=5.5, extra_monthly=100))
    assert result.months_saved > 0
    assert result.interest_saved > 0
    assert result.accelerated.monthly_payment == 400
    assert result.original.total_months == len(result.original_schedule)


def test_repayment_one_time_payment_counts_toward_totals():
    inputs = sl.RepaymentInputs(loan_balance=25000, monthly_payment=300, interest_rate=5.5, one_time_payment=30000)
    result = sl.calculate_repayment(inputs)
    assert result.accelerated_schedule == ()
    assert result.accelerated.total_payments == 25000
    assert result.accelerated.total_interest == 0


def test_repayment_payment_below_interest():
    inputs = sl.RepaymentInputs(loan_balance=25000, monthly_payment=100, interest_rate=5.5)
    with pytest.raises(PaymentTooLowError):
        sl.calculate_repayment(inputs)
    assert "Monthly payment must be greater than $114.58 to pay off the loan" in sl.validate_repayment_inputs(inputs)


def test_projection_without_in_school_interest():
    inputs = sl.ProjectionInputs(
        years_to_graduation=3,
        annual_loan_amount=10000,
        current_balance=5000,
        loan_term=10,
        grace_period=6,
        interest_rate=5.5,
        interest_during_school=False,
    )
    result = sl.calculate_projection(inputs)
    assert result.amount_borrowed == 35000
    assert result.balance_after_graduation == 35000
    assert result.balance_after_grace_period == pytest.approx(35000 * (1 + 0.055 / 12) ** 6)
    assert result.monthly_repayment == pytest.approx(calculate_monthly_payment(result.balance_after_grace_period, 5.5, 120))
    assert result.total_interest == pytest.approx(result.total_payments - 35000)


def test_projection_in_school_interest_grows_balance():
    inputs = sl.ProjectionInputs(3, 10000, 5000, 10, 6, 5.5, True)
    result = sl.calculate_projection(inputs)
    assert result.amount_borrowed == 35000
    expected = 5000.0
    for _year in range(3):
        expected = (expected + 10000) * (1 + 0.055 / 12) ** 12
    assert result.balance_after_graduation == pytest.approx(expected)
    assert result.balance_after_grace_period == pytest.approx(expected * (1 + 0.055 / 12) ** 6)


def test_projection_validation():
    errors = sl.validate_projection_inputs(sl.ProjectionInputs(20, 10000, 0, 0, 24, 5.5, True))
    assert len(errors) == 3


def test_simple_rate_unreachable_when_payments_fall_short():
    """60 payments of $100 cannot repay $10k at any non-negative rate."""
    inputs = sl.SimpleInputs(loan_balance=10000, remaining_term=5, monthly_payment=100)
    assert sl.validate_simple_inputs(inputs) == []
    with pytest.raises(PaymentTooLowError):
        sl.calculate_simple(inputs)


@pytest.mark.parametrize(
    "inputs, message",
    [
        (sl.SimpleInputs(25000, 10, -5, 300), "Interest rate cannot be negative"),
        (sl.SimpleInputs(-25000, 10, 5.5, 300), "Loan balance cannot be negative"),
        (sl.SimpleInputs(25000, -10, 5.5), "Loan term cannot be negative"),
    ],
)
def test_simple_rejects_negative_values(inputs, message):
    assert sl.validate_simple_inputs(inputs)
    with pytest.raises(CalculationError, match=message):
        sl.calculate_simple(inputs)


@pytest.mark.parametrize(
    "extras, message",
    [
        ({"extra_monthly": -250}, "Extra monthly payment cannot be negative"),
        ({"extra_annual": -1000}, "Extra annual payment cannot be negative"),
        ({"one_time_payment": -5000}, "One-time payment cannot be negative"),
    ],
)
def test_repayment_rejects_negative_extras(extras, message):
    inputs = sl.RepaymentInputs(loan_balance=25000, monthly_payment=300, interest_rate=5.5, **extras)
    assert message in sl.validate_repayment_inputs(inputs)
    with pytest.raises(CalculationError, match=message):
        sl.calculate_repayment(inputs)


def test_projection_rejects_negative_balance():
    with pytest.raises(CalculationError, match="cannot be negative"):
        sl.calculate_projection(sl.ProjectionInputs(0, 0, -5000, 10, 0, 5.5, False))
