"""Student loan calculators.

Three modes share the amortization engine:

``simple``
    Give any three of balance, remaining term (years), rate and payment and
    the fourth is solved for.
``repayment``
    Compare paying the loan off on schedule with paying it off faster using
    extra monthly, extra annual and one-time payments.
``projection``
    For students still in school: borrow a fixed amount each year, optionally
    accruing interest, sit through a grace period and then repay.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..formatting import format_currency
from .amortization import (
    PaymentBreakdown,
    ScheduleSummary,
    generate_schedule,
    monthly_rate,
    project_staged_balance,
    solve_loan,
    summarize_schedule,
)
from .errors import CalculationError, PaymentTooLowError

logger = logging.getLogger(__name__)

MAX_YEARS_TO_GRADUATION = 10
MAX_GRACE_MONTHS = 12
MAX_TERM_YEARS = 50


@dataclass(frozen=True)
class SimpleInputs:
    """Leave exactly one of the four fields as ``None`` (or zero)."""

    loan_balance: Optional[float] = None
    remaining_term: Optional[float] = None  # years
    interest_rate: Optional[float] = None
    monthly_payment: Optional[float] = None


@dataclass(frozen=True)
class SimpleResult:
    loan_balance: float
    remaining_term: float
    interest_rate: float
    monthly_payment: float
    total_interest: float
    total_payments: float
    principal_percentage: float
    interest_percentage: float
    solved_for: str


@dataclass(frozen=True)
class RepaymentInputs:
    loan_balance: float
    monthly_payment: float
    interest_rate: float
    extra_monthly: float = 0.0
    extra_annual: float = 0.0
    one_time_payment: float = 0.0


@dataclass(frozen=True)
class RepaymentResult:
    original: ScheduleSummary
    accelerated: ScheduleSummary
    months_saved: int
    interest_saved: float
    original_schedule: Tuple[PaymentBreakdown, ...]
    accelerated_schedule: Tuple[PaymentBreakdown, ...]


@dataclass(frozen=True)
class ProjectionInputs:
    years_to_graduation: int
    annual_loan_amount: float
    current_balance: float
    loan_term: int  # years
    grace_period: int  # months
    interest_rate: float
    interest_during_school: bool


@dataclass(frozen=True)
class ProjectionResult:
    monthly_repayment: float
    amount_borrowed: float
    balance_after_graduation: float
    balance_after_grace_period: float
    total_interest: float
    total_payments: float
    principal_percentage: float
    interest_percentage: float


def _shares(principal: float, total_payments: float) -> Tuple[float, float]:
    if total_payments <= 0:
        return 0.0, 0.0
    return principal / total_payments * 100, (total_payments - principal) / total_payments * 100


# ---------------------------------------------------------------------------
# Simple mode
# ---------------------------------------------------------------------------


def validate_simple_inputs(inputs: SimpleInputs) -> List[str]:
    errors = []
    values = (inputs.loan_balance, inputs.remaining_term, inputs.interest_rate, inputs.monthly_payment)
    provided = sum(1 for v in values if v is not None and v > 0)
    if provided < 3:
        errors.append("Please provide at least 3 values")
    if provided > 3:
        errors.append("Please provide exactly 3 values (leave one blank)")
    if inputs.loan_balance is not None and inputs.loan_balance < 0:
        errors.append("Loan balance cannot be negative")
    if inputs.remaining_term is not None and inputs.remaining_term < 0:
        errors.append("Remaining term cannot be negative")
    if inputs.interest_rate is not None and not 0 <= inputs.interest_rate <= 100:
        errors.append("Interest rate must be between 0 and 100")
    if inputs.monthly_payment is not None and inputs.monthly_payment < 0:
        errors.append("Monthly payment cannot be negative")
    return errors


def calculate_simple(inputs: SimpleInputs) -> SimpleResult:
    """Solve for the missing loan value and report the lifetime totals.

    Raises
    ------
    InvalidInputCountError
        Unless exactly three values are supplied.
    PaymentTooLowError
        When solving for the term and the payment never covers the interest.
    """
    term_months = inputs.remaining_term * 12 if inputs.remaining_term else None
    solved = solve_loan(
        principal=inputs.loan_balance,
        term_months=term_months,
        annual_rate=inputs.interest_rate,
        payment=inputs.monthly_payment,
    )
    if math.isinf(solved.term_months):
        raise PaymentTooLowError("Monthly payment is too low to ever pay off the loan")

    total_payments = solved.monthly_payment * solved.term_months
    principal_share, interest_share = _shares(solved.principal, total_payments)
    return SimpleResult(
        loan_balance=solved.principal,
        remaining_term=solved.term_months / 12,
        interest_rate=solved.annual_rate,
        monthly_payment=solved.monthly_payment,
        total_interest=total_payments - solved.principal,
        total_payments=total_payments,
        principal_percentage=principal_share,
        interest_percentage=interest_share,
        solved_for=solved.solved_for,
    )


# ---------------------------------------------------------------------------
# Repayment mode
# ---------------------------------------------------------------------------


def minimum_payment(loan_balance: float, interest_rate: float) -> float:
    """First month's interest; any payment must exceed it."""
    return loan_balance * monthly_rate(interest_rate)


def validate_repayment_inputs(inputs: RepaymentInputs) -> List[str]:
    errors = []
    if inputs.loan_balance <= 0:
        errors.append("Loan balance must be greater than 0")
    if inputs.monthly_payment <= 0:
        errors.append("Monthly payment must be greater than 0")
    if not 0 <= inputs.interest_rate <= 100:
        errors.append("Interest rate must be between 0 and 100")
    floor = minimum_payment(inputs.loan_balance, inputs.interest_rate)
    if inputs.monthly_payment <= floor:
        errors.append(f"Monthly payment must be greater than {format_currency(floor)} to pay off the loan")
    if inputs.extra_monthly < 0:
        errors.append("Extra monthly payment cannot be negative")
    if inputs.extra_annual < 0:
        errors.append("Extra annual payment cannot be negative")
    if inputs.one_time_payment < 0:
        errors.append("One-time payment cannot be negative")
    return list(dict.fromkeys(errors))


def calculate_repayment(inputs: RepaymentInputs) -> RepaymentResult:
    """Compare the on-schedule payoff with an accelerated one.

    Both schedules come from :func:`generate_schedule`; the original one with
    every extra zeroed.  The accelerated totals include the one-time payment.
    """
    if inputs.loan_balance <= 0:
        raise CalculationError("Loan balance must be greater than 0")
    if inputs.interest_rate < 0:
        raise CalculationError("Interest rate cannot be negative")
    if inputs.monthly_payment <= minimum_payment(inputs.loan_balance, inputs.interest_rate):
        raise PaymentTooLowError("Monthly payment is too low to ever pay off the loan")
    for label, value in (
        ("Extra monthly payment", inputs.extra_monthly),
        ("Extra annual payment", inputs.extra_annual),
        ("One-time payment", inputs.one_time_payment),
    ):
        if value < 0:
            raise CalculationError(f"{label} cannot be negative")

    original_schedule = generate_schedule(inputs.loan_balance, inputs.monthly_payment, inputs.interest_rate)
    accelerated_schedule = generate_schedule(
        inputs.loan_balance,
        inputs.monthly_payment,
        inputs.interest_rate,
        extra_monthly=inputs.extra_monthly,
        extra_annual=inputs.extra_annual,
        one_time=inputs.one_time_payment,
    )
    original = summarize_schedule(original_schedule, inputs.monthly_payment)
    accelerated = summarize_schedule(
        accelerated_schedule,
        inputs.monthly_payment + inputs.extra_monthly,
        upfront=max(0.0, min(inputs.one_time_payment, inputs.loan_balance)),
    )
    logger.debug("Extra payments save %d months", original.total_months - accelerated.total_months)

    return RepaymentResult(
        original=original,
        accelerated=accelerated,
        months_saved=original.total_months - accelerated.total_months,
        interest_saved=original.total_interest - accelerated.total_interest,
        original_schedule=original_schedule,
        accelerated_schedule=accelerated_schedule,
    )


# ---------------------------------------------------------------------------
# Projection mode
# ---------------------------------------------------------------------------


def validate_projection_inputs(inputs: ProjectionInputs) -> List[str]:
    errors = []
    if not 0 <= inputs.years_to_graduation <= MAX_YEARS_TO_GRADUATION:
        errors.append(f"Years to graduation must be between 0 and {MAX_YEARS_TO_GRADUATION}")
    if inputs.annual_loan_amount < 0:
        errors.append("Annual loan amount cannot be negative")
    if inputs.current_balance < 0:
        errors.append("Current balance cannot be negative")
    if inputs.loan_term <= 0 or inputs.loan_term > MAX_TERM_YEARS:
        errors.append(f"Loan term must be between 1 and {MAX_TERM_YEARS} years")
    if not 0 <= inputs.grace_period <= MAX_GRACE_MONTHS:
        errors.append(f"Grace period must be between 0 and {MAX_GRACE_MONTHS} months")
    if not 0 <= inputs.interest_rate <= 100:
        errors.append("Interest rate must be between 0 and 100")
    return errors


def calculate_projection(inputs: ProjectionInputs) -> ProjectionResult:
    """Project a loan taken out through school to its repayment figures.

    The staged balance is checked as :class:`~.amortization.LoanTerms` before
    it is amortized, so a negative balance or rate or a non-positive term
    raises :class:`CalculationError`.
    """
    months = int(inputs.loan_term) * 12
    staged = project_staged_balance(
        starting_balance=inputs.current_balance,
        annual_rate=inputs.interest_rate,
        accumulation_years=int(inputs.years_to_graduation),
        annual_addition=inputs.annual_loan_amount,
        compound_during_accumulation=inputs.interest_during_school,
        grace_months=int(inputs.grace_period),
        repayment_months=months,
    )
    borrowed = inputs.current_balance + inputs.annual_loan_amount * inputs.years_to_graduation
    total_payments = staged.monthly_payment * months
    principal_share, interest_share = _shares(borrowed, total_payments)

    return ProjectionResult(
        monthly_repayment=staged.monthly_payment,
        amount_borrowed=borrowed,
        balance_after_graduation=staged.after_accumulation,
        balance_after_grace_period=staged.after_grace,
        total_interest=total_payments - borrowed,
        total_payments=total_payments,
        principal_percentage=principal_share,
        interest_percentage=interest_share,
    )


__all__ = [
    "SimpleInputs",
    "SimpleResult",
    "RepaymentInputs",
    "RepaymentResult",
    "ProjectionInputs",
    "ProjectionResult",
    "minimum_payment",
    "validate_simple_inputs",
    "validate_repayment_inputs",
    "validate_projection_inputs",
    "calculate_simple",
    "calculate_repayment",
    "calculate_projection",
]
