"""Amortization engine shared by the loan calculators.

This module implements the ordinary-annuity loan arithmetic: the level monthly
payment for a loan, and its three inverses (term, principal and rate).  It also
generates month-by-month schedules with optional extra payments and projects a
balance through the deferment stages of a school loan.

The payment formula is::

    payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

where ``P`` is the principal, ``i`` the monthly rate (annual percent / 100 /
12) and ``n`` the number of payments.  A zero rate degrades to ``P / n``.

Example
-------

>>> round(calculate_monthly_payment(25000, 5.5, 120), 2)
271.32

>>> calculate_loan_term(25000, 50, 5.5).never_amortizes
True
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import CalculationError, InvalidInputCountError, PaymentTooLowError

logger = logging.getLogger(__name__)

MAX_SCHEDULE_PERIODS = 600  # 50 years of monthly payments
BALANCE_EPSILON = 0.01
RATE_SEARCH_BOUNDS = (0.0, 50.0)
RATE_SEARCH_ITERATIONS = 100
RATE_SEARCH_TOLERANCE = 0.01  # dollars of monthly payment
NEGLIGIBLE_MONTHLY_RATE = 1e-12  # (1 + i) ** n rounds to 1.0 below this


@dataclass(frozen=True)
class LoanTerms:
    """Principal, annual rate in percent and term in months of a loan."""

    principal: float
    annual_rate: float
    term_months: int

    def check(self) -> None:
        """Raise :class:`CalculationError` unless the terms can be amortized."""
        if self.principal < 0:
            raise CalculationError("Loan principal cannot be negative")
        if self.annual_rate < 0:
            raise CalculationError("Interest rate cannot be negative")
        if self.term_months <= 0:
            raise CalculationError("Loan term must be greater than 0")

    @property
    def monthly_payment(self) -> float:
        return calculate_monthly_payment(self.principal, self.annual_rate, self.term_months)


@dataclass(frozen=True)
class PaymentBreakdown:
    """One period of an amortization schedule."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class PayoffTerm:
    """Result of solving for the number of payments.

    ``months`` is ``None`` when the payment never covers the interest, so the
    loan never amortizes.
    """

    months: Optional[int]

    @property
    def never_amortizes(self) -> bool:
        return self.months is None


@dataclass(frozen=True)
class ScheduleSummary:
    monthly_payment: float
    total_months: int
    total_payments: float
    total_interest: float


@dataclass(frozen=True)
class SolvedLoan:
    """All four loan variables after solving for the missing one."""

    principal: float
    term_months: float
    annual_rate: float
    monthly_payment: float
    solved_for: str


@dataclass(frozen=True)
class StagedBalance:
    """Balances at the end of each stage of a deferred-repayment projection."""

    after_accumulation: float
    after_grace: float
    monthly_payment: float
    repayment_months: int


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage rate into a monthly decimal rate."""
    return annual_rate / 100.0 / 12.0


def calculate_monthly_payment(principal: float, annual_rate: float, months: int) -> float:
    """Return the level monthly payment that amortizes ``principal``."""
    if months <= 0:
        raise CalculationError("Loan term must be greater than 0")
    i = monthly_rate(annual_rate)
    if i < NEGLIGIBLE_MONTHLY_RATE:
        return principal / months
    factor = (1 + i) ** months
    return principal * (i * factor) / (factor - 1)


def calculate_loan_term(principal: float, payment: float, annual_rate: float) -> PayoffTerm:
    """Return the whole number of months needed to repay ``principal``.

    When the payment does not exceed the first month's interest the loan never
    amortizes and the returned :class:`PayoffTerm` says so instead of carrying
    a logarithm of a non-positive number.
    """
    if payment <= 0:
        return PayoffTerm(months=None)
    i = monthly_rate(annual_rate)
    if i < NEGLIGIBLE_MONTHLY_RATE:
        return PayoffTerm(months=math.ceil(principal / payment))
    if payment <= principal * i:
        logger.debug("Payment %.2f never covers interest on %.2f", payment, principal)
        return PayoffTerm(months=None)
    months = -math.log(1 - (i * principal) / payment) / math.log(1 + i)
    return PayoffTerm(months=math.ceil(months))


def calculate_principal(payment: float, annual_rate: float, months: int) -> float:
    """Return the principal a level ``payment`` amortizes over ``months``."""
    i = monthly_rate(annual_rate)
    if i < NEGLIGIBLE_MONTHLY_RATE:
        return payment * months
    factor = (1 + i) ** months
    return payment * (factor - 1) / (i * factor)


def calculate_interest_rate(principal: float, payment: float, months: int) -> float:
    """Solve for the annual rate (percent) by bisection over 0-50%.

    The implied payment rises monotonically with the rate, so a midpoint whose
    payment overshoots the target moves the upper bound down.  The search stops
    once the implied payment is within a cent of ``payment`` or after
    ``RATE_SEARCH_ITERATIONS`` halvings, returning the last midpoint.
    """
    low, high = RATE_SEARCH_BOUNDS
    rate = (low + high) / 2
    for iteration in range(RATE_SEARCH_ITERATIONS):
        rate = (low + high) / 2
        implied = calculate_monthly_payment(principal, rate, months)
        if abs(implied - payment) < RATE_SEARCH_TOLERANCE:
            logger.debug("Rate search converged to %.6f%% after %d iterations", rate, iteration + 1)
            return rate
        if implied > payment:
            high = rate
        else:
            low = rate
    logger.warning(
        "Rate search did not land within a cent for principal=%.2f payment=%.2f months=%d",
        principal, payment, months,
    )
    return rate


def _supplied(value: Optional[float]) -> bool:
    return value is not None and value > 0


def solve_loan(
    principal: Optional[float] = None,
    term_months: Optional[float] = None,
    annual_rate: Optional[float] = None,
    payment: Optional[float] = None,
) -> SolvedLoan:
    """Compute whichever of the four loan variables is missing.

    Exactly three values must be supplied; ``None`` and zero both count as
    missing, while a negative value is rejected.  A solved term that never
    amortizes is reported with ``term_months == math.inf``.  Solving for the
    rate raises :class:`PaymentTooLowError` when the payments do not even sum
    to the principal, since only a negative rate would fit.
    """
    labelled = (
        ("Loan balance", principal),
        ("Loan term", term_months),
        ("Interest rate", annual_rate),
        ("Monthly payment", payment),
    )
    for label, value in labelled:
        if value is not None and value < 0:
            raise CalculationError(f"{label} cannot be negative")

    supplied = [_supplied(v) for _label, v in labelled]
    if sum(supplied) != 3:
        raise InvalidInputCountError("Please provide exactly 3 values to calculate the 4th")

    if not _supplied(payment):
        months = int(round(term_months))
        payment = calculate_monthly_payment(principal, annual_rate, months)
        solved = "payment"
    elif not _supplied(term_months):
        term = calculate_loan_term(principal, payment, annual_rate)
        term_months = math.inf if term.never_amortizes else term.months
        solved = "term"
    elif not _supplied(principal):
        principal = calculate_principal(payment, annual_rate, int(round(term_months)))
        solved = "principal"
    else:
        months = int(round(term_months))
        if payment * months < principal:
            raise PaymentTooLowError("Monthly payments do not add up to the loan balance at any interest rate")
        annual_rate = calculate_interest_rate(principal, payment, months)
        solved = "rate"

    return SolvedLoan(
        principal=principal,
        term_months=term_months,
        annual_rate=annual_rate or 0.0,
        monthly_payment=payment,
        solved_for=solved,
    )


def generate_schedule(
    principal: float,
    payment: float,
    annual_rate: float,
    extra_monthly: float = 0.0,
    extra_annual: float = 0.0,
    one_time: float = 0.0,
) -> Tuple[PaymentBreakdown, ...]:
    """Build the month-by-month schedule for a loan with optional extras.

    ``one_time`` reduces the balance before the first period.  ``extra_annual``
    is added on every twelfth period.  The principal portion never exceeds the
    outstanding balance, so the final row lands on zero.  The loop stops once
    the balance is within a cent of zero or after ``MAX_SCHEDULE_PERIODS``.

    A payment at or below the period's interest gives a negative principal
    portion and the balance grows; the first such period is logged as a
    warning and the schedule then runs to the cap.
    """
    i = monthly_rate(annual_rate)
    balance = principal - max(0.0, min(one_time, principal))
    rows: List[PaymentBreakdown] = []
    period = 1
    warned = False

    while balance > BALANCE_EPSILON and period <= MAX_SCHEDULE_PERIODS:
        interest = balance * i
        total = payment + extra_monthly
        if period % 12 == 0 and extra_annual > 0:
            total += extra_annual
        principal_part = min(total - interest, balance)
        if principal_part < 0 and not warned:
            logger.warning(
                "Payment %.2f does not cover interest %.2f in period %d; balance is growing",
                total, interest, period,
            )
            warned = True
        balance -= principal_part
        rows.append(
            PaymentBreakdown(
                period=period,
                payment=principal_part + interest,
                principal=principal_part,
                interest=interest,
                balance=max(0.0, balance),
            )
        )
        period += 1

    if balance > BALANCE_EPSILON:
        logger.warning(
            "Schedule stopped at %d periods with %.2f outstanding", MAX_SCHEDULE_PERIODS, balance
        )
    logger.debug("Generated %d-period schedule for principal %.2f", len(rows), principal)
    return tuple(rows)


def summarize_schedule(
    schedule: Sequence[PaymentBreakdown], monthly_payment: float, upfront: float = 0.0
) -> ScheduleSummary:
    """Aggregate a schedule; ``upfront`` is any one-time payment made before it."""
    return ScheduleSummary(
        monthly_payment=monthly_payment,
        total_months=len(schedule),
        total_payments=sum(row.payment for row in schedule) + upfront,
        total_interest=sum(row.interest for row in schedule),
    )


def project_staged_balance(
    starting_balance: float,
    annual_rate: float,
    accumulation_years: int,
    annual_addition: float,
    compound_during_accumulation: bool,
    grace_months: int,
    repayment_months: int,
) -> StagedBalance:
    """Carry a balance through accumulation, grace and repayment stages.

    During accumulation ``annual_addition`` joins the balance at the start of
    each year and, when ``compound_during_accumulation`` is set, the balance
    compounds monthly through that year.  The grace stage compounds monthly
    with no additions.  The ending balance is amortized over
    ``repayment_months``.  A zero-length stage leaves the balance unchanged.
    """
    i = monthly_rate(annual_rate)
    balance = starting_balance

    if compound_during_accumulation:
        for _year in range(accumulation_years):
            balance += annual_addition
            balance *= (1 + i) ** 12
    else:
        balance += annual_addition * accumulation_years
    after_accumulation = balance

    balance *= (1 + i) ** grace_months
    after_grace = balance

    terms = LoanTerms(after_grace, annual_rate, repayment_months)
    terms.check()
    return StagedBalance(
        after_accumulation=after_accumulation,
        after_grace=after_grace,
        monthly_payment=terms.monthly_payment,
        repayment_months=repayment_months,
    )


__all__ = [
    "LoanTerms",
    "PaymentBreakdown",
    "PayoffTerm",
    "ScheduleSummary",
    "SolvedLoan",
    "StagedBalance",
    "MAX_SCHEDULE_PERIODS",
    "monthly_rate",
    "calculate_monthly_payment",
    "calculate_loan_term",
    "calculate_principal",
    "calculate_interest_rate",
    "solve_loan",
    "generate_schedule",
    "summarize_schedule",
    "project_staged_balance",
]
