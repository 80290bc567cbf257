"""Traditional vs Roth IRA projection.

Both account types grow identically; they differ in when tax is paid.  A
traditional IRA defers the deduction's tax to retirement, so its balance is
reduced by the retirement tax rate.  A Roth is funded with after-tax money and
withdrawn tax free.

Growth uses the annual ordinary-annuity formula::

    FV = PV * (1 + r)^n + PMT * ((1 + r)^n - 1) / r

Example
-------

>>> round(future_value(10000, 6000, 7, 35), 2)
936187.08
>>> contribution_limit_schedule(49, 52)
{49: 7000.0, 50: 8000.0, 51: 8000.0}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .comparison import compare_options
from .errors import CalculationError

logger = logging.getLogger(__name__)

BASE_CONTRIBUTION_LIMIT = 7000.0
CATCH_UP_CONTRIBUTION = 1000.0
CATCH_UP_AGE = 50
CONTRIBUTION_WARNING_FACTOR = 1.5
MAX_AGE = 100

TRADITIONAL = "traditional"
ROTH = "roth"


@dataclass(frozen=True)
class IraInputs:
    current_balance: float
    annual_contribution: float
    expected_return: float
    current_age: int
    retirement_age: int
    current_tax_rate: float
    retirement_tax_rate: float
    inflation_rate: Optional[float] = None


@dataclass(frozen=True)
class IraScheduleRow:
    age: int
    year: int
    contribution: float
    balance: float
    earnings: float


@dataclass(frozen=True)
class IraResult:
    traditional_balance: float
    traditional_balance_after_tax: float
    traditional_total_contributions: float
    traditional_total_earnings: float
    traditional_tax_savings_now: float
    traditional_taxes_at_retirement: float
    roth_balance: float
    roth_total_contributions: float
    roth_total_earnings: float
    roth_effective_contributions: float
    years_to_retirement: int
    total_contributions: float
    real_traditional_balance: Optional[float]
    real_roth_balance: Optional[float]
    schedule: Tuple[IraScheduleRow, ...]


@dataclass(frozen=True)
class IraComparison:
    better_option: str
    difference: float
    reason: str


def contribution_limit(age: int, base_limit: float = BASE_CONTRIBUTION_LIMIT) -> float:
    """Annual limit at ``age``, including the catch-up from 50."""
    return base_limit + (CATCH_UP_CONTRIBUTION if age >= CATCH_UP_AGE else 0.0)


def contribution_limit_schedule(
    start_age: int, retire_age: int, base_limit: float = BASE_CONTRIBUTION_LIMIT, inflation: float = 0.0
) -> Dict[int, float]:
    """Return the contribution limit for each age from ``start_age`` up to ``retire_age``.

    With a non-zero ``inflation`` the base limit is indexed each year and
    rounded to the nearest $500, the way the IRS adjusts it.
    """
    schedule: Dict[int, float] = {}
    for offset, age in enumerate(range(start_age, retire_age)):
        indexed = round(base_limit * (1 + inflation) ** offset / 500.0) * 500.0
        schedule[age] = contribution_limit(age, indexed)
    return schedule


def future_value(present_value: float, annual_contribution: float, rate: float, years: int) -> float:
    """Balance after ``years`` of growth at ``rate`` percent with year-end contributions."""
    if years == 0:
        return present_value
    if rate == 0:
        return present_value + annual_contribution * years
    r = rate / 100.0
    growth = (1 + r) ** years
    return present_value * growth + annual_contribution * (growth - 1) / r


def validate_ira_inputs(inputs: IraInputs) -> List[str]:
    errors = []
    if inputs.current_balance < 0:
        errors.append("Current balance cannot be negative")
    if inputs.annual_contribution < 0:
        errors.append("Annual contribution cannot be negative")
    limit = contribution_limit(inputs.current_age)
    if inputs.annual_contribution > limit * CONTRIBUTION_WARNING_FACTOR:
        errors.append(f"Annual contribution seems too high (current limit: ${limit:,.0f})")
    if not -50 <= inputs.expected_return <= 50:
        errors.append("Expected return must be between -50% and 50%")
    if not 18 <= inputs.current_age <= MAX_AGE:
        errors.append(f"Current age must be between 18 and {MAX_AGE}")
    if inputs.retirement_age < inputs.current_age:
        errors.append("Retirement age must be greater than current age")
    if inputs.retirement_age > MAX_AGE:
        errors.append(f"Retirement age cannot exceed {MAX_AGE}")
    if not 0 <= inputs.current_tax_rate < 100:
        errors.append("Current tax rate must be at least 0% and below 100%")
    if not 0 <= inputs.retirement_tax_rate <= 100:
        errors.append("Retirement tax rate must be between 0% and 100%")
    return errors


def annual_schedule(inputs: IraInputs) -> Tuple[IraScheduleRow, ...]:
    """Year-by-year balance from the current age to retirement.

    The first row already includes that year's contribution.  Each later year
    grows the balance and then adds a contribution, except the retirement year.
    """
    years = inputs.retirement_age - inputs.current_age
    r = inputs.expected_return / 100.0
    balance = inputs.current_balance + inputs.annual_contribution
    rows = [IraScheduleRow(inputs.current_age, 0, inputs.annual_contribution, balance, 0.0)]
    for year in range(1, years + 1):
        earnings = balance * r
        balance += earnings
        contribution = inputs.annual_contribution if year < years else 0.0
        balance += contribution
        rows.append(IraScheduleRow(inputs.current_age + year, year, contribution, balance, earnings))
    return tuple(rows)


def calculate_ira(inputs: IraInputs) -> IraResult:
    if inputs.current_balance < 0 or inputs.annual_contribution < 0:
        raise CalculationError("Balances and contributions cannot be negative")
    if inputs.retirement_age < inputs.current_age:
        raise CalculationError("Retirement age must be greater than current age")
    if not 0 <= inputs.current_tax_rate < 100:
        raise CalculationError("Current tax rate must be at least 0% and below 100%")

    years = inputs.retirement_age - inputs.current_age
    contributions = inputs.annual_contribution * years
    balance = future_value(inputs.current_balance, inputs.annual_contribution, inputs.expected_return, years)
    invested = inputs.current_balance + contributions
    taxes_at_retirement = balance * inputs.retirement_tax_rate / 100

    real_balance = None
    if inputs.inflation_rate:
        real_balance = balance / (1 + inputs.inflation_rate / 100) ** years

    logger.debug("IRA grows to %.2f over %d years", balance, years)
    return IraResult(
        traditional_balance=balance,
        traditional_balance_after_tax=balance - taxes_at_retirement,
        traditional_total_contributions=invested,
        traditional_total_earnings=balance - invested,
        traditional_tax_savings_now=contributions * inputs.current_tax_rate / 100,
        traditional_taxes_at_retirement=taxes_at_retirement,
        roth_balance=balance,
        roth_total_contributions=invested,
        roth_total_earnings=balance - invested,
        roth_effective_contributions=invested / (1 - inputs.current_tax_rate / 100),
        years_to_retirement=years,
        total_contributions=contributions,
        real_traditional_balance=None if real_balance is None else real_balance * (1 - inputs.retirement_tax_rate / 100),
        real_roth_balance=real_balance,
        schedule=annual_schedule(inputs),
    )


def compare_ira_types(result: IraResult) -> IraComparison:
    """Pick the account with the larger after-tax balance; ties favour the Roth."""
    outcome = compare_options(ROTH, result.roth_balance, TRADITIONAL, result.traditional_balance_after_tax)
    if outcome.better_option == TRADITIONAL:
        reason = "Lower tax rate in retirement makes Traditional IRA more beneficial"
    else:
        reason = "Tax-free growth and withdrawals make Roth IRA more beneficial"
    return IraComparison(better_option=outcome.better_option, difference=outcome.difference_dollars, reason=reason)


def break_even_tax_rate(inputs: IraInputs) -> float:
    # equal growth means the accounts tie when the two tax rates match
    return inputs.current_tax_rate


def project_beyond_retirement(retirement_balance: float, additional_years: int, growth_rate: float) -> float:
    return future_value(retirement_balance, 0.0, growth_rate, additional_years)


def required_monthly_savings(target_amount: float, current_balance: float, years: int, expected_return: float) -> float:
    """Monthly deposit needed to grow ``current_balance`` to ``target_amount``."""
    if years == 0:
        return 0.0
    months = years * 12
    if expected_return == 0:
        return max(0.0, (target_amount - current_balance) / months)
    r = expected_return / 100 / 12
    remaining = target_amount - current_balance * (1 + r) ** months
    if remaining <= 0:
        return 0.0
    return remaining * r / ((1 + r) ** months - 1)


__all__ = [
    "IraInputs",
    "IraResult",
    "IraScheduleRow",
    "IraComparison",
    "contribution_limit",
    "contribution_limit_schedule",
    "future_value",
    "validate_ira_inputs",
    "annual_schedule",
    "calculate_ira",
    "compare_ira_types",
    "break_even_tax_rate",
    "project_beyond_retirement",
    "required_monthly_savings",
]
