"""Compound growth of a starting amount plus regular contributions.

Contributions and compounding run on independent schedules.  Each
contribution is grown individually for the compound periods left after it is
made; for contributions at the end of a period that excludes the period the
contribution closes.  Continuous compounding uses the closed forms::

    FV = P * e^(r t) + PMT * (e^(r t) - 1) / (e^(r / m) - 1)

with the contribution term multiplied by ``e^(r / m)`` for contributions at
the beginning of each period.

Example
-------

>>> result = calculate_investment(InvestmentInputs(
...     starting_amount=20000, additional_contribution=1000, length_years=10, return_rate=8))
>>> round(result.end_balance)
227339
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

import numpy as np

from .errors import CalculationError

logger = logging.getLogger(__name__)

PERIODS_PER_YEAR: Dict[str, int] = {
    "daily": 365,
    "weekly": 52,
    "biweekly": 26,
    "semimonthly": 24,
    "monthly": 12,
    "quarterly": 4,
    "semiannually": 2,
    "annually": 1,
}
CONTINUOUSLY = "continuously"
COMPOUND_FREQUENCIES = tuple(PERIODS_PER_YEAR) + (CONTINUOUSLY,)
# the yearly table approximates continuous compounding with daily periods
CONTINUOUS_TABLE_FREQUENCY = "daily"

BEGINNING = "beginning"
END = "end"

FREQUENCY_LABELS = {
    "daily": "Daily",
    "weekly": "Weekly",
    "biweekly": "Bi-weekly",
    "semimonthly": "Semi-monthly",
    "monthly": "Monthly",
    "quarterly": "Quarterly",
    "semiannually": "Semi-annually",
    "annually": "Annually",
    CONTINUOUSLY: "Continuously",
}


@dataclass(frozen=True)
class InvestmentInputs:
    starting_amount: float
    additional_contribution: float
    length_years: int
    return_rate: float  # annual percent
    contribution_frequency: str = "monthly"
    compound_frequency: str = "monthly"
    contribution_timing: str = END


@dataclass(frozen=True)
class YearlyBreakdown:
    year: int
    starting_balance: float
    contributions: float
    interest_earned: float
    ending_balance: float
    cumulative_contributions: float
    cumulative_interest: float


@dataclass(frozen=True)
class InvestmentResult:
    end_balance: float
    total_contributions: float
    total_interest: float
    year_by_year: Tuple[YearlyBreakdown, ...]


def _cents(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def validate_investment(inputs: InvestmentInputs) -> List[str]:
    errors = []
    if inputs.starting_amount < 0:
        errors.append("Starting amount cannot be negative")
    if inputs.additional_contribution < 0:
        errors.append("Additional contribution cannot be negative")
    if inputs.length_years <= 0:
        errors.append("Investment length must be greater than 0")
    if inputs.contribution_frequency not in PERIODS_PER_YEAR:
        errors.append(f"Unknown contribution frequency: {inputs.contribution_frequency}")
    if inputs.compound_frequency not in COMPOUND_FREQUENCIES:
        errors.append(f"Unknown compound frequency: {inputs.compound_frequency}")
    if inputs.contribution_timing not in (BEGINNING, END):
        errors.append("Contribution timing must be 'beginning' or 'end'")
    return errors


def contributions_future_value(
    contribution: float, count: int, per_year: int, compounds_per_year: int, rate: float, timing: str
) -> float:
    """Sum of each contribution grown to the end of the horizon.

    ``rate`` is the annual decimal rate.  Contribution ``i`` (zero based) grows
    for ``count - i`` contribution periods when made at the beginning and one
    fewer when made at the end, converted to compound periods.
    """
    if contribution <= 0 or count <= 0:
        return 0.0
    remaining = count - np.arange(count)
    if timing == END:
        remaining = remaining - 1
    exponents = remaining / per_year * compounds_per_year
    return float(np.sum(contribution * np.power(1 + rate / compounds_per_year, exponents)))


def year_by_year(inputs: InvestmentInputs) -> Tuple[YearlyBreakdown, ...]:
    """Simulate each compound period, spreading contributions evenly across them."""
    frequency = inputs.compound_frequency
    if frequency == CONTINUOUSLY:
        frequency = CONTINUOUS_TABLE_FREQUENCY
    n = PERIODS_PER_YEAR[frequency]
    rate = inputs.return_rate / 100 / n
    per_period = inputs.additional_contribution * PERIODS_PER_YEAR[inputs.contribution_frequency] / n
    beginning = inputs.contribution_timing == BEGINNING

    balance = float(inputs.starting_amount)
    cumulative_contributions = float(inputs.starting_amount)
    cumulative_interest = 0.0
    rows = []
    for year in range(1, int(inputs.length_years) + 1):
        start = balance
        contributed = 0.0
        earned = 0.0
        for _period in range(n):
            if beginning:
                balance += per_period
                contributed += per_period
            interest = balance * rate
            balance += interest
            earned += interest
            if not beginning:
                balance += per_period
                contributed += per_period
        cumulative_contributions += contributed
        cumulative_interest += earned
        rows.append(
            YearlyBreakdown(
                year=year,
                starting_balance=_cents(start),
                contributions=_cents(contributed),
                interest_earned=_cents(earned),
                ending_balance=_cents(balance),
                cumulative_contributions=_cents(cumulative_contributions),
                cumulative_interest=_cents(cumulative_interest),
            )
        )
    return tuple(rows)


def _continuous_end_balance(inputs: InvestmentInputs, per_year: int) -> float:
    r = inputs.return_rate / 100
    t = inputs.length_years
    principal = inputs.starting_amount * math.exp(r * t)
    if inputs.additional_contribution <= 0:
        return principal
    if r == 0:
        return principal + inputs.additional_contribution * per_year * t
    step = math.exp(r / per_year)
    contributions = inputs.additional_contribution * (math.exp(r * t) - 1) / (step - 1)
    if inputs.contribution_timing == BEGINNING:
        contributions *= step
    return principal + contributions


def calculate_investment(inputs: InvestmentInputs) -> InvestmentResult:
    """Project the balance of a regularly funded investment.

    The headline figures are rounded to cents.
    """
    errors = validate_investment(inputs)
    if errors:
        raise CalculationError(errors[0])

    per_year = PERIODS_PER_YEAR[inputs.contribution_frequency]
    count = int(round(per_year * inputs.length_years))
    total_contributions = inputs.starting_amount + inputs.additional_contribution * count

    if inputs.compound_frequency == CONTINUOUSLY:
        end_balance = _continuous_end_balance(inputs, per_year)
        table = year_by_year(replace(inputs, compound_frequency=CONTINUOUS_TABLE_FREQUENCY))
    else:
        n = PERIODS_PER_YEAR[inputs.compound_frequency]
        r = inputs.return_rate / 100
        principal = inputs.starting_amount * (1 + r / n) ** (n * inputs.length_years)
        end_balance = principal + contributions_future_value(
            inputs.additional_contribution, count, per_year, n, r, inputs.contribution_timing
        )
        table = year_by_year(inputs)

    logger.debug("Investment grows to %.2f", end_balance)
    return InvestmentResult(
        end_balance=_cents(end_balance),
        total_contributions=_cents(total_contributions),
        total_interest=_cents(end_balance - total_contributions),
        year_by_year=table,
    )


__all__ = [
    "PERIODS_PER_YEAR",
    "COMPOUND_FREQUENCIES",
    "FREQUENCY_LABELS",
    "InvestmentInputs",
    "InvestmentResult",
    "YearlyBreakdown",
    "validate_investment",
    "contributions_future_value",
    "year_by_year",
    "calculate_investment",
]
