"""Simple (non-compounding) interest: ``I = P * r * t``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .errors import CalculationError


@dataclass(frozen=True)
class SimpleInterestInputs:
    principal: float
    interest_rate: float  # annual percent
    years: int
    months: int = 0

    @property
    def total_years(self) -> float:
        return self.years + self.months / 12


@dataclass(frozen=True)
class YearlyInterest:
    year: int
    interest_earned: float
    cumulative_interest: float
    end_balance: float


@dataclass(frozen=True)
class SimpleInterestResult:
    principal: float
    total_interest: float
    end_balance: float
    total_time_in_years: float
    interest_percentage: float
    principal_percentage: float
    schedule: Tuple[YearlyInterest, ...]


def validate_simple_interest(inputs: SimpleInterestInputs) -> List[str]:
    errors = []
    if inputs.principal <= 0:
        errors.append("Principal must be greater than 0")
    if inputs.interest_rate < 0:
        errors.append("Interest rate cannot be negative")
    if inputs.years < 0:
        errors.append("Years cannot be negative")
    if not 0 <= inputs.months <= 11:
        errors.append("Months must be between 0 and 11")
    if inputs.total_years < 0:
        errors.append("Time period cannot be negative")
    return errors


def yearly_schedule(principal: float, rate: float, years: int, months: int) -> Tuple[YearlyInterest, ...]:
    """One row per full year, plus a final row for any leftover months.

    ``rate`` is a decimal (0.05 for 5%).
    """
    rows = []
    cumulative = 0.0
    for year in range(1, int(years) + 1):
        earned = principal * rate
        cumulative += earned
        rows.append(YearlyInterest(year, earned, cumulative, principal + cumulative))
    if months > 0:
        earned = principal * rate * months / 12
        cumulative += earned
        rows.append(YearlyInterest(int(years) + 1, earned, cumulative, principal + cumulative))
    return tuple(rows)


def calculate_simple_interest(inputs: SimpleInterestInputs) -> SimpleInterestResult:
    if inputs.principal <= 0:
        raise CalculationError("Principal must be greater than 0")
    if inputs.interest_rate < 0:
        raise CalculationError("Interest rate cannot be negative")
    if inputs.years < 0 or inputs.months < 0:
        raise CalculationError("Time period cannot be negative")

    rate = inputs.interest_rate / 100
    interest = inputs.principal * rate * inputs.total_years
    end_balance = inputs.principal + interest
    interest_share = interest / end_balance * 100 if end_balance > 0 else 0.0
    return SimpleInterestResult(
        principal=inputs.principal,
        total_interest=interest,
        end_balance=end_balance,
        total_time_in_years=inputs.total_years,
        interest_percentage=interest_share,
        principal_percentage=100 - interest_share,
        schedule=yearly_schedule(inputs.principal, rate, inputs.years, inputs.months),
    )


__all__ = [
    "SimpleInterestInputs",
    "SimpleInterestResult",
    "YearlyInterest",
    "validate_simple_interest",
    "yearly_schedule",
    "calculate_simple_interest",
]
