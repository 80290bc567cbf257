"""Pension payout comparisons.

Three questions are answered here, each as a comparison of two options valued
at present value:

* **Lump sum vs monthly pension**: invest the lump sum, or take a monthly
  pension that grows with a cost-of-living adjustment (COLA)?
* **Single life vs joint and survivor**: a larger pension that stops at your
  death, or a smaller one that keeps paying a share to your spouse?
* **Work longer**: retire earlier on a smaller pension or later on a larger
  one?

Rates on the inputs are annual percentages.  Payments are monthly, COLA
compounds monthly at ``cola / 12`` and present values discount monthly at
``investment_return / 12``.

Example
-------

>>> result = calculate_lump_sum_vs_pension(LumpSumInputs(
...     retirement_age=65, lump_sum=300000, monthly_pension=2000,
...     investment_return=5, cola=2, life_expectancy=85))
>>> result.comparison.better_option
'monthly-pension'
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .amortization import monthly_rate
from .annuity import GrowingAnnuity, break_even, future_value, payment_stream, present_value, total_received
from .comparison import MONTHS_PER_YEAR, OptionComparison, ProjectionRow, compare_options, project_monthly_streams
from .errors import CalculationError

logger = logging.getLogger(__name__)

SAFE_WITHDRAWAL_RATE = 0.04
MIN_AGE = 18
MAX_LIFE_EXPECTANCY = 120
MAX_INVESTMENT_RETURN = 50
MAX_COLA = 20


# ---------------------------------------------------------------------------
# Inputs and results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LumpSumInputs:
    retirement_age: int
    lump_sum: float
    monthly_pension: float
    investment_return: float
    cola: float
    life_expectancy: int


@dataclass(frozen=True)
class LumpSumResult:
    lump_sum: float
    lump_sum_projected_value: float
    lump_sum_monthly_withdrawal: float
    lump_sum_total_withdrawn: float
    pension_initial_amount: float
    pension_final_amount: float
    pension_total_received: float
    pension_present_value: float
    comparison: OptionComparison
    break_even_age: int
    projection: Tuple[ProjectionRow, ...]


@dataclass(frozen=True)
class JointSurvivorInputs:
    retirement_age: int
    life_expectancy: int
    spouse_age: int
    spouse_life_expectancy: int
    single_life_amount: float
    joint_amount: float
    survivor_percent: float
    investment_return: float
    cola: float


@dataclass(frozen=True)
class ScenarioOutcome:
    total_received: float
    present_value: float
    description: str


@dataclass(frozen=True)
class JointSurvivorResult:
    single_life_total: float
    single_life_present_value: float
    single_life_months: int
    joint_total: float
    joint_present_value: float
    joint_months: int
    survivor_monthly_amount: float
    survivor_total: float
    comparison: OptionComparison
    break_even_years: Optional[float]  # None when no survivor benefit is paid
    if_you_die_first: ScenarioOutcome
    if_spouse_dies_first: ScenarioOutcome
    projection: Tuple[ProjectionRow, ...]


@dataclass(frozen=True)
class WorkLongerInputs:
    current_age: int
    option1_retirement_age: int
    option1_monthly_amount: float
    option2_retirement_age: int
    option2_monthly_amount: float
    life_expectancy: int
    investment_return: float
    cola: float


@dataclass(frozen=True)
class RetirementOption:
    retirement_age: int
    monthly_amount: float
    total_received: float
    present_value: float
    months: int

    @property
    def years(self) -> int:
        return self.months // MONTHS_PER_YEAR


@dataclass(frozen=True)
class WorkLongerResult:
    option1: RetirementOption
    option2: RetirementOption
    comparison: OptionComparison
    additional_years_worked: int
    break_even_age: int
    projection: Tuple[ProjectionRow, ...]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _rate_messages(investment_return: float, cola: float) -> List[str]:
    errors = []
    if investment_return < 0:
        errors.append("Investment return cannot be negative")
    if investment_return > MAX_INVESTMENT_RETURN:
        errors.append(f"Investment return seems unrealistically high (max {MAX_INVESTMENT_RETURN}%)")
    if cola < 0:
        errors.append("COLA cannot be negative")
    if cola > MAX_COLA:
        errors.append(f"COLA seems unrealistically high (max {MAX_COLA}%)")
    return errors


def validate_lump_sum_inputs(inputs: LumpSumInputs) -> List[str]:
    errors = []
    if inputs.retirement_age < MIN_AGE:
        errors.append(f"Retirement age must be at least {MIN_AGE}")
    if inputs.life_expectancy < inputs.retirement_age:
        errors.append("Life expectancy must be greater than retirement age")
    if inputs.life_expectancy > MAX_LIFE_EXPECTANCY:
        errors.append(f"Life expectancy cannot exceed {MAX_LIFE_EXPECTANCY}")
    if inputs.lump_sum <= 0:
        errors.append("Lump sum amount must be greater than zero")
    if inputs.monthly_pension <= 0:
        errors.append("Monthly pension amount must be greater than zero")
    errors.extend(_rate_messages(inputs.investment_return, inputs.cola))
    return list(dict.fromkeys(errors))


def validate_joint_survivor_inputs(inputs: JointSurvivorInputs) -> List[str]:
    errors = []
    if inputs.retirement_age < MIN_AGE:
        errors.append(f"Retirement age must be at least {MIN_AGE}")
    if inputs.life_expectancy < inputs.retirement_age:
        errors.append("Your life expectancy must be greater than retirement age")
    if inputs.spouse_age < MIN_AGE:
        errors.append(f"Spouse age must be at least {MIN_AGE}")
    if inputs.spouse_life_expectancy < inputs.spouse_age:
        errors.append("Spouse life expectancy must be greater than spouse's age at retirement")
    if max(inputs.life_expectancy, inputs.spouse_life_expectancy) > MAX_LIFE_EXPECTANCY:
        errors.append(f"Life expectancy cannot exceed {MAX_LIFE_EXPECTANCY}")
    if inputs.single_life_amount <= 0:
        errors.append("Single life pension amount must be greater than zero")
    if inputs.joint_amount <= 0:
        errors.append("Joint survivor pension amount must be greater than zero")
    if inputs.joint_amount > inputs.single_life_amount:
        errors.append("Joint survivor pension amount cannot exceed single life amount")
    if not 0 <= inputs.survivor_percent <= 100:
        errors.append("Survivor benefit percent must be between 0 and 100")
    errors.extend(_rate_messages(inputs.investment_return, inputs.cola))
    return list(dict.fromkeys(errors))


def validate_work_longer_inputs(inputs: WorkLongerInputs) -> List[str]:
    errors = []
    if inputs.current_age < MIN_AGE:
        errors.append(f"Current age must be at least {MIN_AGE}")
    if inputs.option1_retirement_age <= inputs.current_age:
        errors.append("Option 1 retirement age must be greater than current age")
    if inputs.option2_retirement_age <= inputs.current_age:
        errors.append("Option 2 retirement age must be greater than current age")
    if inputs.option1_retirement_age == inputs.option2_retirement_age:
        errors.append("Retirement ages must be different to compare options")
    if inputs.life_expectancy < max(inputs.option1_retirement_age, inputs.option2_retirement_age):
        errors.append("Life expectancy must be greater than both retirement ages")
    if inputs.life_expectancy > MAX_LIFE_EXPECTANCY:
        errors.append(f"Life expectancy cannot exceed {MAX_LIFE_EXPECTANCY}")
    if inputs.option1_monthly_amount <= 0:
        errors.append("Option 1 monthly amount must be greater than zero")
    if inputs.option2_monthly_amount <= 0:
        errors.append("Option 2 monthly amount must be greater than zero")
    errors.extend(_rate_messages(inputs.investment_return, inputs.cola))
    return list(dict.fromkeys(errors))


# ---------------------------------------------------------------------------
# Lump sum vs monthly pension
# ---------------------------------------------------------------------------


def calculate_lump_sum_vs_pension(inputs: LumpSumInputs) -> LumpSumResult:
    """Compare taking a lump sum against a COLA-adjusted monthly pension.

    The lump sum is already a present value.  The pension is valued as a
    growing annuity over the retirement months.  The break-even age is the
    first age at which the pension paid so far reaches the lump sum.
    """
    if inputs.lump_sum <= 0:
        raise CalculationError("Lump sum amount must be greater than zero")
    if inputs.monthly_pension <= 0:
        raise CalculationError("Monthly pension amount must be greater than zero")
    if inputs.life_expectancy < inputs.retirement_age:
        raise CalculationError("Life expectancy must be greater than retirement age")

    years = inputs.life_expectancy - inputs.retirement_age
    months = years * MONTHS_PER_YEAR
    growth = monthly_rate(inputs.cola)
    pension = GrowingAnnuity(inputs.monthly_pension, months, monthly_rate(inputs.investment_return), growth)

    withdrawal = inputs.lump_sum * SAFE_WITHDRAWAL_RATE / MONTHS_PER_YEAR
    pension_pv = pension.present_value()
    comparison = compare_options("lump-sum", inputs.lump_sum, "monthly-pension", pension_pv)

    break_even_age = break_even(
        inputs.retirement_age,
        inputs.life_expectancy,
        lambda age: inputs.lump_sum,
        lambda age: total_received(inputs.monthly_pension, (age - inputs.retirement_age) * MONTHS_PER_YEAR, growth),
    )

    projection = project_monthly_streams(
        inputs.retirement_age,
        years,
        np.full(months, withdrawal),
        payment_stream(inputs.monthly_pension, months, growth),
        option1_values=[future_value(inputs.lump_sum, inputs.investment_return, year) for year in range(years + 1)],
    )

    return LumpSumResult(
        lump_sum=inputs.lump_sum,
        lump_sum_projected_value=future_value(inputs.lump_sum, inputs.investment_return, years),
        lump_sum_monthly_withdrawal=withdrawal,
        lump_sum_total_withdrawn=withdrawal * months,
        pension_initial_amount=inputs.monthly_pension,
        pension_final_amount=pension.final_payment,
        pension_total_received=pension.total_received(),
        pension_present_value=pension_pv,
        comparison=comparison,
        break_even_age=break_even_age,
        projection=projection,
    )


# ---------------------------------------------------------------------------
# Single life vs joint and survivor
# ---------------------------------------------------------------------------


def _joint_stream(inputs: JointSurvivorInputs, your_months: int, spouse_months: int, growth: float) -> np.ndarray:
    """Monthly joint-and-survivor payments across the three regimes.

    Months before your death pay the joint amount whether or not your spouse
    is alive.  Months after your death, while your spouse is alive, pay the
    survivor share of the joint amount reached at your death, still growing
    with COLA.  Nothing is paid once both have died.
    """
    span = max(your_months, spouse_months)
    stream = np.zeros(span)
    stream[:your_months] = payment_stream(inputs.joint_amount, your_months, growth)
    if spouse_months > your_months:
        survivor_start = inputs.joint_amount * (1 + growth) ** your_months * inputs.survivor_percent / 100
        stream[your_months:] = payment_stream(survivor_start, spouse_months - your_months, growth)
    return stream


def calculate_single_life_vs_joint(inputs: JointSurvivorInputs) -> JointSurvivorResult:
    if inputs.single_life_amount <= 0:
        raise CalculationError("Single life pension amount must be greater than zero")
    if inputs.joint_amount <= 0:
        raise CalculationError("Joint survivor pension amount must be greater than zero")
    if inputs.life_expectancy < inputs.retirement_age:
        raise CalculationError("Your life expectancy must be greater than retirement age")
    if inputs.spouse_life_expectancy < inputs.spouse_age:
        raise CalculationError("Spouse life expectancy must be greater than spouse's age at retirement")
    if not 0 <= inputs.survivor_percent <= 100:
        raise CalculationError("Survivor benefit percent must be between 0 and 100")

    your_years = inputs.life_expectancy - inputs.retirement_age
    spouse_years = inputs.spouse_life_expectancy - inputs.spouse_age
    your_months = your_years * MONTHS_PER_YEAR
    spouse_months = spouse_years * MONTHS_PER_YEAR
    discount = monthly_rate(inputs.investment_return)
    growth = monthly_rate(inputs.cola)

    single_total = total_received(inputs.single_life_amount, your_months, growth)
    single_pv = present_value(inputs.single_life_amount, your_months, discount, growth)

    joint_own_total = total_received(inputs.joint_amount, your_months, growth)
    joint_own_pv = present_value(inputs.joint_amount, your_months, discount, growth)

    survivor_monthly = inputs.joint_amount * (1 + growth) ** your_months * inputs.survivor_percent / 100
    survivor_months = max(0, spouse_months - your_months)
    survivor_total = total_received(survivor_monthly, survivor_months, growth)
    # survivor payments start at your death, so bring them back to retirement
    survivor_pv = present_value(survivor_monthly, survivor_months, discount, growth) / (1 + discount) ** your_months

    joint_total = joint_own_total + survivor_total
    joint_pv = joint_own_pv + survivor_pv
    comparison = compare_options("single-life", single_pv, "joint-survivor", joint_pv)

    break_even_years = None
    if inputs.survivor_percent > 0:
        monthly_difference = inputs.single_life_amount - inputs.joint_amount
        months = math.ceil(monthly_difference * your_months / (inputs.joint_amount * inputs.survivor_percent / 100))
        break_even_years = months / MONTHS_PER_YEAR

    projection = project_monthly_streams(
        inputs.retirement_age,
        max(your_years, spouse_years),
        payment_stream(inputs.single_life_amount, your_months, growth),
        _joint_stream(inputs, your_months, spouse_months, growth),
    )

    return JointSurvivorResult(
        single_life_total=single_total,
        single_life_present_value=single_pv,
        single_life_months=your_months,
        joint_total=joint_total,
        joint_present_value=joint_pv,
        joint_months=your_months + survivor_months,
        survivor_monthly_amount=survivor_monthly,
        survivor_total=survivor_total,
        comparison=comparison,
        break_even_years=break_even_years,
        if_you_die_first=ScenarioOutcome(
            total_received=joint_total,
            present_value=joint_pv,
            description="Joint survivor provides continued income for your spouse",
        ),
        if_spouse_dies_first=ScenarioOutcome(
            total_received=joint_own_total,
            present_value=joint_own_pv,
            description="You receive the reduced joint benefit and no survivor benefit is paid",
        ),
        projection=projection,
    )


# ---------------------------------------------------------------------------
# Work longer
# ---------------------------------------------------------------------------


def _received_by(amount: float, retirement_age: int, age: int, growth: float) -> float:
    if age <= retirement_age:
        return 0.0
    return total_received(amount, (age - retirement_age) * MONTHS_PER_YEAR, growth)


def _padded_stream(amount: float, current_age: int, retirement_age: int, life_expectancy: int, growth: float) -> np.ndarray:
    waiting = np.zeros((retirement_age - current_age) * MONTHS_PER_YEAR)
    paying = payment_stream(amount, (life_expectancy - retirement_age) * MONTHS_PER_YEAR, growth)
    return np.concatenate((waiting, paying))


def calculate_work_longer(inputs: WorkLongerInputs) -> WorkLongerResult:
    """Compare two retirement ages, each with its own monthly pension.

    Both options are valued at the earlier retirement age so that the later
    option's waiting years are discounted.  The break-even age is the first
    age after the later retirement at which the later option's payments catch
    up with the earlier option's.
    """
    ages = (inputs.option1_retirement_age, inputs.option2_retirement_age)
    if inputs.option1_monthly_amount <= 0 or inputs.option2_monthly_amount <= 0:
        raise CalculationError("Monthly pension amounts must be greater than zero")
    if ages[0] == ages[1]:
        raise CalculationError("Retirement ages must be different to compare options")
    if min(ages) < inputs.current_age:
        raise CalculationError("Retirement ages cannot be before the current age")
    if inputs.life_expectancy < max(ages):
        raise CalculationError("Life expectancy must be greater than both retirement ages")

    discount = monthly_rate(inputs.investment_return)
    growth = monthly_rate(inputs.cola)
    earliest = min(ages)

    def option(age: int, amount: float) -> RetirementOption:
        months = (inputs.life_expectancy - age) * MONTHS_PER_YEAR
        deferral = (1 + discount) ** ((age - earliest) * MONTHS_PER_YEAR)
        return RetirementOption(
            retirement_age=age,
            monthly_amount=amount,
            total_received=total_received(amount, months, growth),
            present_value=present_value(amount, months, discount, growth) / deferral,
            months=months,
        )

    option1 = option(inputs.option1_retirement_age, inputs.option1_monthly_amount)
    option2 = option(inputs.option2_retirement_age, inputs.option2_monthly_amount)
    comparison = compare_options("option1", option1.present_value, "option2", option2.present_value)

    early, late = sorted((option1, option2), key=lambda o: o.retirement_age)
    break_even_age = break_even(
        late.retirement_age + 1,
        inputs.life_expectancy,
        lambda age: _received_by(early.monthly_amount, early.retirement_age, age, growth),
        lambda age: _received_by(late.monthly_amount, late.retirement_age, age, growth),
    )

    projection = project_monthly_streams(
        inputs.current_age,
        inputs.life_expectancy - inputs.current_age,
        _padded_stream(option1.monthly_amount, inputs.current_age, option1.retirement_age, inputs.life_expectancy, growth),
        _padded_stream(option2.monthly_amount, inputs.current_age, option2.retirement_age, inputs.life_expectancy, growth),
    )
    logger.debug("Work-longer comparison favours %s", comparison.better_option)

    return WorkLongerResult(
        option1=option1,
        option2=option2,
        comparison=comparison,
        additional_years_worked=abs(ages[1] - ages[0]),
        break_even_age=break_even_age,
        projection=projection,
    )


__all__ = [
    "SAFE_WITHDRAWAL_RATE",
    "LumpSumInputs",
    "LumpSumResult",
    "JointSurvivorInputs",
    "JointSurvivorResult",
    "ScenarioOutcome",
    "WorkLongerInputs",
    "WorkLongerResult",
    "RetirementOption",
    "validate_lump_sum_inputs",
    "validate_joint_survivor_inputs",
    "validate_work_longer_inputs",
    "calculate_lump_sum_vs_pension",
    "calculate_single_life_vs_joint",
    "calculate_work_longer",
]
