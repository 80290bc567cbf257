"""Shared result shapes for the two-option comparators.

Every comparator reduces each option to a present value and picks the larger;
:func:`compare_options` encodes that rule once.  Year-by-year projections are
built from monthly payment streams by :func:`project_monthly_streams`, which
covers the longer of the two streams so that an option still paying after the
other has ended (a surviving spouse, say) stays visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class OptionComparison:
    better_option: str
    difference_dollars: float
    difference_percent: float


@dataclass(frozen=True)
class ProjectionRow:
    """Snapshot of both options at the start of a projection year."""

    year: int
    age: int
    option1_value: float
    option2_value: float
    option1_cumulative: float
    option2_cumulative: float
    option1_monthly: float
    option2_monthly: float


def compare_options(first: str, first_value: float, second: str, second_value: float) -> OptionComparison:
    """Pick the option with the higher value; ties go to ``first``.

    The percentage difference is measured against the larger value and is zero
    when both values are zero.
    """
    better = first if first_value >= second_value else second
    difference = abs(first_value - second_value)
    larger = max(first_value, second_value)
    percent = difference / larger * 100 if larger > 0 else 0.0
    return OptionComparison(better_option=better, difference_dollars=difference, difference_percent=percent)


def _cumulative(stream: np.ndarray) -> np.ndarray:
    # cum[m] is the total of months 0..m-1
    return np.concatenate(([0.0], np.cumsum(stream)))


def _at_year(cum: np.ndarray, stream: np.ndarray, year: int) -> Tuple[float, float]:
    month = year * MONTHS_PER_YEAR
    received = float(cum[min(month, len(stream))])
    monthly = float(stream[month]) if month < len(stream) else 0.0
    return received, monthly


def project_monthly_streams(
    start_age: int,
    years: int,
    option1: np.ndarray,
    option2: np.ndarray,
    option1_values: Optional[Sequence[float]] = None,
    option2_values: Optional[Sequence[float]] = None,
) -> Tuple[ProjectionRow, ...]:
    """Summarise two monthly payment streams at each year boundary.

    Row ``k`` (``k = 0..years``) reports the amount received in months before
    ``12k`` and the payment due in month ``12k``.  ``option*_values`` override
    the value columns, which otherwise mirror the cumulative amount received.
    """
    cum1, cum2 = _cumulative(option1), _cumulative(option2)
    rows = []
    for year in range(years + 1):
        received1, monthly1 = _at_year(cum1, option1, year)
        received2, monthly2 = _at_year(cum2, option2, year)
        rows.append(
            ProjectionRow(
                year=year,
                age=start_age + year,
                option1_value=received1 if option1_values is None else float(option1_values[year]),
                option2_value=received2 if option2_values is None else float(option2_values[year]),
                option1_cumulative=received1,
                option2_cumulative=received2,
                option1_monthly=monthly1,
                option2_monthly=monthly2,
            )
        )
    return tuple(rows)


__all__ = ["OptionComparison", "ProjectionRow", "compare_options", "project_monthly_streams"]
