"""Growing-annuity valuation.

Pension payments with a cost-of-living adjustment form a growing annuity: the
first payment ``P`` arrives at the end of period 1 and each later payment is
``(1 + g)`` times the one before.  Discounting at ``i`` per period gives::

    PV = P * [1 - ((1 + g) / (1 + i))^n] / (i - g)

When ``i`` and ``g`` coincide the bracket becomes 0/0; the limit of the sum is
``P * n / (1 + i)``, which is used whenever the two rates are within
``RATE_EQUALITY_TOLERANCE`` of each other.

All rates in this module are *periodic decimals* (``0.005`` for half a percent
per month).  Use :func:`fincalc.calculators.amortization.monthly_rate` to
convert an annual percentage.

Example
-------

>>> round(present_value(1000, 12, 0.01, 0.01), 2)
11881.19
>>> future_value(100000, 7, 10) > 196000
True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)

RATE_EQUALITY_TOLERANCE = 1e-4


@dataclass(frozen=True)
class GrowingAnnuity:
    """A payment stream growing at a fixed periodic rate."""

    initial_payment: float
    periods: int
    discount_rate: float
    growth_rate: float

    def present_value(self) -> float:
        return present_value(self.initial_payment, self.periods, self.discount_rate, self.growth_rate)

    def total_received(self) -> float:
        return total_received(self.initial_payment, self.periods, self.growth_rate)

    def payment_at(self, period: int) -> float:
        """Payment made in zero-based ``period``."""
        return self.initial_payment * (1 + self.growth_rate) ** period

    @property
    def final_payment(self) -> float:
        return self.payment_at(max(0, self.periods - 1))


def present_value(payment: float, periods: int, discount_rate: float, growth_rate: float) -> float:
    """Present value of ``periods`` growing payments, discounted one period per payment."""
    if periods <= 0:
        return 0.0
    if abs(discount_rate - growth_rate) < RATE_EQUALITY_TOLERANCE:
        return payment * periods / (1 + discount_rate)
    ratio = (1 + growth_rate) / (1 + discount_rate)
    return payment * (1 - ratio ** periods) / (discount_rate - growth_rate)


def future_value(principal: float, annual_rate: float, years: float) -> float:
    """Grow a lump sum at ``annual_rate`` percent compounded yearly.

    Non-positive ``years`` returns the principal unchanged.
    """
    if years <= 0:
        return principal
    return principal * (1 + annual_rate / 100.0) ** years


def payment_stream(payment: float, periods: int, growth_rate: float) -> np.ndarray:
    """Return the individual payments ``payment * (1 + g)^k`` for k = 0..n-1."""
    n = max(0, int(periods))
    return payment * np.power(1.0 + growth_rate, np.arange(n))


def total_received(payment: float, periods: int, growth_rate: float) -> float:
    """Nominal sum of a growing payment stream; zero for no periods."""
    if periods <= 0:
        return 0.0
    return float(payment_stream(payment, periods, growth_rate).sum())


def break_even(
    start: int,
    end: int,
    baseline: Callable[[int], float],
    challenger: Callable[[int], float],
) -> int:
    """Return the first point in ``[start, end]`` where ``challenger`` reaches ``baseline``.

    The scan is linear and saturates: when the challenger never catches up,
    ``end`` is returned.
    """
    for point in range(int(start), int(end) + 1):
        if challenger(point) >= baseline(point):
            logger.debug("Break-even reached at %d", point)
            return point
    logger.debug("No break-even between %d and %d", start, end)
    return int(end)


__all__ = [
    "GrowingAnnuity",
    "RATE_EQUALITY_TOLERANCE",
    "present_value",
    "future_value",
    "payment_stream",
    "total_received",
    "break_even",
]
