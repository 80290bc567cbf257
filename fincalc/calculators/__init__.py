"""Pure computation core behind the calculator pages.

Shared engines:

* ``amortization`` – level payments, the three inverse solvers and schedules with extra payments.
* ``annuity`` – growing-annuity present value, totals and the break-even scan.
* ``brackets`` – progressive rate bands and credit phase-outs.
* ``comparison`` – the better-option rule and year-by-year projections for two options.

One module per calculator: ``boat_loan``, ``student_loan``, ``pension``,
``ira``, ``taxes``, ``simple_interest`` and ``investment``.  Each exposes an
input dataclass, a ``validate_*`` function returning a list of messages and a
``calculate_*`` function that raises :class:`~fincalc.calculators.errors.CalculationError`
for inputs it cannot compute.
"""

from . import (  # noqa: F401
    amortization,
    annuity,
    boat_loan,
    brackets,
    comparison,
    errors,
    investment,
    ira,
    pension,
    simple_interest,
    student_loan,
    taxes,
)

__all__ = [
    "amortization",
    "annuity",
    "boat_loan",
    "brackets",
    "comparison",
    "errors",
    "investment",
    "ira",
    "pension",
    "simple_interest",
    "student_loan",
    "taxes",
]
