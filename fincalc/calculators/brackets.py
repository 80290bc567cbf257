"""Progressive rate bands and credit phase-outs.

A :class:`BracketSet` is an ordered run of contiguous bands starting at zero
with non-decreasing rates.  :func:`evaluate_brackets` walks the bands from the
bottom, taxing the slice of the amount that falls into each one.  Nothing here
is tax specific; tiered pricing fits the same shape.

Example
-------

>>> bands = BracketSet.from_table([
...     {"start": 0, "end": 10000, "rate": 0.10},
...     {"start": 10000, "end": None, "rate": 0.20},
... ])
>>> result = evaluate_brackets(15000, bands)
>>> result.total, result.marginal_rate
(2000.0, 0.2)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Bracket:
    lower: float
    upper: Optional[float]  # None means unbounded
    rate: float

    @property
    def label(self) -> str:
        return f"{self.rate * 100:.0f}%"


@dataclass(frozen=True)
class BracketSlice:
    """Portion of an amount taxed inside a single band."""

    bracket: str
    income: float
    tax: float
    rate: float


@dataclass(frozen=True)
class BracketResult:
    total: float
    marginal_rate: float
    effective_rate: float
    breakdown: Tuple[BracketSlice, ...]


@dataclass(frozen=True)
class BracketSet:
    brackets: Tuple[Bracket, ...]

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ValueError("A bracket set needs at least one band")
        if self.brackets[0].lower != 0:
            raise ValueError("The lowest band must start at 0")
        for below, above in zip(self.brackets, self.brackets[1:]):
            if below.upper is None or below.upper != above.lower:
                raise ValueError("Bands must be contiguous and only the top band may be unbounded")
            if above.lower <= below.lower:
                raise ValueError("Band bounds must be strictly increasing")
            if above.rate < below.rate:
                raise ValueError("Band rates must be non-decreasing")
        if self.brackets[-1].upper is not None:
            raise ValueError("The top band must be unbounded")

    @classmethod
    def from_table(cls, rows: Iterable[Dict]) -> "BracketSet":
        """Build from ``{"start", "end", "rate"}`` rows as stored in the tax tables."""
        return cls(tuple(Bracket(float(r["start"]), None if r["end"] is None else float(r["end"]), float(r["rate"])) for r in rows))


def evaluate_brackets(amount: float, bracket_set: BracketSet) -> BracketResult:
    """Apply progressive bands to ``amount``.

    The marginal rate is the rate of the highest band the amount reaches.  The
    effective rate is ``total / amount`` and is zero for a zero amount.  Bands
    holding none of the amount are left out of the breakdown.
    """
    total = 0.0
    marginal = 0.0
    breakdown: List[BracketSlice] = []
    for bracket in bracket_set.brackets:
        if amount <= bracket.lower:
            break
        top = amount if bracket.upper is None else min(bracket.upper, amount)
        taxable = top - bracket.lower
        if taxable <= 0:
            continue
        tax = taxable * bracket.rate
        total += tax
        marginal = bracket.rate
        breakdown.append(BracketSlice(bracket=bracket.label, income=taxable, tax=tax, rate=bracket.rate))

    effective = total / amount if amount > 0 else 0.0
    return BracketResult(total=total, marginal_rate=marginal, effective_rate=effective, breakdown=tuple(breakdown))


def phase_out_reduction(income: float, threshold: float, per_step: float, step: float = 1.0) -> float:
    """Reduction owed for ``income`` above ``threshold``.

    Each full ``step`` of excess income removes ``per_step`` dollars, e.g. $50
    per $1,000 for the child tax credit.  With ``step`` of 1 this is a plain
    linear rate.
    """
    excess = income - threshold
    if excess <= 0:
        return 0.0
    return math.floor(excess / step) * per_step


def apply_phase_out(full_value: float, reduction: float) -> float:
    """Reduce a credit without ever taking it below zero."""
    return full_value - min(full_value, max(0.0, reduction))


__all__ = [
    "Bracket",
    "BracketSet",
    "BracketSlice",
    "BracketResult",
    "evaluate_brackets",
    "phase_out_reduction",
    "apply_phase_out",
]
