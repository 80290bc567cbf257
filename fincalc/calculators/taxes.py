"""Federal income tax estimate with credits.

This module estimates a 2025 U.S. federal return for one household: gross and
adjusted gross income, the larger of the standard or itemized deduction,
progressive tax by bracket, the child tax credit and the earned income tax
credit.  A flat-rate state estimate and take-home pay are reported alongside.
The alternative minimum tax, capital-gains rates and state-specific rules are
not modelled.

Example
-------

>>> result = calculate_tax(TaxInputs(filing_status="single", gross_income=50000))
>>> result.taxable_income, result.federal_tax, result.marginal_rate
(34250.0, 3871.5, 12.0)

Brackets, deductions and credit parameters come from ``data/tax_tables.json``.
Every function accepts a ``tax_tables`` mapping with the same schema to
override them.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .brackets import BracketSet, BracketSlice, apply_phase_out, evaluate_brackets, phase_out_reduction
from .errors import CalculationError

logger = logging.getLogger(__name__)

_DEFAULT_TAX_TABLE_PATH = Path(__file__).resolve().parent.parent / "data" / "tax_tables.json"

DEFAULT_YEAR = 2025
FILING_STATUSES = ("single", "married_joint", "married_separate", "head_of_household")
MAX_EITC_CHILDREN = 3


@lru_cache(maxsize=1)
def _default_tax_tables() -> Dict[str, Dict]:
    with open(_DEFAULT_TAX_TABLE_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def load_tax_tables(path: Optional[Path] = None) -> Dict[str, Dict]:
    """Load tax tables from JSON.

    Parameters
    ----------
    path : Path, optional
        A JSON file matching the packaged schema.  When omitted the packaged
        tables are returned; they are parsed once per process.

    Returns
    -------
    dict
        The parsed tables keyed by year.
    """
    if path is None:
        return _default_tax_tables()
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _year(tax_tables: Optional[Dict[str, Dict]], year: int) -> Dict:
    tables = tax_tables or load_tax_tables()
    try:
        return tables[str(year)]
    except KeyError:
        raise CalculationError(f"No tax tables for {year}") from None


def _federal(filing_status: str, year: int, tax_tables: Optional[Dict[str, Dict]]) -> Dict:
    federal = _year(tax_tables, year)["federal"]
    if filing_status not in federal:
        raise CalculationError(f"Unknown filing status: {filing_status}")
    return federal[filing_status]


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaxByBracket:
    federal_tax: float
    marginal_rate: float  # percent
    effective_rate: float  # percent
    breakdown: Tuple[BracketSlice, ...]


@dataclass(frozen=True)
class ChildTaxCredit:
    total: float
    refundable: float
    non_refundable: float


def standard_deduction(
    filing_status: str = "single", year: int = DEFAULT_YEAR, tax_tables: Optional[Dict[str, Dict]] = None
) -> float:
    return float(_federal(filing_status, year, tax_tables).get("standard_deduction", 0))


def calculate_tax_by_bracket(
    taxable_income: float,
    filing_status: str = "single",
    year: int = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> TaxByBracket:
    """Federal tax on ``taxable_income`` (already net of deductions).

    The tax is rounded to cents; the rates are percentages.
    """
    brackets = BracketSet.from_table(_federal(filing_status, year, tax_tables)["brackets"])
    result = evaluate_brackets(max(0.0, taxable_income), brackets)
    return TaxByBracket(
        federal_tax=_round_half_up(result.total, 2),
        marginal_rate=result.marginal_rate * 100,
        effective_rate=result.effective_rate * 100,
        breakdown=result.breakdown,
    )


def calculate_child_tax_credit(
    children_under_17: int,
    other_dependents: int,
    agi: float,
    filing_status: str = "single",
    year: int = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> ChildTaxCredit:
    """Child and other-dependent credit after the income phase-out.

    The phase-out removes a fixed amount per full step of AGI over the
    threshold.  It reduces the child credit first and spills over into the
    other-dependent credit.  Only the child credit is refundable, up to the
    refundable amount per child.
    """
    ctc = _year(tax_tables, year)["child_tax_credit"]
    thresholds = ctc["phase_out_start"]
    threshold = thresholds.get(filing_status, thresholds["single"])
    reduction = phase_out_reduction(agi, threshold, ctc["phase_out_per_step"], ctc["phase_out_step"])

    full_child = children_under_17 * ctc["credit_per_child"]
    child = apply_phase_out(full_child, reduction)
    other = apply_phase_out(other_dependents * ctc["credit_other_dependent"], reduction - (full_child - child))

    refundable = min(child, children_under_17 * ctc["refundable_per_child"])
    total = float(child + other)
    return ChildTaxCredit(total=total, refundable=float(refundable), non_refundable=total - refundable)


def calculate_eitc(
    earned_income: float,
    filing_status: str = "single",
    num_children: int = 0,
    year: int = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Earned income tax credit, rounded to whole dollars.

    Below the phase-out start the credit phases in at a flat rate up to the
    maximum.  Between start and end it falls linearly to zero.  Only joint
    filers use the married thresholds.
    """
    eitc = _year(tax_tables, year)["eitc"]
    index = max(0, min(MAX_EITC_CHILDREN, int(num_children)))
    status = "married_joint" if filing_status == "married_joint" else "single"
    max_credit = eitc["max_credit"][index]
    start = eitc["phase_out_start"][status][index]
    end = eitc["phase_out_end"][status][index]

    if earned_income > end:
        return 0.0
    if earned_income > start:
        remaining = 1 - (earned_income - start) / (end - start)
        return max(0.0, _round_half_up(max_credit * remaining))
    return float(min(max_credit, _round_half_up(earned_income * eitc["phase_in_rate"][index])))


def estimate_state_tax(
    agi: float,
    filing_status: str = "single",
    year: int = DEFAULT_YEAR,
    tax_tables: Optional[Dict[str, Dict]] = None,
) -> float:
    """Flat-rate state estimate on AGI less a share of the federal standard deduction."""
    state = _year(tax_tables, year)["state_estimate"]
    deduction = standard_deduction(filing_status, year, tax_tables) * state["standard_deduction_share"]
    return _round_half_up(max(0.0, agi - deduction) * state["rate"])


# ---------------------------------------------------------------------------
# Full return
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaxInputs:
    filing_status: str
    gross_income: float  # wages
    dependents_under_17: int = 0
    dependents_over_17: int = 0
    pre_tax_deductions: float = 0.0
    itemized_deductions: float = 0.0
    federal_withholding: float = 0.0
    state_withholding: float = 0.0
    other_credits: float = 0.0
    interest_income: float = 0.0
    dividend_income: float = 0.0
    capital_gains_short: float = 0.0
    capital_gains_long: float = 0.0
    business_income: float = 0.0
    mortgage_interest: float = 0.0
    state_local_taxes: float = 0.0
    charitable_donations: float = 0.0
    medical_expenses: float = 0.0
    education_credits: float = 0.0
    energy_credits: float = 0.0
    retirement_savings_credit: float = 0.0

    @property
    def total_income(self) -> float:
        return (
            self.gross_income
            + self.interest_income
            + self.dividend_income
            + self.capital_gains_short
            + self.capital_gains_long
            + self.business_income
        )


@dataclass(frozen=True)
class TaxResult:
    gross_income: float
    adjusted_gross_income: float
    standard_deduction: float
    deduction_used: float
    deduction_type: str
    taxable_income: float
    federal_tax: float
    marginal_rate: float
    effective_rate: float
    child_tax_credit: ChildTaxCredit
    earned_income_credit: float
    other_credits: float
    total_credits: float
    tax_after_credits: float
    total_withholding: float
    refund_or_owed: float  # positive is a refund
    estimated_state_tax: float
    total_tax_liability: float
    take_home_pay: float
    monthly_take_home: float
    biweekly_take_home: float
    tax_by_bracket: Tuple[BracketSlice, ...]


def itemized_total(inputs: TaxInputs, agi: float, year: int = DEFAULT_YEAR, tax_tables: Optional[Dict[str, Dict]] = None) -> float:
    """Explicit itemized total, or the sum of the itemizable expenses."""
    if inputs.itemized_deductions:
        return inputs.itemized_deductions
    rules = _year(tax_tables, year)["itemized"]
    medical = max(0.0, inputs.medical_expenses - agi * rules["medical_agi_floor"])
    return (
        inputs.mortgage_interest
        + min(rules["salt_cap"], inputs.state_local_taxes)
        + inputs.charitable_donations
        + medical
    )


def validate_tax_inputs(inputs: TaxInputs) -> List[str]:
    errors = []
    if inputs.filing_status not in FILING_STATUSES:
        errors.append(f"Unknown filing status: {inputs.filing_status}")
    if inputs.gross_income < 0:
        errors.append("Gross income cannot be negative")
    if inputs.pre_tax_deductions < 0:
        errors.append("Pre-tax deductions cannot be negative")
    if inputs.pre_tax_deductions > inputs.gross_income:
        errors.append("Pre-tax deductions cannot exceed gross income")
    if inputs.dependents_under_17 < 0 or inputs.dependents_over_17 < 0:
        errors.append("Number of dependents cannot be negative")
    if inputs.itemized_deductions < 0:
        errors.append("Itemized deductions cannot be negative")
    if inputs.federal_withholding < 0:
        errors.append("Federal withholding cannot be negative")
    if inputs.state_withholding < 0:
        errors.append("State withholding cannot be negative")
    return errors


def calculate_tax(
    inputs: TaxInputs, year: int = DEFAULT_YEAR, tax_tables: Optional[Dict[str, Dict]] = None
) -> TaxResult:
    """Estimate the full return for ``inputs``.

    Non-refundable credits can only bring the federal tax down to zero; the
    refundable child credit and the EITC are then subtracted and may take it
    below zero.  ``refund_or_owed`` is withholding less the tax after credits,
    so refundable credits show up as a larger refund.
    """
    if inputs.gross_income < 0:
        raise CalculationError("Gross income cannot be negative")
    status = inputs.filing_status
    total_income = inputs.total_income
    agi = total_income - inputs.pre_tax_deductions

    standard = standard_deduction(status, year, tax_tables)
    deduction = max(standard, itemized_total(inputs, agi, year, tax_tables))
    taxable = max(0.0, agi - deduction)
    by_bracket = calculate_tax_by_bracket(taxable, status, year, tax_tables)

    ctc = calculate_child_tax_credit(inputs.dependents_under_17, inputs.dependents_over_17, agi, status, year, tax_tables)
    eitc = calculate_eitc(
        inputs.gross_income, status, inputs.dependents_under_17 + inputs.dependents_over_17, year, tax_tables
    )
    other = inputs.other_credits + inputs.education_credits + inputs.energy_credits + inputs.retirement_savings_credit

    non_refundable = ctc.non_refundable + other
    refundable = ctc.refundable + eitc
    tax_after_credits = max(0.0, by_bracket.federal_tax - non_refundable) - refundable

    withholding = inputs.federal_withholding + inputs.state_withholding
    state_tax = estimate_state_tax(agi, status, year, tax_tables)
    liability = max(0.0, tax_after_credits) + state_tax
    take_home = total_income - liability - inputs.pre_tax_deductions
    logger.debug("Taxable income %.2f owes %.2f before credits", taxable, by_bracket.federal_tax)

    return TaxResult(
        gross_income=total_income,
        adjusted_gross_income=agi,
        standard_deduction=standard,
        deduction_used=deduction,
        deduction_type="standard" if deduction == standard else "itemized",
        taxable_income=taxable,
        federal_tax=by_bracket.federal_tax,
        marginal_rate=by_bracket.marginal_rate,
        effective_rate=by_bracket.effective_rate,
        child_tax_credit=ctc,
        earned_income_credit=eitc,
        other_credits=other,
        total_credits=non_refundable + refundable,
        tax_after_credits=tax_after_credits,
        total_withholding=withholding,
        refund_or_owed=withholding - tax_after_credits,
        estimated_state_tax=state_tax,
        total_tax_liability=liability,
        take_home_pay=take_home,
        monthly_take_home=take_home / 12,
        biweekly_take_home=take_home / 26,
        tax_by_bracket=by_bracket.breakdown,
    )


__all__ = [
    "FILING_STATUSES",
    "TaxInputs",
    "TaxResult",
    "TaxByBracket",
    "ChildTaxCredit",
    "load_tax_tables",
    "standard_deduction",
    "calculate_tax_by_bracket",
    "calculate_child_tax_credit",
    "calculate_eitc",
    "estimate_state_tax",
    "itemized_total",
    "validate_tax_inputs",
    "calculate_tax",
]
