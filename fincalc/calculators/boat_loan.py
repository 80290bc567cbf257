"""Boat loan calculator.

The amount financed is the purchase price less the down payment and trade-in,
plus sales tax and, optionally, dealer fees.  Down payment and sales tax can
each be given as a dollar amount or as a percentage of the price.

Example
-------

>>> result = calculate_boat_loan(BoatLoanInputs(
...     boat_price=50000, interest_rate=7.5, loan_term_years=15, down_payment=10000))
>>> result.loan_amount, round(result.monthly_payment)
(40000.0, 371)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .amortization import LoanTerms, PaymentBreakdown, generate_schedule
from .errors import CalculationError

logger = logging.getLogger(__name__)

AMOUNT = "amount"
PERCENTAGE = "percentage"

MAX_BOAT_PRICE = 10_000_000
MAX_INTEREST_RATE = 50
MAX_TERM_YEARS = 30
MAX_SALES_TAX_PERCENT = 20


@dataclass(frozen=True)
class BoatLoanInputs:
    boat_price: float
    interest_rate: float
    loan_term_years: float
    down_payment: float = 0.0
    down_payment_type: str = AMOUNT
    trade_in_value: float = 0.0
    sales_tax: float = 0.0
    sales_tax_type: str = PERCENTAGE
    fees: float = 0.0
    include_fees_in_loan: bool = False

    @property
    def down_payment_amount(self) -> float:
        if self.down_payment_type == PERCENTAGE:
            return self.boat_price * self.down_payment / 100
        return self.down_payment

    @property
    def sales_tax_amount(self) -> float:
        if self.sales_tax_type == PERCENTAGE:
            return self.boat_price * self.sales_tax / 100
        return self.sales_tax


@dataclass(frozen=True)
class BoatLoanResult:
    monthly_payment: float
    loan_amount: float
    total_payments: float
    total_interest: float
    total_cost: float
    upfront_payment: float
    sales_tax_amount: float
    down_payment_amount: float
    effective_interest_rate: float
    schedule: Tuple[PaymentBreakdown, ...]


def validate_boat_loan(inputs: BoatLoanInputs) -> List[str]:
    """Return the problems with ``inputs``; an empty list means none."""
    errors = []
    if inputs.boat_price <= 0:
        errors.append("Boat price must be greater than 0")
    if inputs.boat_price > MAX_BOAT_PRICE:
        errors.append("Boat price seems unusually high")
    if inputs.interest_rate < 0:
        errors.append("Interest rate cannot be negative")
    if inputs.interest_rate > MAX_INTEREST_RATE:
        errors.append("Interest rate seems unusually high")
    if inputs.loan_term_years <= 0:
        errors.append("Loan term must be greater than 0")
    if inputs.loan_term_years > MAX_TERM_YEARS:
        errors.append(f"Loan term cannot exceed {MAX_TERM_YEARS} years")
    if inputs.down_payment < 0:
        errors.append("Down payment cannot be negative")
    if inputs.down_payment_type == PERCENTAGE and inputs.down_payment > 100:
        errors.append("Down payment percentage cannot exceed 100%")
    if inputs.trade_in_value < 0:
        errors.append("Trade-in value cannot be negative")
    if inputs.trade_in_value > inputs.boat_price:
        errors.append("Trade-in value cannot exceed boat price")
    if inputs.sales_tax < 0:
        errors.append("Sales tax cannot be negative")
    if inputs.sales_tax_type == PERCENTAGE and inputs.sales_tax > MAX_SALES_TAX_PERCENT:
        errors.append("Sales tax percentage seems unusually high")
    if inputs.fees < 0:
        errors.append("Fees cannot be negative")
    return errors


def calculate_boat_loan(inputs: BoatLoanInputs) -> BoatLoanResult:
    """Price out a boat loan including taxes, fees and the payment schedule.

    Parameters
    ----------
    inputs : BoatLoanInputs
        Price, annual rate in percent, term in years and the optional
        down payment, trade-in, sales tax and fees.

    Returns
    -------
    BoatLoanResult
        Payment, totals and the monthly schedule.  When the down payment and
        trade-in cover the whole purchase the loan amount is zero and so is
        the payment.
    """
    if inputs.boat_price <= 0:
        raise CalculationError("Boat price must be greater than 0")

    down_payment = inputs.down_payment_amount
    sales_tax = inputs.sales_tax_amount

    loan_amount = inputs.boat_price - down_payment - inputs.trade_in_value + sales_tax
    if inputs.include_fees_in_loan:
        loan_amount += inputs.fees
    loan_amount = max(0.0, loan_amount)

    upfront = down_payment
    if not inputs.include_fees_in_loan:
        upfront += inputs.fees

    terms = LoanTerms(loan_amount, inputs.interest_rate, int(round(inputs.loan_term_years * 12)))
    terms.check()
    months = terms.term_months
    payment = terms.monthly_payment if loan_amount > 0 else 0.0
    total_payments = payment * months
    total_interest = total_payments - loan_amount
    schedule = generate_schedule(loan_amount, payment, inputs.interest_rate) if loan_amount > 0 else ()
    logger.debug("Boat loan of %.2f over %d months", loan_amount, months)

    return BoatLoanResult(
        monthly_payment=payment,
        loan_amount=loan_amount,
        total_payments=total_payments,
        total_interest=total_interest,
        total_cost=inputs.boat_price + sales_tax + inputs.fees + total_interest,
        upfront_payment=upfront,
        sales_tax_amount=sales_tax,
        down_payment_amount=down_payment,
        effective_interest_rate=total_interest / inputs.boat_price * 100,
        schedule=schedule,
    )


__all__ = ["BoatLoanInputs", "BoatLoanResult", "validate_boat_loan", "calculate_boat_loan"]
