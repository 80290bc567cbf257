"""Exceptions raised by calculator entry points for hard domain violations.

Validators report both hard errors and advisory warnings as plain strings;
:func:`is_advisory` tells the two apart.
"""

from __future__ import annotations

# every advisory validator message says a value "seems" too high
ADVISORY_MARKERS = ("seems",)


class CalculationError(ValueError):
    """Inputs fall outside the domain a calculator can compute.

    The message is user presentable and names the violated precondition.
    """


class InvalidInputCountError(CalculationError):
    """A solve-for-the-unknown call did not receive exactly three values."""


class PaymentTooLowError(CalculationError):
    """A payment is too small to ever repay the loan at the given (or any) rate."""


def is_advisory(message: str) -> bool:
    """Return True for a validator message that flags an implausible but computable value."""
    return any(marker in message for marker in ADVISORY_MARKERS)


__all__ = ["CalculationError", "InvalidInputCountError", "PaymentTooLowError", "is_advisory"]
