"""String formatting helpers consumed by the presentation layer.

USD-style grouping only; there is no locale support.

Example
-------

>>> format_currency(1234.5)
'$1,234.50'
>>> format_currency(999.99, cents=False)
'$1,000'
>>> format_months(18)
'1 year, 6 months'
"""

from __future__ import annotations


def format_currency(value: float, cents: bool = True) -> str:
    """Render ``value`` as dollars with thousands separators.

    Negative amounts keep the sign in front of the dollar sign
    (``-$1,234.56``).
    """
    decimals = 2 if cents else 0
    text = f"{abs(value):,.{decimals}f}"
    # "-0.00" would otherwise survive rounding of tiny negatives
    if value < 0 and float(text.replace(",", "")) != 0:
        return f"-${text}"
    return f"${text}"


def format_percentage(value: float, decimals: int = 2) -> str:
    """Render an already-scaled percentage (``5.5`` -> ``'5.50%'``)."""
    return f"{value:.{decimals}f}%"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_years(years: int) -> str:
    return _plural(int(years), "year")


def format_months(months: float, separator: str = ", ") -> str:
    """Render a month count as years and months.

    ``separator`` joins the two parts when both are present; the student loan
    pages use a single space, the pension pages use ``", "``.
    """
    total = int(round(months))
    years, remaining = divmod(total, 12)
    if years == 0:
        return _plural(remaining, "month")
    if remaining == 0:
        return format_years(years)
    return f"{format_years(years)}{separator}{_plural(remaining, 'month')}"


__all__ = ["format_currency", "format_percentage", "format_years", "format_months"]
