"""Tests for the display formatting helpers."""

from fincalc.formatting import format_currency, format_months, format_percentage, format_years


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(999.99, cents=False) == "$1,000"
    assert format_currency(0) == "$0.00"


def test_format_currency_negative():
    assert format_currency(-1234.567) == "-$1,234.57"
    # rounds away to zero, so no sign
    assert format_currency(-0.001) == "$0.00"


def test_format_percentage():
    assert format_percentage(5.5) == "5.50%"
    assert format_percentage(12, 0) == "12%"


def test_format_years_and_months():
    assert format_years(1) == "1 year"
    assert format_years(3) == "3 years"
    assert format_months(18) == "1 year, 6 months"
    assert format_months(24) == "2 years"
    assert format_months(1) == "1 month"
    assert format_months(30, " ") == "2 years 6 months"
