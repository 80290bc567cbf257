"""Expose component submodules for convenience."""

from .charts import balance_chart, bracket_chart, growth_chart, projection_chart, series_chart
from .forms import (
    boat_loan_form,
    investment_form,
    ira_form,
    pension_form,
    simple_interest_form,
    student_loan_form,
    tax_form,
)
from .report import build_pdf
from .tables import format_money, to_frame

__all__ = [
    "balance_chart",
    "bracket_chart",
    "growth_chart",
    "projection_chart",
    "series_chart",
    "boat_loan_form",
    "investment_form",
    "ira_form",
    "pension_form",
    "simple_interest_form",
    "student_loan_form",
    "tax_form",
    "build_pdf",
    "format_money",
    "to_frame",
]
