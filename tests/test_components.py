"""Tests for the chart, table and PDF helpers used by the app."""

import pandas as pd
import plotly.graph_objects as go

from fincalc.calculators.boat_loan import BoatLoanInputs, calculate_boat_loan
from fincalc.calculators.investment import InvestmentInputs, calculate_investment
from fincalc.calculators.pension import LumpSumInputs, calculate_lump_sum_vs_pension
from fincalc.calculators.taxes import TaxInputs, calculate_tax
from fincalc.components.charts import balance_chart, bracket_chart, growth_chart, projection_chart, series_chart
from fincalc.components.report import build_pdf
from fincalc.components.tables import format_money, to_frame

BOAT = calculate_boat_loan(BoatLoanInputs(boat_price=50000, interest_rate=7.5, loan_term_years=15, down_payment=10000))


def test_balance_chart_traces():
    fig = balance_chart(BOAT.schedule)
    assert isinstance(fig, go.Figure)
    assert [trace.name for trace in fig.data] == ["Balance", "Principal paid", "Interest paid"]
    assert len(fig.data[0].x) == 180


def test_projection_chart_traces():
    result = calculate_lump_sum_vs_pension(LumpSumInputs(65, 300000, 2000, 5, 2, 85))
    fig = projection_chart(result.projection, "Lump sum", "Monthly pension")
    assert len(fig.data) == 2
    assert list(fig.data[0].x) == list(range(65, 86))


def test_bracket_chart_bars():
    result = calculate_tax(TaxInputs(filing_status="single", gross_income=50000))
    fig = bracket_chart(result.tax_by_bracket)
    assert len(fig.data) == 2
    assert list(fig.data[0].x) == ["10%", "12%"]


def test_growth_chart_is_stacked():
    result = calculate_investment(InvestmentInputs(20000, 1000, 10, 8))
    fig = growth_chart(result.year_by_year)
    assert all(trace.stackgroup == "one" for trace in fig.data)


def test_series_chart_pads_short_series():
    fig = series_chart([1, 2, 3], {"a": [1.0], "b": [1.0, 2.0, 3.0, 4.0]}, "Test")
    assert list(fig.data[0].y) == [1.0, 0.0, 0.0]
    assert list(fig.data[1].y) == [1.0, 2.0, 3.0]


def test_to_frame_default_headings():
    df = to_frame(BOAT.schedule)
    assert list(df.columns) == ["Period", "Payment", "Principal", "Interest", "Balance"]
    assert len(df) == 180


def test_to_frame_selected_columns():
    df = to_frame(BOAT.schedule, {"period": "Month", "balance": "Balance"})
    assert list(df.columns) == ["Month", "Balance"]


def test_format_money():
    df = pd.DataFrame({"Amount": [1234.5], "Count": [3]})
    out = format_money(df, ["Amount", "Missing"])
    assert out.loc[0, "Amount"] == "$1,234.50"
    assert out.loc[0, "Count"] == 3
    assert df.loc[0, "Amount"] == 1234.5


def test_build_pdf():
    schedule = to_frame(BOAT.schedule)
    pdf = build_pdf("Boat Loan", {"Boat price": "$50,000.00"}, {"Monthly payment": "$370.80"}, schedule)
    assert pdf.startswith(b"%PDF")


def test_build_pdf_without_schedule():
    assert build_pdf("Empty", {}, {}).startswith(b"%PDF")
