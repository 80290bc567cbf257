# components/charts.py
# Plotly chart helpers for the calculator pages.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Dict, Sequence

import plotly.graph_objects as go
import plotly.io as pio

from fincalc.calculators.amortization import PaymentBreakdown
from fincalc.calculators.brackets import BracketSlice
from fincalc.calculators.comparison import ProjectionRow
from fincalc.calculators.investment import YearlyBreakdown

pio.templates.default = "plotly_white"

MONEY_HOVER = "%{x}<br>$%{y:,.0f}<extra></extra>"


def _layout(fig: go.Figure, title: str, xaxis_title: str, yaxis_title: str = "Dollars") -> go.Figure:
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=380,
        margin=dict(l=10, r=10, t=40, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis_title=xaxis_title,
        yaxis_title=yaxis_title,
    )
    return fig


# ---------- Loan balance and cumulative interest ----------
def balance_chart(schedule: Sequence[PaymentBreakdown], title: str = "Loan Balance") -> go.Figure:
    """Remaining balance line with cumulative principal and interest paid."""
    periods = [row.period for row in schedule]
    principal_paid, interest_paid = [], []
    p_total = i_total = 0.0
    for row in schedule:
        p_total += row.principal
        i_total += row.interest
        principal_paid.append(p_total)
        interest_paid.append(i_total)

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=periods, y=[row.balance for row in schedule], mode="lines", name="Balance", hovertemplate=MONEY_HOVER))
    fig.add_trace(go.Scatter(x=periods, y=principal_paid, mode="lines", name="Principal paid", hovertemplate=MONEY_HOVER))
    fig.add_trace(go.Scatter(x=periods, y=interest_paid, mode="lines", name="Interest paid", hovertemplate=MONEY_HOVER))
    return _layout(fig, title, "Month")


# ---------- Two-option projection ----------
def projection_chart(
    projection: Sequence[ProjectionRow],
    option1_label: str,
    option2_label: str,
    title: str = "Cumulative Received",
) -> go.Figure:
    ages = [row.age for row in projection]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=ages, y=[row.option1_value for row in projection], mode="lines", name=option1_label,
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=ages, y=[row.option2_value for row in projection], mode="lines", name=option2_label,
        hovertemplate="Age %{x}<br>$%{y:,.0f}<extra></extra>",
    ))
    return _layout(fig, title, "Age")


# ---------- Tax by bracket ----------
def bracket_chart(breakdown: Sequence[BracketSlice], title: str = "Tax by Bracket") -> go.Figure:
    """Bars of income and tax per band the income reaches."""
    labels = [row.bracket for row in breakdown]
    fig = go.Figure()
    fig.add_bar(x=labels, y=[row.income for row in breakdown], name="Income in bracket")
    fig.add_bar(x=labels, y=[row.tax for row in breakdown], name="Tax")
    fig.update_layout(barmode="group")
    return _layout(fig, title, "Bracket")


# ---------- Investment growth (stacked) ----------
def growth_chart(year_by_year: Sequence[YearlyBreakdown], title: str = "Investment Growth") -> go.Figure:
    years = [row.year for row in year_by_year]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=years, y=[row.cumulative_contributions for row in year_by_year], mode="lines",
        name="Contributions", stackgroup="one", hovertemplate=MONEY_HOVER,
    ))
    fig.add_trace(go.Scatter(
        x=years, y=[row.cumulative_interest for row in year_by_year], mode="lines",
        name="Interest", stackgroup="one", hovertemplate=MONEY_HOVER,
    ))
    return _layout(fig, title, "Year")


# ---------- Generic named series ----------
def series_chart(x: Sequence, series: Dict[str, Sequence[float]], title: str, xaxis_title: str = "Year") -> go.Figure:
    """One line per entry of ``series``; shorter series are padded with zeros."""
    n = len(x)
    fig = go.Figure()
    for name, values in series.items():
        y = list(values)[:n]
        y += [0.0] * (n - len(y))
        fig.add_trace(go.Scatter(x=list(x), y=y, mode="lines", name=name, hovertemplate=MONEY_HOVER))
    return _layout(fig, title, xaxis_title)
