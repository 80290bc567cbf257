# app.py
import logging
from dataclasses import asdict

import streamlit as st

from fincalc.calculators import boat_loan, investment, ira, pension, simple_interest, student_loan, taxes
from fincalc.calculators.errors import CalculationError, is_advisory
from fincalc.components import (
    balance_chart,
    boat_loan_form,
    bracket_chart,
    build_pdf,
    format_money,
    growth_chart,
    investment_form,
    ira_form,
    pension_form,
    projection_chart,
    series_chart,
    simple_interest_form,
    student_loan_form,
    tax_form,
    to_frame,
)
from fincalc.formatting import format_currency, format_months, format_percentage

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ---------- Page config ----------
st.set_page_config(
    page_title="Financial Calculators",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
st.markdown(
    """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
    """,
    unsafe_allow_html=True,
)

SCHEDULE_MONEY = ["Payment", "Principal", "Interest", "Balance"]


def _input_rows(inputs) -> dict:
    return {k.replace("_", " ").capitalize(): str(v) for k, v in asdict(inputs).items()}


def _show_messages(messages) -> None:
    """Render validator output; only hard errors halt the page."""
    errors = [m for m in messages if not is_advisory(m)]
    for message in messages:
        if is_advisory(message):
            st.warning(message)
    if errors:
        for message in errors:
            st.error(message)
        st.stop()


def _download(title: str, inputs, results: dict, schedule=None) -> None:
    pdf_bytes = build_pdf(title, _input_rows(inputs), results, schedule)
    st.download_button(
        "Download PDF report",
        data=pdf_bytes,
        file_name=title.lower().replace(" ", "_") + ".pdf",
        mime="application/pdf",
    )


def _metrics(values: dict) -> None:
    cols = st.columns(len(values))
    for col, (label, value) in zip(cols, values.items()):
        col.metric(label, value)


def _schedule_frame(schedule):
    return to_frame(schedule, {
        "period": "Month",
        "payment": "Payment",
        "principal": "Principal",
        "interest": "Interest",
        "balance": "Balance",
    })


# ---------- Boat loan ----------
def boat_loan_page():
    inputs = boat_loan_form()
    _show_messages(boat_loan.validate_boat_loan(inputs))
    result = boat_loan.calculate_boat_loan(inputs)

    results = {
        "Monthly payment": format_currency(result.monthly_payment),
        "Loan amount": format_currency(result.loan_amount),
        "Total interest": format_currency(result.total_interest),
        "Total cost": format_currency(result.total_cost),
        "Due at purchase": format_currency(result.upfront_payment),
    }
    _metrics(results)
    st.plotly_chart(balance_chart(result.schedule), use_container_width=True)
    frame = _schedule_frame(result.schedule)
    st.dataframe(format_money(frame, SCHEDULE_MONEY), use_container_width=True, hide_index=True)
    _download("Boat Loan", inputs, results, frame)


# ---------- Student loan ----------
def student_loan_page():
    mode, inputs = student_loan_form()
    if mode == "simple":
        _show_messages(student_loan.validate_simple_inputs(inputs))
        result = student_loan.calculate_simple(inputs)
        results = {
            "Loan balance": format_currency(result.loan_balance),
            "Monthly payment": format_currency(result.monthly_payment),
            "Interest rate": format_percentage(result.interest_rate),
            "Term": format_months(result.remaining_term * 12, " "),
            "Total interest": format_currency(result.total_interest),
        }
        _metrics(results)
        st.caption(f"Solved for {result.solved_for.replace('_', ' ')}.")
        _download("Student Loan", inputs, results)
    elif mode == "repayment":
        _show_messages(student_loan.validate_repayment_inputs(inputs))
        result = student_loan.calculate_repayment(inputs)
        results = {
            "Original payoff": format_months(result.original.total_months),
            "Accelerated payoff": format_months(result.accelerated.total_months),
            "Time saved": format_months(result.months_saved),
            "Interest saved": format_currency(result.interest_saved),
        }
        _metrics(results)
        c1, c2 = st.columns(2)
        with c1:
            st.plotly_chart(balance_chart(result.original_schedule, "Original Plan"), use_container_width=True)
        with c2:
            st.plotly_chart(balance_chart(result.accelerated_schedule, "With Extra Payments"), use_container_width=True)
        frame = _schedule_frame(result.accelerated_schedule)
        _download("Student Loan Repayment", inputs, results, frame)
    else:
        _show_messages(student_loan.validate_projection_inputs(inputs))
        result = student_loan.calculate_projection(inputs)
        results = {
            "Amount borrowed": format_currency(result.amount_borrowed),
            "Balance at graduation": format_currency(result.balance_after_graduation),
            "Balance after grace": format_currency(result.balance_after_grace_period),
            "Monthly repayment": format_currency(result.monthly_repayment),
            "Total interest": format_currency(result.total_interest),
        }
        _metrics(results)
        _download("Student Loan Projection", inputs, results)


# ---------- Pension ----------
PROJECTION_COLUMNS = {
    "age": "Age",
    "option1_monthly": "Option 1 monthly",
    "option2_monthly": "Option 2 monthly",
    "option1_value": "Option 1 value",
    "option2_value": "Option 2 value",
}


def pension_page():
    mode, inputs = pension_form()
    if mode == "lump sum vs monthly":
        _show_messages(pension.validate_lump_sum_inputs(inputs))
        result = pension.calculate_lump_sum_vs_pension(inputs)
        labels = ("Lump sum", "Monthly pension")
        results = {
            "Better option": result.comparison.better_option,
            "Pension present value": format_currency(result.pension_present_value),
            "Pension total": format_currency(result.pension_total_received),
            "Safe monthly withdrawal": format_currency(result.lump_sum_monthly_withdrawal),
            "Break-even age": str(result.break_even_age),
        }
    elif mode == "single vs joint":
        _show_messages(pension.validate_joint_survivor_inputs(inputs))
        result = pension.calculate_single_life_vs_joint(inputs)
        labels = ("Single life", "Joint & survivor")
        results = {
            "Better option": result.comparison.better_option,
            "Single-life value": format_currency(result.single_life_present_value),
            "Joint value": format_currency(result.joint_present_value),
            "Survivor monthly": format_currency(result.survivor_monthly_amount),
            "Break-even": "n/a" if result.break_even_years is None else format_months(result.break_even_years * 12),
        }
        st.info(result.if_you_die_first.description)
        st.info(result.if_spouse_dies_first.description)
    else:
        _show_messages(pension.validate_work_longer_inputs(inputs))
        result = pension.calculate_work_longer(inputs)
        labels = (f"Retire at {inputs.option1_retirement_age}", f"Retire at {inputs.option2_retirement_age}")
        results = {
            "Better option": result.comparison.better_option,
            "Option 1 value": format_currency(result.option1.present_value),
            "Option 2 value": format_currency(result.option2.present_value),
            "Extra years worked": str(result.additional_years_worked),
            "Break-even age": str(result.break_even_age),
        }

    _metrics(results)
    st.plotly_chart(projection_chart(result.projection, *labels), use_container_width=True)
    frame = format_money(to_frame(result.projection, PROJECTION_COLUMNS), list(PROJECTION_COLUMNS.values())[1:])
    st.dataframe(frame, use_container_width=True, hide_index=True)
    _download("Pension Comparison", inputs, results, frame)


# ---------- IRA ----------
def ira_page():
    inputs = ira_form()
    _show_messages(ira.validate_ira_inputs(inputs))
    result = ira.calculate_ira(inputs)
    verdict = ira.compare_ira_types(result)

    results = {
        "Traditional after tax": format_currency(result.traditional_balance_after_tax),
        "Roth balance": format_currency(result.roth_balance),
        "Better option": verdict.better_option,
        "Difference": format_currency(verdict.difference),
    }
    _metrics(results)
    st.caption(verdict.reason)
    ages = [row.age for row in result.schedule]
    st.plotly_chart(
        series_chart(ages, {"Balance": [row.balance for row in result.schedule]}, "Account Balance", xaxis_title="Age"),
        use_container_width=True,
    )
    frame = format_money(to_frame(result.schedule), ["Contribution", "Balance", "Earnings"])
    st.dataframe(frame, use_container_width=True, hide_index=True)
    _download("IRA Comparison", inputs, results, frame)


# ---------- Income tax ----------
def tax_page():
    inputs = tax_form()
    _show_messages(taxes.validate_tax_inputs(inputs))
    result = taxes.calculate_tax(inputs)

    outcome = "Refund" if result.refund_or_owed >= 0 else "Amount owed"
    results = {
        "Federal tax": format_currency(result.tax_after_credits),
        "Effective rate": format_percentage(result.effective_rate),
        "Marginal rate": format_percentage(result.marginal_rate, 0),
        outcome: format_currency(abs(result.refund_or_owed)),
        "Monthly take-home": format_currency(result.monthly_take_home),
    }
    _metrics(results)
    st.plotly_chart(bracket_chart(result.tax_by_bracket), use_container_width=True)
    frame = format_money(to_frame(result.tax_by_bracket, {"bracket": "Bracket", "income": "Income", "tax": "Tax"}), ["Income", "Tax"])
    st.dataframe(frame, use_container_width=True, hide_index=True)
    _download("Income Tax Estimate", inputs, results, frame)


# ---------- Simple interest ----------
def simple_interest_page():
    inputs = simple_interest_form()
    _show_messages(simple_interest.validate_simple_interest(inputs))
    result = simple_interest.calculate_simple_interest(inputs)

    results = {
        "Total interest": format_currency(result.total_interest),
        "End balance": format_currency(result.end_balance),
        "Interest share": format_percentage(result.interest_percentage),
    }
    _metrics(results)
    frame = format_money(to_frame(result.schedule), ["Interest earned", "Cumulative interest", "End balance"])
    st.dataframe(frame, use_container_width=True, hide_index=True)
    _download("Simple Interest", inputs, results, frame)


# ---------- Investment ----------
def investment_page():
    inputs = investment_form()
    _show_messages(investment.validate_investment(inputs))
    result = investment.calculate_investment(inputs)

    results = {
        "End balance": format_currency(result.end_balance),
        "Total contributions": format_currency(result.total_contributions),
        "Total interest": format_currency(result.total_interest),
    }
    _metrics(results)
    st.plotly_chart(growth_chart(result.year_by_year), use_container_width=True)
    money = ["Starting balance", "Contributions", "Interest earned", "Ending balance", "Cumulative contributions", "Cumulative interest"]
    frame = format_money(to_frame(result.year_by_year), money)
    st.dataframe(frame, use_container_width=True, hide_index=True)
    _download("Investment Growth", inputs, results, frame)


PAGES = {
    "Boat loan": boat_loan_page,
    "Student loan": student_loan_page,
    "Pension": pension_page,
    "IRA": ira_page,
    "Income tax": tax_page,
    "Simple interest": simple_interest_page,
    "Investment": investment_page,
}

st.sidebar.title("Financial Calculators")
choice = st.sidebar.radio("Calculator", list(PAGES), key="page")
st.title(choice)

try:
    PAGES[choice]()
except CalculationError as exc:
    logger.info("Calculation rejected on %s page: %s", choice, exc)
    st.error(str(exc))
