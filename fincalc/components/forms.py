import streamlit as st

from fincalc.calculators.boat_loan import AMOUNT, PERCENTAGE, BoatLoanInputs
from fincalc.calculators.investment import COMPOUND_FREQUENCIES, FREQUENCY_LABELS, PERIODS_PER_YEAR, InvestmentInputs
from fincalc.calculators.ira import IraInputs
from fincalc.calculators.pension import JointSurvivorInputs, LumpSumInputs, WorkLongerInputs
from fincalc.calculators.simple_interest import SimpleInterestInputs
from fincalc.calculators.student_loan import ProjectionInputs, RepaymentInputs, SimpleInputs
from fincalc.calculators.taxes import FILING_STATUSES, TaxInputs

# Stable widget keys so values survive switching between calculators
WIDGET_KEYS = {
    "boat_price": "in_boat_price",
    "boat_rate": "in_boat_rate",
    "boat_term": "in_boat_term",
    "boat_down": "in_boat_down",
    "boat_down_type": "in_boat_down_type",
    "boat_trade_in": "in_boat_trade_in",
    "boat_tax": "in_boat_tax",
    "boat_tax_type": "in_boat_tax_type",
    "boat_fees": "in_boat_fees",
    "boat_fees_in_loan": "in_boat_fees_in_loan",

    "sl_mode": "in_sl_mode",
    "sl_balance": "in_sl_balance",
    "sl_term": "in_sl_term",
    "sl_loan_term": "in_sl_loan_term",
    "sl_rate": "in_sl_rate",
    "sl_payment": "in_sl_payment",
    "sl_extra_monthly": "in_sl_extra_monthly",
    "sl_extra_annual": "in_sl_extra_annual",
    "sl_one_time": "in_sl_one_time",
    "sl_years_to_grad": "in_sl_years_to_grad",
    "sl_annual_amount": "in_sl_annual_amount",
    "sl_grace": "in_sl_grace",
    "sl_in_school_interest": "in_sl_in_school_interest",

    "pension_mode": "in_pension_mode",
    "pension_retire_age": "in_pension_retire_age",
    "pension_life": "in_pension_life",
    "pension_return": "in_pension_return",
    "pension_cola": "in_pension_cola",
    "pension_lump": "in_pension_lump",
    "pension_monthly": "in_pension_monthly",
    "pension_spouse_age": "in_pension_spouse_age",
    "pension_spouse_life": "in_pension_spouse_life",
    "pension_single": "in_pension_single",
    "pension_joint": "in_pension_joint",
    "pension_survivor_pct": "in_pension_survivor_pct",
    "pension_current_age": "in_pension_current_age",
    "pension_age1": "in_pension_age1",
    "pension_amount1": "in_pension_amount1",
    "pension_age2": "in_pension_age2",
    "pension_amount2": "in_pension_amount2",

    "ira_balance": "in_ira_balance",
    "ira_contrib": "in_ira_contrib",
    "ira_return": "in_ira_return",
    "ira_current_age": "in_ira_current_age",
    "ira_retire_age": "in_ira_retire_age",
    "ira_tax_now": "in_ira_tax_now",
    "ira_tax_later": "in_ira_tax_later",
    "ira_inflation": "in_ira_inflation",

    "tax_filing": "in_tax_filing",
    "tax_wages": "in_tax_wages",
    "tax_interest": "in_tax_interest",
    "tax_dividends": "in_tax_dividends",
    "tax_business": "in_tax_business",
    "tax_children": "in_tax_children",
    "tax_other_deps": "in_tax_other_deps",
    "tax_pre_tax": "in_tax_pre_tax",
    "tax_itemized": "in_tax_itemized",
    "tax_fed_withholding": "in_tax_fed_withholding",
    "tax_state_withholding": "in_tax_state_withholding",

    "si_principal": "in_si_principal",
    "si_rate": "in_si_rate",
    "si_years": "in_si_years",
    "si_months": "in_si_months",

    "inv_start": "in_inv_start",
    "inv_contrib": "in_inv_contrib",
    "inv_contrib_freq": "in_inv_contrib_freq",
    "inv_years": "in_inv_years",
    "inv_return": "in_inv_return",
    "inv_compound_freq": "in_inv_compound_freq",
    "inv_timing": "in_inv_timing",
}

FILING_LABELS = {
    "single": "Single",
    "married_joint": "Married filing jointly",
    "married_separate": "Married filing separately",
    "head_of_household": "Head of household",
}


def _money(label, key, value, help=None):
    return st.sidebar.number_input(label, min_value=0.0, value=float(value), step=100.0, key=WIDGET_KEYS[key], help=help)


def _pct(label, key, value, help=None):
    return st.sidebar.number_input(label, value=float(value), step=0.1, format="%.2f", key=WIDGET_KEYS[key], help=help)


def _int(label, key, value, min_value=0, max_value=120, help=None):
    return int(st.sidebar.number_input(
        label, min_value=min_value, max_value=max_value, value=value, step=1, key=WIDGET_KEYS[key], help=help
    ))


def boat_loan_form() -> BoatLoanInputs:
    st.sidebar.header("Boat")
    price = _money("Boat price", "boat_price", 50000)
    rate = _pct("Interest rate (%)", "boat_rate", 7.5)
    term = _int("Loan term (years)", "boat_term", 15, min_value=1, max_value=40)

    st.sidebar.header("Down payment & trade-in")
    down_type = st.sidebar.radio("Down payment as", [AMOUNT, PERCENTAGE], horizontal=True, key=WIDGET_KEYS["boat_down_type"])
    down = _money("Down payment", "boat_down", 10000 if down_type == AMOUNT else 20)
    trade_in = _money("Trade-in value", "boat_trade_in", 0)

    st.sidebar.header("Taxes & fees")
    tax_type = st.sidebar.radio("Sales tax as", [PERCENTAGE, AMOUNT], horizontal=True, key=WIDGET_KEYS["boat_tax_type"])
    tax = _money("Sales tax", "boat_tax", 0)
    fees = _money("Fees", "boat_fees", 0, help="Registration, documentation and dealer fees.")
    fees_in_loan = st.sidebar.checkbox("Roll fees into the loan", key=WIDGET_KEYS["boat_fees_in_loan"])

    return BoatLoanInputs(
        boat_price=price,
        interest_rate=rate,
        loan_term_years=term,
        down_payment=down,
        down_payment_type=down_type,
        trade_in_value=trade_in,
        sales_tax=tax,
        sales_tax_type=tax_type,
        fees=fees,
        include_fees_in_loan=fees_in_loan,
    )


def student_loan_form():
    """Return ``(mode, inputs)`` for the chosen student loan mode."""
    mode = st.sidebar.selectbox("Mode", ["simple", "repayment", "projection"], key=WIDGET_KEYS["sl_mode"])
    if mode == "simple":
        st.sidebar.caption("Leave one value at 0 to solve for it.")
        return mode, SimpleInputs(
            loan_balance=_money("Loan balance", "sl_balance", 25000) or None,
            remaining_term=_int("Remaining term (years)", "sl_term", 10, max_value=50) or None,
            interest_rate=_pct("Interest rate (%)", "sl_rate", 5.5) or None,
            monthly_payment=_money("Monthly payment", "sl_payment", 0) or None,
        )
    if mode == "repayment":
        return mode, RepaymentInputs(
            loan_balance=_money("Loan balance", "sl_balance", 25000),
            monthly_payment=_money("Monthly payment", "sl_payment", 300),
            interest_rate=_pct("Interest rate (%)", "sl_rate", 5.5),
            extra_monthly=_money("Extra monthly payment", "sl_extra_monthly", 0),
            extra_annual=_money("Extra annual payment", "sl_extra_annual", 0, help="Applied every 12th month."),
            one_time_payment=_money("One-time payment", "sl_one_time", 0, help="Applied before the first month."),
        )
    return mode, ProjectionInputs(
        years_to_graduation=_int("Years to graduation", "sl_years_to_grad", 4, max_value=10),
        annual_loan_amount=_money("Annual loan amount", "sl_annual_amount", 10000),
        current_balance=_money("Current balance", "sl_balance", 0),
        loan_term=_int("Repayment term (years)", "sl_loan_term", 10, min_value=1, max_value=50),
        grace_period=_int("Grace period (months)", "sl_grace", 6, max_value=12),
        interest_rate=_pct("Interest rate (%)", "sl_rate", 5.5),
        interest_during_school=st.sidebar.checkbox(
            "Interest accrues during school", value=True, key=WIDGET_KEYS["sl_in_school_interest"]
        ),
    )


def pension_form():
    """Return ``(mode, inputs)`` for the chosen pension comparison."""
    mode = st.sidebar.selectbox(
        "Comparison", ["lump sum vs monthly", "single vs joint", "work longer"], key=WIDGET_KEYS["pension_mode"]
    )
    if mode == "work longer":
        current = _int("Current age", "pension_current_age", 55, min_value=18)
        age1 = _int("Option 1 retirement age", "pension_age1", 62, min_value=18)
        amount1 = _money("Option 1 monthly pension", "pension_amount1", 2000)
        age2 = _int("Option 2 retirement age", "pension_age2", 65, min_value=18)
        amount2 = _money("Option 2 monthly pension", "pension_amount2", 2500)
        life = _int("Life expectancy", "pension_life", 85, min_value=18)
        ret = _pct("Investment return (%)", "pension_return", 5.0)
        cola = _pct("COLA (%)", "pension_cola", 2.0)
        return mode, WorkLongerInputs(current, age1, amount1, age2, amount2, life, ret, cola)

    retire_age = _int("Retirement age", "pension_retire_age", 65, min_value=18)
    life = _int("Life expectancy", "pension_life", 85, min_value=18)
    ret = _pct("Investment return (%)", "pension_return", 5.0)
    cola = _pct("COLA (%)", "pension_cola", 2.0, help="Annual cost-of-living adjustment.")
    if mode == "lump sum vs monthly":
        return mode, LumpSumInputs(
            retirement_age=retire_age,
            lump_sum=_money("Lump sum", "pension_lump", 300000),
            monthly_pension=_money("Monthly pension", "pension_monthly", 2000),
            investment_return=ret,
            cola=cola,
            life_expectancy=life,
        )
    return mode, JointSurvivorInputs(
        retirement_age=retire_age,
        life_expectancy=life,
        spouse_age=_int("Spouse age at your retirement", "pension_spouse_age", 62, min_value=18),
        spouse_life_expectancy=_int("Spouse life expectancy", "pension_spouse_life", 90, min_value=18),
        single_life_amount=_money("Single-life monthly pension", "pension_single", 2500),
        joint_amount=_money("Joint-and-survivor monthly pension", "pension_joint", 2200),
        survivor_percent=_pct("Survivor benefit (%)", "pension_survivor_pct", 50.0),
        investment_return=ret,
        cola=cola,
    )


def ira_form() -> IraInputs:
    st.sidebar.header("Account")
    balance = _money("Current balance", "ira_balance", 10000)
    contrib = _money("Annual contribution", "ira_contrib", 6000)
    ret = _pct("Expected return (%)", "ira_return", 7.0)
    st.sidebar.header("Profile")
    current = _int("Current age", "ira_current_age", 30, min_value=18, max_value=100)
    retire = _int("Retirement age", "ira_retire_age", 65, min_value=18, max_value=100)
    tax_now = _pct("Current tax rate (%)", "ira_tax_now", 25.0)
    tax_later = _pct("Retirement tax rate (%)", "ira_tax_later", 15.0)
    inflation = _pct("Inflation (%)", "ira_inflation", 0.0, help="Leave at 0 to skip the inflation-adjusted balance.")
    return IraInputs(balance, contrib, ret, current, retire, tax_now, tax_later, inflation or None)


def tax_form() -> TaxInputs:
    st.sidebar.header("Household")
    filing = st.sidebar.selectbox(
        "Filing status", FILING_STATUSES, format_func=FILING_LABELS.get, key=WIDGET_KEYS["tax_filing"]
    )
    children = _int("Children under 17", "tax_children", 0, max_value=20)
    other_deps = _int("Other dependents", "tax_other_deps", 0, max_value=20)
    st.sidebar.header("Income")
    wages = _money("Wages", "tax_wages", 75000)
    interest = _money("Interest income", "tax_interest", 0)
    dividends = _money("Dividend income", "tax_dividends", 0)
    business = _money("Business income", "tax_business", 0)
    st.sidebar.header("Deductions & withholding")
    pre_tax = _money("Pre-tax deductions", "tax_pre_tax", 0, help="401(k), HSA and similar.")
    itemized = _money("Itemized deductions", "tax_itemized", 0)
    fed = _money("Federal withholding", "tax_fed_withholding", 0)
    state = _money("State withholding", "tax_state_withholding", 0)
    return TaxInputs(
        filing_status=filing,
        gross_income=wages,
        dependents_under_17=children,
        dependents_over_17=other_deps,
        pre_tax_deductions=pre_tax,
        itemized_deductions=itemized,
        federal_withholding=fed,
        state_withholding=state,
        interest_income=interest,
        dividend_income=dividends,
        business_income=business,
    )


def simple_interest_form() -> SimpleInterestInputs:
    return SimpleInterestInputs(
        principal=_money("Principal", "si_principal", 20000),
        interest_rate=_pct("Annual rate (%)", "si_rate", 3.0),
        years=_int("Years", "si_years", 10, max_value=100),
        months=_int("Months", "si_months", 0, max_value=11),
    )


def investment_form() -> InvestmentInputs:
    return InvestmentInputs(
        starting_amount=_money("Starting amount", "inv_start", 20000),
        additional_contribution=_money("Contribution", "inv_contrib", 1000),
        contribution_frequency=st.sidebar.selectbox(
            "Contribution frequency", list(PERIODS_PER_YEAR), index=4,
            format_func=FREQUENCY_LABELS.get, key=WIDGET_KEYS["inv_contrib_freq"],
        ),
        length_years=_int("Length (years)", "inv_years", 10, min_value=1, max_value=100),
        return_rate=_pct("Return rate (%)", "inv_return", 8.0),
        compound_frequency=st.sidebar.selectbox(
            "Compound frequency", COMPOUND_FREQUENCIES, index=4,
            format_func=FREQUENCY_LABELS.get, key=WIDGET_KEYS["inv_compound_freq"],
        ),
        contribution_timing=st.sidebar.radio(
            "Contribute at", ["end", "beginning"], horizontal=True, key=WIDGET_KEYS["inv_timing"]
        ),
    )
