"""Sidebar controls for the property calculator dashboard."""

import math

import streamlit as st

from configs import DIR as CONFIGS_DIR
from propcalc.config import ConfigError, load_config
from propcalc.defaults import (
    CAPITAL_GROWTH_PRESETS,
    DEFAULT_CAPITAL_GROWTH,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM,
    DEFAULT_ONE_TIME_EXPENSES,
    DEFAULT_ONGOING_EXPENSES,
    DEFAULT_PROJECTION_YEARS,
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_RENTAL_GROWTH,
    DEFAULT_STATE,
    DEFAULT_STRATA_FEES,
    DEFAULT_WEEKLY_RENT,
    DEPOSIT_PRESETS,
    MAX_LOAN_TERM,
    MAX_PROJECTION_YEARS,
    MIN_LOAN_TERM,
    PROPERTY_TYPES,
    STATES,
)
from propcalc.expenses import is_category_visible
from propcalc.lmi import MAX_INSURABLE_LVR
from propcalc.loan import calculate_loan_details
from propcalc.stamp_duty import calculate_stamp_duty

PRESETS = {
    "Default": None,
    "Sydney Investor": "sydney_investor.yaml",
    "Melbourne First Home": "melbourne_first_home.yaml",
    "Brisbane Interest Only": "brisbane_interest_only.yaml",
    "Perth Land": "perth_land.yaml",
}

ONGOING_LABELS = {
    "council": "Council Rates ($/yr)",
    "water": "Water ($/yr)",
    "land_tax": "Land Tax ($/yr)",
    "insurance": "Insurance ($/yr)",
    "property_manager": "Property Manager ($/yr)",
    "maintenance": "Maintenance ($/yr)",
}

# Widget keys and their first-run values. Every key maps onto one input of
# calculate_property_data; see _KEY_PATHS.
_DEFAULTS = {
    "prop_value": 600_000,
    "prop_deposit": 120_000,
    "prop_type": DEFAULT_PROPERTY_TYPE,
    "prop_state": DEFAULT_STATE,
    "prop_first_home": False,
    "prop_living_here": False,
    "prop_brand_new": False,
    "prop_rebate": 0,
    "loan_interest": DEFAULT_INTEREST_RATE,
    "loan_term": DEFAULT_LOAN_TERM,
    "loan_interest_only": False,
    "loan_include_stamp_duty": False,
    "rent_weekly": DEFAULT_WEEKLY_RENT,
    "rent_growth": DEFAULT_RENTAL_GROWTH,
    "strata_fees": DEFAULT_STRATA_FEES,
    "capital_growth": float(DEFAULT_CAPITAL_GROWTH),
    "exp_one_time": DEFAULT_ONE_TIME_EXPENSES,
    **{f"exp_{name}": value for name, value in DEFAULT_ONGOING_EXPENSES.items()},
    "projection_years": DEFAULT_PROJECTION_YEARS,
}

_KEY_PATHS = {
    "prop_value": ("property_value",),
    "prop_deposit": ("deposit",),
    "prop_type": ("property_type",),
    "prop_state": ("state",),
    "prop_first_home": ("first_home_buyer",),
    "prop_living_here": ("is_living_here",),
    "prop_brand_new": ("is_brand_new",),
    "prop_rebate": ("rebate",),
    "loan_interest": ("loan", "interest"),
    "loan_term": ("loan", "term"),
    "loan_interest_only": ("loan", "is_interest_only"),
    "loan_include_stamp_duty": ("loan", "include_stamp_duty"),
    "rent_weekly": ("weekly_rent",),
    "rent_growth": ("rental_growth",),
    "strata_fees": ("strata_fees",),
    "capital_growth": ("capital_growth",),
    "exp_one_time": ("expenses", "one_time"),
    **{f"exp_{name}": ("expenses", "ongoing", name) for name in DEFAULT_ONGOING_EXPENSES},
    "projection_years": ("projection_years",),
}


def _init_defaults():
    """Set default session state values on first run only."""
    first_run = "prop_value" not in st.session_state
    for key, val in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = val
    if first_run:
        _snapshot_preset("Default")


def _snapshot_preset(name: str) -> None:
    """Save current widget values as the preset snapshot for change detection."""
    st.session_state._preset_name = name
    st.session_state._preset_snapshot = {
        k: st.session_state.get(k) for k in _DEFAULTS
    }


def _lookup(data: dict, path: tuple[str, ...]):
    for part in path:
        if not isinstance(data, dict) or part not in data:
            return None
        data = data[part]
    return data


def _apply_preset():
    """Callback: load preset values into session state."""
    name = st.session_state.preset_selector
    filename = PRESETS.get(name)
    # Presets only list what differs from the defaults
    for key, val in _DEFAULTS.items():
        st.session_state[key] = val
    if filename is None:
        _snapshot_preset(name)
        return
    try:
        preset = load_config(CONFIGS_DIR / filename)
    except ConfigError as exc:
        st.session_state._preset_error = str(exc)
        return

    for key, path in _KEY_PATHS.items():
        value = _lookup(preset, path)
        if value is None:
            continue
        default = _DEFAULTS[key]
        # widgets reject values whose type differs from their step
        if isinstance(default, bool):
            value = bool(value)
        elif isinstance(default, float):
            value = float(value)
        elif isinstance(default, int):
            value = int(value)
        st.session_state[key] = value

    _snapshot_preset(name)


def _build_input() -> dict:
    """Nest the flat widget values into a calculator input."""
    partial: dict = {}
    for key, path in _KEY_PATHS.items():
        target = partial
        for part in path[:-1]:
            target = target.setdefault(part, {})
        target[path[-1]] = st.session_state[key]
    return partial


def render_sidebar() -> dict:
    """Render all sidebar controls and return the calculator input dict."""
    _init_defaults()

    st.sidebar.title("Property Calculator")

    st.sidebar.selectbox(
        "Load Preset",
        options=list(PRESETS.keys()),
        key="preset_selector",
        on_change=_apply_preset,
    )
    error = st.session_state.pop("_preset_error", None)
    if error:
        st.sidebar.error(error)

    snapshot = st.session_state.get("_preset_snapshot")
    preset_name = st.session_state.get("_preset_name")
    if snapshot and preset_name:
        changed = [k for k in _DEFAULTS if st.session_state.get(k) != snapshot.get(k)]
        if changed:
            st.sidebar.caption(f"Modified from {preset_name} ({len(changed)} change{'s' if len(changed) != 1 else ''})")

    # --- Property ---
    with st.sidebar.expander("Property", expanded=True):
        value = st.number_input(
            "Property Value ($)",
            min_value=0,
            max_value=20_000_000,
            step=10_000,
            key="prop_value",
            help="Purchase price of the property.",
        )
        state = st.selectbox(
            "State",
            options=list(STATES),
            key="prop_state",
            help="Determines stamp duty brackets, first home buyer concessions and registration fees.",
        )
        property_type = st.selectbox(
            "Property Type",
            options=list(PROPERTY_TYPES),
            key="prop_type",
            help="Vacant land uses the land concession and has no water, insurance or property manager costs.",
        )
        col1, col2 = st.columns(2)
        first_home = col1.checkbox("First Home Buyer", key="prop_first_home")
        living_here = col2.checkbox(
            "Living Here",
            key="prop_living_here",
            help="Owner occupied: no rent, no property manager, no tax refund.",
        )
        st.checkbox("Brand New", key="prop_brand_new")
        st.number_input(
            "Rebate ($)",
            min_value=0,
            max_value=2_000_000,
            step=1_000,
            key="prop_rebate",
            help="Cash back at settlement. Reduces the amount spent in the first year.",
        )

        duty = calculate_stamp_duty(
            value,
            first_home_buyer=first_home,
            is_land=property_type == "land",
            state=state,
        )
        label = " (first home buyer)" if first_home else ""
        st.caption(f"Stamp duty: ${duty:,.0f}{label}")

    # --- Deposit & Loan ---
    with st.sidebar.expander("Deposit & Loan", expanded=True):
        deposit = st.number_input(
            "Deposit ($)",
            min_value=0,
            max_value=20_000_000,
            step=5_000,
            key="prop_deposit",
            help=f"Common deposits: {', '.join(f'{p}%' for p in DEPOSIT_PRESETS)} of the property value.",
        )
        interest = st.slider(
            "Interest Rate (% p.a.)",
            min_value=0.5,
            max_value=15.0,
            step=0.05,
            key="loan_interest",
        )
        term = st.slider(
            "Loan Term (years)",
            min_value=MIN_LOAN_TERM,
            max_value=MAX_LOAN_TERM,
            step=1,
            key="loan_term",
        )
        col1, col2 = st.columns(2)
        interest_only = col1.checkbox("Interest Only", key="loan_interest_only")
        include_duty = col2.checkbox(
            "Finance Stamp Duty",
            key="loan_include_stamp_duty",
            help="Add stamp duty to the loan instead of paying it upfront.",
        )

        loan = calculate_loan_details(value, deposit, duty, {
            "interest": interest,
            "term": term,
            "is_interest_only": interest_only,
            "include_stamp_duty": include_duty,
        })
        if math.isnan(loan.lmi):
            st.caption(f"LVR {loan.lvr:.2f}%: above {MAX_INSURABLE_LVR}%, the loan cannot be insured.")
        else:
            st.caption(
                f"LVR {loan.lvr:.2f}%, LMI ${loan.lmi:,.0f}, "
                f"repayment ${loan.monthly_mortgage:,.0f}/month"
            )

    # --- Rent & Growth ---
    with st.sidebar.expander("Rent & Growth", expanded=True):
        st.number_input(
            "Weekly Rent ($)",
            min_value=0,
            max_value=10_000,
            step=10,
            key="rent_weekly",
            disabled=living_here,
        )
        st.number_input(
            "Rental Growth ($/wk per year)",
            min_value=0,
            max_value=500,
            step=5,
            key="rent_growth",
            disabled=living_here,
            help="Dollars added to the weekly rent each year.",
        )
        st.number_input(
            "Strata Fees ($/quarter)",
            min_value=0,
            max_value=20_000,
            step=100,
            key="strata_fees",
            help="Body corporate levies. Ignored for vacant land.",
        )
        st.slider(
            "Capital Growth (% p.a.)",
            min_value=-10.0,
            max_value=20.0,
            step=0.5,
            key="capital_growth",
            help=f"Typical values: {', '.join(f'{p}%' for p in CAPITAL_GROWTH_PRESETS)}.",
        )

    # --- Expenses ---
    is_land = property_type == "land"
    with st.sidebar.expander("Expenses"):
        st.number_input(
            "One-time Costs ($)",
            min_value=0,
            max_value=100_000,
            step=250,
            key="exp_one_time",
            help="Solicitor, inspections and adjustments. State registration fees are added on top.",
        )
        for name, label in ONGOING_LABELS.items():
            st.number_input(
                label,
                min_value=0,
                max_value=100_000,
                step=100,
                key=f"exp_{name}",
                disabled=not is_category_visible(name, is_land, not living_here),
            )

    # --- Projection ---
    with st.sidebar.expander("Projection"):
        st.slider(
            "Years to Project",
            min_value=1,
            max_value=MAX_PROJECTION_YEARS,
            step=1,
            key="projection_years",
        )

    return _build_input()
