"""Streamlit dashboard for the Australian property purchase calculator."""

import math

import streamlit as st

st.set_page_config(
    page_title="Property Calculator",
    page_icon=":house:",
    layout="wide",
)

@st.dialog("Disclaimer")
def _show_disclaimer():
    st.markdown(
        "This tool is for **educational and informational purposes only**. "
        "It is not financial advice.\n\n"
        "Stamp duty, LMI and tax figures are estimates from published rates and "
        "simplified rules. Always check with your lender, conveyancer and a qualified "
        "adviser before buying property."
    )
    if st.button("I understand", use_container_width=True):
        st.session_state.disclaimer_accepted = True
        st.rerun()


if not st.session_state.get("disclaimer_accepted", False):
    _show_disclaimer()
    st.stop()

from propcalc.calculator import calculate_property_data
from propcalc.output import to_csv
from propcalc.params import PropertyData
from propcalc.sensitivity import METRICS, frange, sweep, what_if_matrix
from propcalc.validation import validate_property_data

from dashboard.charts import (
    cash_flow_chart,
    matrix_heatmap,
    returns_chart,
    sensitivity_chart,
    value_equity_chart,
)
from dashboard.compare_tab import render_compare_tab
from dashboard.formatters import details_dataframe, projection_dataframe, sweep_dataframe
from dashboard.sidebar import render_sidebar


# --- Cached computation ---


@st.cache_data
def cached_calculate(partial: dict) -> PropertyData:
    return calculate_property_data(partial)


@st.cache_data
def cached_sweep(partial: dict, param_path: str, values_tuple: tuple) -> list:
    return sweep(partial, param_path, list(values_tuple))


@st.cache_data
def cached_matrix(
    partial: dict,
    row_param: str,
    row_values: tuple,
    col_param: str,
    col_values: tuple,
    metric: str,
):
    return what_if_matrix(
        partial, row_param, list(row_values), col_param, list(col_values), metric=metric
    )


# label: (path, default min, default max, default step, is percent)
SWEEP_PARAMS = {
    "Interest Rate": ("loan.interest", 4.0, 8.0, 0.25, True),
    "Capital Growth": ("capital_growth", 0.0, 8.0, 1.0, True),
    "Property Value": ("property_value", 400_000.0, 1_200_000.0, 50_000.0, False),
    "Deposit": ("deposit", 40_000.0, 240_000.0, 20_000.0, False),
    "Weekly Rent": ("weekly_rent", 400.0, 1_000.0, 50.0, False),
    "Rental Growth ($/wk)": ("rental_growth", 0.0, 60.0, 10.0, False),
    "Loan Term": ("loan.term", 15.0, 35.0, 5.0, False),
    "Strata Fees ($/qtr)": ("strata_fees", 0.0, 3_000.0, 500.0, False),
}


def _range_inputs(label: str, prefix: str, container) -> list[float]:
    """Min/max/step inputs for one swept parameter; returns the values."""
    _, default_min, default_max, default_step, is_pct = SWEEP_PARAMS[label]
    unit = " (%)" if is_pct else ""
    c1, c2, c3 = container.columns(3)
    lo = c1.number_input(f"Min{unit}", value=default_min, step=default_step, key=f"{prefix}_min_{label}")
    hi = c2.number_input(f"Max{unit}", value=default_max, step=default_step, key=f"{prefix}_max_{label}")
    step = c3.number_input(
        f"Step{unit}",
        value=default_step,
        step=default_step,
        min_value=0.01 if is_pct else 1.0,
        key=f"{prefix}_step_{label}",
    )
    if hi < lo:
        container.warning("Max must be at least Min.")
        return []
    return frange(lo, hi, step)


# --- Layout ---

partial = render_sidebar()
data = cached_calculate(partial)
errors = validate_property_data(data)
final = data.final
loan = data.loan

st.header("Property Purchase Analysis")

# Results are still shown for invalid input so the preview keeps up with typing
for message in errors.values():
    st.warning(message)

# Row 1: purchase costs
m1, m2, m3, m4 = st.columns(4)
m1.metric("Stamp Duty", f"${data.stamp_duty:,.0f}")
m2.metric("LVR", f"{loan.lvr:.2f}%")
if math.isnan(loan.lmi):
    m3.metric("LMI", "Not insurable")
    m4.metric("Loan Amount", "-")
else:
    m3.metric("LMI", f"${loan.lmi:,.0f}")
    m4.metric("Loan Amount", f"${loan.amount:,.0f}")
st.caption(
    "**Row 1** - Upfront position. Stamp duty applies any first home buyer concession "
    "for the selected state. LMI is added to the loan when the LVR is above 80%; above "
    "95% the loan cannot be insured and the projections below are undefined."
)

# Row 2: final projected year
if final is not None:
    m5, m6, m7, m8 = st.columns(4)
    m5.metric(
        "Monthly Repayment",
        "-" if math.isnan(loan.monthly_mortgage) else f"${loan.monthly_mortgage:,.0f}",
    )
    m6.metric(f"Net Cash Flow ({final.year})", "-" if math.isnan(final.net_cash_flow) else f"${final.net_cash_flow:,.0f}")
    m7.metric(f"Equity ({final.year})", "-" if math.isnan(final.equity) else f"${final.equity:,.0f}")
    m8.metric(f"ROI ({final.year})", "-" if math.isnan(final.roi) else f"{final.roi:.2f}%")
    st.caption(
        f"**Row 2** - Position at the end of {final.year}, after {len(data.projections)} "
        "projected years. Net cash flow is rent plus tax refund less repayments, strata and "
        "ongoing costs."
    )

st.divider()

# --- Tabs ---
tab_proj, tab_cash, tab_sens, tab_compare, tab_data = st.tabs([
    ":material/trending_up: Projections",
    ":material/payments: Cash Flow",
    ":material/tune: Sensitivity",
    ":material/compare_arrows: Compare",
    ":material/table_chart: Data",
])

projections = list(data.projections)

with tab_proj:
    st.plotly_chart(value_equity_chart(projections), use_container_width=True)
    st.caption(
        "Property value grows by the capital growth rate each year. Equity is the deposit "
        "plus principal repaid plus capital growth (and any rebate). An interest-only loan "
        "keeps the balance flat."
    )
    st.plotly_chart(returns_chart(projections), use_container_width=True)
    st.caption(
        "Cumulative cash spent (deposit, stamp duty, one-time costs, then repayments, strata "
        "and ongoing costs each year) against cumulative rent and tax refunds. ROI adds "
        "capital growth to the returns and compares the total with what was spent."
    )

with tab_cash:
    st.plotly_chart(cash_flow_chart(projections), use_container_width=True)
    st.caption(
        "Rental income assumes 50 rented weeks a year. When deductible costs exceed rent the "
        "loss is refunded at a flat 30% marginal rate (negative gearing). Owner-occupied "
        "properties earn no rent and get no refund."
    )

with tab_sens:
    st.caption(
        "Change one or two inputs across a range while holding everything else at the "
        "sidebar values, and see how the final projected year responds."
    )
    mode = st.radio(
        "Analysis",
        ["Single parameter", "What-if matrix"],
        horizontal=True,
        key="sens_mode",
    )

    if mode == "Single parameter":
        selected = st.selectbox("Parameter to sweep", list(SWEEP_PARAMS.keys()), key="sens_param")
        values = _range_inputs(selected, "sens", st)
        if values:
            param_path, *_, is_pct = SWEEP_PARAMS[selected]
            results = cached_sweep(partial, param_path, tuple(values))
            st.plotly_chart(sensitivity_chart(results, selected, is_pct), use_container_width=True)
            st.dataframe(sweep_dataframe(results, selected), use_container_width=True, hide_index=True)
    else:
        labels = list(SWEEP_PARAMS.keys())
        rc, cc, mc = st.columns(3)
        row_label = rc.selectbox("Rows", labels, index=labels.index("Capital Growth"), key="matrix_rows")
        col_label = cc.selectbox("Columns", labels, index=labels.index("Interest Rate"), key="matrix_cols")
        metric = mc.selectbox(
            "Metric",
            list(METRICS.keys()),
            format_func=METRICS.get,
            key="matrix_metric",
        )
        if row_label == col_label:
            st.warning("Pick two different parameters.")
        else:
            st.markdown(f"**Rows: {row_label}**")
            row_values = _range_inputs(row_label, "matrix_row", st)
            st.markdown(f"**Columns: {col_label}**")
            col_values = _range_inputs(col_label, "matrix_col", st)
            if row_values and col_values:
                result = cached_matrix(
                    partial,
                    SWEEP_PARAMS[row_label][0],
                    tuple(row_values),
                    SWEEP_PARAMS[col_label][0],
                    tuple(col_values),
                    metric,
                )
                st.plotly_chart(
                    matrix_heatmap(result, row_label, col_label), use_container_width=True
                )
                if not all(math.isnan(v) for v in result.values.flat):
                    best_row, best_col, best = result.best()
                    shown = f"{best:.2f}%" if metric == "roi" else f"${best:,.0f}"
                    st.caption(f"Best cell: {row_label} {best_row:g}, {col_label} {best_col:g} ({shown}).")

with tab_compare:
    render_compare_tab(partial)

with tab_data:
    st.subheader("Year-by-Year Breakdown")
    st.dataframe(projection_dataframe(projections), use_container_width=True, height=400)

    st.subheader("Scenario Details")
    st.dataframe(details_dataframe([("Value", data)]), use_container_width=True, hide_index=True, height=600)

    st.download_button(
        "Download Projections (CSV)", to_csv(projections), "property_projections.csv", "text/csv"
    )
