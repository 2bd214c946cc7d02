"""DataFrame formatters for the dashboard data tables."""

import pandas as pd

from propcalc.output import SECTION, detailed_rows
from propcalc.params import Projection, PropertyData
from propcalc.sensitivity import SweepResult


def projection_dataframe(projections: list[Projection]):
    """Convert projections to a display-ready (styled) DataFrame."""
    rows = []
    for p in projections:
        rows.append(
            {
                "Year": p.year,
                "Property Value": p.property_value,
                "Rent (pw)": p.weekly_rent,
                "Rental Income": p.rental_income,
                "Interest": p.annual_interest,
                "Principal": p.annual_principal,
                "Loan Bal.": p.loan_balance,
                "Deductions": p.taxable_amount,
                "Tax Return": p.tax_return,
                "Net Cash Flow": p.net_cash_flow,
                "Spent": p.spent,
                "Equity": p.equity,
                "Returns": p.returns,
                "ROI": p.roi,
            }
        )
    df = pd.DataFrame(rows)
    return df.style.format(
        {
            col: "${:,.0f}"
            for col in df.columns
            if col not in ("Year", "ROI")
        },
        na_rep="-",
    ).format({"ROI": "{:.2f}%"}, na_rep="-")


def details_dataframe(scenarios: list[tuple[str, PropertyData]]) -> pd.DataFrame:
    """Detailed rows, one column per scenario. Section headers become blank rows."""
    columns = {name: detailed_rows(data) for name, data in scenarios}
    if not columns:
        return pd.DataFrame()
    table: dict[str, list[str]] = {"Metric": []}
    table.update({name: [] for name in columns})
    first = next(iter(columns.values()))
    for i, (label, value) in enumerate(first):
        table["Metric"].append(label)
        for name, rows in columns.items():
            cell = rows[i][1] if i < len(rows) else ""
            table[name].append("" if value is SECTION else cell)
    return pd.DataFrame(table)


def sweep_dataframe(results: list[SweepResult], param_name: str) -> pd.DataFrame:
    """Sweep results with one row per tested value."""
    df = pd.DataFrame(
        [
            {
                param_name: r.param_value,
                "Stamp Duty": r.stamp_duty,
                "Monthly Repayment": r.monthly_mortgage,
                "Final Equity": r.final_equity,
                "Final Cash Flow": r.final_net_cash_flow,
                "Final ROI": r.final_roi,
            }
            for r in results
        ]
    )
    return df
