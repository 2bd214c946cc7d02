"""Output formatting for calculated scenarios."""

import csv
import io
import math

from propcalc.params import Projection, PropertyData

SECTION = None  # marker value for section header rows


def fmt(value: float) -> str:
    """Format a dollar amount; NaN shows as a dash."""
    if value is None or math.isnan(value):
        return "-"
    if abs(value) >= 1_000_000:
        return f"${value / 1_000_000:,.2f}M"
    return f"${value:,.0f}"


def fmt_pct(value: float) -> str:
    if value is None or math.isnan(value):
        return "-"
    return f"{value:.2f}%"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def summary_header(data: PropertyData) -> str:
    """Key inputs and the derived purchase costs."""
    loan = data.loan
    purpose = "Owner occupied" if data.is_living_here else "Investment"
    repayment = "interest only" if loan.is_interest_only else "P&I"
    lines = [
        "Property Scenario",
        "=" * 70,
        "",
        f"  Property:        {fmt(data.property_value)} {data.property_type} ({data.state}, {purpose})",
        f"  Deposit:         {fmt(data.deposit)}",
    ]
    if data.rebate > 0:
        lines.append(f"  Rebate:          {fmt(data.rebate)}")
    lines += [
        f"  Stamp duty:      {fmt(data.stamp_duty)}"
        + (" (first home buyer)" if data.first_home_buyer else ""),
        f"  Loan:            {fmt(loan.amount)} at {loan.interest:.2f}% over {loan.term}yr ({repayment})",
        f"  LVR / LMI:       {fmt_pct(loan.lvr)} / {fmt(loan.lmi)}",
        f"  Repayment:       {fmt(loan.monthly_mortgage)}/month",
        f"  One-time costs:  {fmt(data.expenses.one_time_total)}",
        f"  Ongoing costs:   {fmt(data.expenses.ongoing_total)}/yr",
        f"  Capital growth:  {data.capital_growth:.1f}% p.a.",
    ]
    if data.strata_fees > 0:
        lines.append(f"  Strata:          {fmt(data.strata_fees)}/qtr")
    if data.is_investment:
        lines.append(
            f"  Rent:            ${data.weekly_rent:,.0f}/wk (+${data.rental_growth:,.0f}/wk each year)"
        )
    lines.append("")
    return "\n".join(lines)


def projection_table(projections: list[Projection] | tuple[Projection, ...]) -> str:
    """Year-by-year projection table."""
    header = (
        f"{'Year':>4} | {'Value':>12} | {'Rent':>10} | {'Interest':>10} | "
        f"{'Tax Return':>10} | {'Cash Flow':>10} | {'Spent':>12} | {'Equity':>12} | {'ROI':>8}"
    )
    sep = "-" * len(header)
    lines = [header, sep]
    for p in projections:
        lines.append(
            f"{p.year:>4} | {fmt(p.property_value):>12} | {fmt(p.rental_income):>10} | "
            f"{fmt(p.annual_interest):>10} | {fmt(p.tax_return):>10} | "
            f"{fmt(p.net_cash_flow):>10} | {fmt(p.spent):>12} | {fmt(p.equity):>12} | "
            f"{fmt_pct(p.roi):>8}"
        )
    return "\n".join(lines)


def detailed_rows(data: PropertyData) -> list[tuple[str, str | None]]:
    """Label/value rows grouped into sections.

    Section headers are rows whose value is ``None``. Cash flow and net
    position figures come from the final projected year.
    """
    loan = data.loan
    ongoing = data.expenses.ongoing
    final = data.final

    rows: list[tuple[str, str | None]] = [
        ("PROPERTY DETAILS", SECTION),
        ("Property Value", fmt(data.property_value)),
        ("Deposit", fmt(data.deposit)),
        ("Property Type", data.property_type or "-"),
        ("State", data.state),
        ("First Home Buyer", _yes_no(data.first_home_buyer)),
        ("Living Here", _yes_no(data.is_living_here)),
        ("Brand New", _yes_no(data.is_brand_new)),
        ("Stamp Duty", fmt(data.stamp_duty)),
        ("Rebate", fmt(data.rebate)),
        ("LOAN DETAILS", SECTION),
        ("Loan Amount", fmt(loan.amount)),
        ("Loan Term", f"{loan.term} years"),
        ("Interest Rate", fmt_pct(loan.interest)),
        ("Interest Only", _yes_no(loan.is_interest_only)),
        ("LVR", fmt_pct(loan.lvr)),
        ("LMI", fmt(loan.lmi)),
        ("Monthly Mortgage", fmt(loan.monthly_mortgage)),
        ("EXPENSES", SECTION),
        ("One-time Total", fmt(data.expenses.one_time_total)),
        ("Council Rates", fmt(ongoing.council)),
        ("Water", fmt(ongoing.water)),
        ("Land Tax", fmt(ongoing.land_tax)),
        ("Insurance", fmt(ongoing.insurance)),
        ("Property Manager", fmt(ongoing.property_manager)),
        ("Maintenance", fmt(ongoing.maintenance)),
        ("Ongoing Total", fmt(data.expenses.ongoing_total)),
        ("Strata Fees", f"{fmt(data.strata_fees)}/qtr"),
    ]
    if final is None:
        return rows

    rows += [
        (f"CASH FLOW ({final.year})", SECTION),
        ("Rent (pw)", fmt(final.weekly_rent)),
        ("Rental Income", fmt(final.rental_income)),
        ("Interest Paid", fmt(final.annual_interest)),
        ("Tax Deductions", fmt(final.taxable_amount)),
        ("Tax Return", fmt(final.tax_return)),
        ("Net Cash Flow", fmt(final.net_cash_flow)),
        (f"NET POSITION ({final.year})", SECTION),
        ("Rental Growth", f"${data.rental_growth:,.0f}/wk per year"),
        ("Capital Growth", f"{data.capital_growth:.1f}%"),
        ("Property Value", fmt(final.property_value)),
        ("Loan Balance", fmt(final.loan_balance)),
        ("Total Spent", fmt(final.spent)),
        ("Equity", fmt(final.equity)),
        ("Returns", fmt(final.returns)),
        ("ROI", fmt_pct(final.roi)),
    ]
    return rows


def detailed_table(data: PropertyData) -> str:
    lines = []
    for label, value in detailed_rows(data):
        if value is SECTION:
            lines.append("")
            lines.append(label)
        else:
            lines.append(f"  {label:<20} {value:>16}")
    return "\n".join(lines).lstrip("\n")


def comparison_table(scenarios: list[tuple[str, PropertyData]]) -> str:
    """Side-by-side detailed rows for several scenarios."""
    columns = [(name, detailed_rows(data)) for name, data in scenarios]
    if not columns:
        return ""
    width = max(16, *(len(name) for name, _ in columns))
    header = f"{'':<20} | " + " | ".join(f"{name:>{width}}" for name, _ in columns)
    lines = [header, "-" * len(header)]
    for i, (label, value) in enumerate(columns[0][1]):
        if value is SECTION:
            lines.append(label)
            continue
        cells = []
        for _, rows in columns:
            cell = rows[i][1] if i < len(rows) else ""
            cells.append(f"{cell:>{width}}")
        lines.append(f"{label:<20} | " + " | ".join(cells))
    return "\n".join(lines)


def to_csv(projections: list[Projection] | tuple[Projection, ...]) -> str:
    """Export projections to CSV string."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "year", "property_value", "weekly_rent", "rental_income",
        "annual_interest", "annual_principal", "loan_balance",
        "taxable_amount", "tax_return", "net_cash_flow",
        "spent", "equity", "returns", "roi",
    ])
    for p in projections:
        writer.writerow([
            p.year, f"{p.property_value:.2f}", f"{p.weekly_rent:.2f}",
            f"{p.rental_income:.2f}", f"{p.annual_interest:.2f}",
            f"{p.annual_principal:.2f}", f"{p.loan_balance:.2f}",
            f"{p.taxable_amount:.2f}", f"{p.tax_return:.2f}",
            f"{p.net_cash_flow:.2f}", f"{p.spent:.2f}", f"{p.equity:.2f}",
            f"{p.returns:.2f}", f"{p.roi:.2f}",
        ])
    return output.getvalue()


def comparison_csv(scenarios: list[tuple[str, PropertyData]]) -> str:
    """Detailed rows as CSV, one column per scenario.

    Section headers get a row of their own with empty cells.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Metric", *(name for name, _ in scenarios)])
    columns = [detailed_rows(data) for _, data in scenarios]
    if not columns:
        return output.getvalue()
    for i, (label, value) in enumerate(columns[0]):
        if value is SECTION:
            writer.writerow([label, *("" for _ in columns)])
        else:
            writer.writerow([label, *(rows[i][1] if i < len(rows) else "" for rows in columns)])
    return output.getvalue()


def full_report(data: PropertyData, errors: dict[str, str] | None = None) -> str:
    """Generate a complete summary report."""
    parts = [summary_header(data)]
    if errors:
        parts.append("Input warnings:")
        parts.extend(f"  - {message}" for message in errors.values())
        parts.append("")
    parts.append(projection_table(data.projections))

    final = data.final
    if final is not None:
        parts.append("")
        if math.isnan(final.equity):
            parts.append("Loan cannot be insured at this LVR; results are undefined.")
        else:
            parts.append(
                f"After {len(data.projections)} years: equity {fmt(final.equity)}, "
                f"total spent {fmt(final.spent)}, ROI {fmt_pct(final.roi)}"
            )
    return "\n".join(parts)
