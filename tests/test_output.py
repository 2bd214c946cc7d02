"""Tests for report and CSV formatting."""

import csv
import io

from propcalc.calculator import calculate_property_data
from propcalc.output import (
    SECTION,
    comparison_csv,
    comparison_table,
    detailed_rows,
    fmt,
    full_report,
    summary_header,
    to_csv,
)
from propcalc.validation import validate_property_data


def _scenario(**overrides):
    data = {"property_value": 600_000, "deposit": 120_000, "start_year": 2025}
    data.update(overrides)
    return calculate_property_data(data)


class TestFmt:
    def test_dollars(self):
        assert fmt(21_412) == "$21,412"

    def test_millions(self):
        assert fmt(1_250_000) == "$1.25M"

    def test_nan(self):
        assert fmt(float("nan")) == "-"


class TestDetailedRows:
    def test_sections(self):
        sections = [label for label, value in detailed_rows(_scenario()) if value is SECTION]
        assert sections == [
            "PROPERTY DETAILS",
            "LOAN DETAILS",
            "EXPENSES",
            "CASH FLOW (2029)",
            "NET POSITION (2029)",
        ]

    def test_values(self):
        rows = dict(detailed_rows(_scenario()))
        assert rows["Stamp Duty"] == "$21,412"
        assert rows["LVR"] == "80.00%"
        assert rows["Living Here"] == "No"


class TestCsv:
    def test_projection_csv(self):
        data = _scenario()
        rows = list(csv.reader(io.StringIO(to_csv(data.projections))))
        assert rows[0][0] == "year"
        assert len(rows) == 1 + len(data.projections)
        assert rows[1][0] == "2025"

    def test_comparison_csv(self):
        scenarios = [("Sydney", _scenario()), ('Melbourne, "inner"', _scenario(state="VIC"))]
        rows = list(csv.reader(io.StringIO(comparison_csv(scenarios))))
        assert rows[0] == ["Metric", "Sydney", 'Melbourne, "inner"']
        assert rows[1] == ["PROPERTY DETAILS", "", ""]
        by_label = {row[0]: row[1:] for row in rows}
        assert by_label["State"] == ["NSW", "VIC"]


class TestReports:
    def test_comparison_table_has_each_scenario(self):
        table = comparison_table([("A", _scenario()), ("B", _scenario(deposit=60_000))])
        assert "A" in table.splitlines()[0]
        assert "B" in table.splitlines()[0]

    def test_full_report_lists_warnings(self):
        data = _scenario(deposit=700_000)
        report = full_report(data, validate_property_data(data))
        assert "Deposit cannot exceed property value." in report

    def test_uninsurable_report(self):
        data = _scenario(deposit=10_000)
        assert "cannot be insured" in full_report(data)


class TestSummaryHeader:
    def test_optional_lines_in_order(self):
        data = _scenario(rebate=10_000, strata_fees=1_200)
        labels = [line.split(":")[0].strip() for line in summary_header(data).splitlines() if ":" in line]
        assert labels == [
            "Property",
            "Deposit",
            "Rebate",
            "Stamp duty",
            "Loan",
            "LVR / LMI",
            "Repayment",
            "One-time costs",
            "Ongoing costs",
            "Capital growth",
            "Strata",
            "Rent",
        ]

    def test_owner_occupier_without_extras(self):
        data = _scenario(is_living_here=True, strata_fees=0)
        lines = summary_header(data).splitlines()
        assert lines[4].startswith("  Deposit:")
        assert lines[5].startswith("  Stamp duty:")
        assert lines[-1].startswith("  Capital growth:")
        assert not any(line.lstrip().startswith(("Rebate", "Strata", "Rent")) for line in lines)
