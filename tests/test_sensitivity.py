"""Tests for one-parameter sweeps and the what-if matrix."""

import pytest
from propcalc.calculator import calculate_property_data
from propcalc.sensitivity import (
    format_matrix,
    format_sweep,
    frange,
    set_nested,
    sweep,
    what_if_matrix,
)

BASE = {"property_value": 600_000, "deposit": 120_000, "start_year": 2025}


class TestSetNested:
    def test_copy_not_mutated(self):
        original = {"loan": {"interest": 6}}
        updated = set_nested(original, "loan.interest", 7)
        assert updated["loan"]["interest"] == 7
        assert original["loan"]["interest"] == 6

    def test_creates_sections(self):
        assert set_nested({}, "expenses.ongoing.council", 10) == {"expenses": {"ongoing": {"council": 10}}}

    def test_scalar_in_path(self):
        with pytest.raises(ValueError):
            set_nested({"loan": 6}, "loan.interest", 7)


class TestSweep:
    def test_higher_rate_higher_repayment(self):
        results = sweep(BASE, "loan.interest", [5, 6, 7])
        repayments = [r.monthly_mortgage for r in results]
        assert repayments == sorted(repayments)
        assert repayments[0] < repayments[-1]

    def test_growth_raises_equity(self):
        results = sweep(BASE, "capital_growth", [0, 3, 6])
        equity = [r.final_equity for r in results]
        assert equity[0] < equity[1] < equity[2]

    def test_value_changes_stamp_duty(self):
        results = sweep(BASE, "property_value", [500_000, 600_000])
        assert results[1].stamp_duty == 21_412

    def test_matches_direct_calculation(self):
        [result] = sweep(BASE, "capital_growth", [5])
        direct = calculate_property_data({**BASE, "capital_growth": 5})
        assert result.final_roi == direct.projections[-1].roi

    def test_accepts_property_data(self):
        base = calculate_property_data(BASE)
        assert sweep(base, "capital_growth", [3])[0].final_equity == base.projections[-1].equity

    def test_unknown_param(self):
        with pytest.raises(ValueError, match="Unknown parameter"):
            sweep(BASE, "loan.colour", [1])

    def test_format(self):
        text = format_sweep("loan.interest", sweep(BASE, "loan.interest", [5, 6]))
        assert "5.00%" in text
        assert "6.00%" in text


class TestWhatIfMatrix:
    def test_shape_and_order(self):
        result = what_if_matrix(BASE, "capital_growth", [2, 5], "loan.interest", [5, 6, 7], metric="equity")
        assert result.values.shape == (2, 3)
        # more growth, more equity
        assert (result.values[1] > result.values[0]).all()

    def test_cells_match_direct_calculation(self):
        result = what_if_matrix(BASE, "capital_growth", [4], "loan.interest", [6.5])
        direct = calculate_property_data({**BASE, "capital_growth": 4, "loan": {"interest": 6.5}})
        assert result.values[0, 0] == direct.projections[-1].roi

    def test_best_cell(self):
        result = what_if_matrix(BASE, "capital_growth", [2, 8], "loan.interest", [5, 7])
        row, col, _ = result.best()
        assert (row, col) == (8, 5)

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            what_if_matrix(BASE, "capital_growth", [2], "loan.interest", [5], metric="vibes")

    def test_format(self):
        result = what_if_matrix(BASE, "capital_growth", [2, 4], "loan.interest", [5, 6])
        lines = format_matrix(result).splitlines()
        assert lines[0].startswith("ROI (%)")
        assert len(lines) == 3 + 2


class TestFrange:
    def test_inclusive(self):
        assert frange(5, 7, 0.5) == [5.0, 5.5, 6.0, 6.5, 7.0]

    def test_float_steps(self):
        assert frange(0.1, 0.3, 0.1) == [0.1, 0.2, 0.3]

    def test_bad_step(self):
        with pytest.raises(ValueError):
            frange(1, 2, 0)
