"""Tests for the negative gearing tax engine."""

import math

import pytest
from propcalc.tax import (
    calculate_depreciation,
    calculate_tax_return,
    calculate_taxable_cost,
)


class TestDepreciation:
    def test_two_and_a_half_percent(self):
        assert calculate_depreciation(600_000) == 15_000

    def test_rounded(self):
        assert calculate_depreciation(123_457) == 3_086  # 3,086.425


class TestTaxableCost:
    def test_loss(self):
        cost = calculate_taxable_cost(
            annual_interest=24_000.40,
            one_time_expenses=0,
            ongoing_expenses=6_500,
            strata_annual=6_000,
            depreciation=15_000,
            rental_income=30_000,
        )
        assert cost == pytest.approx(21_500)

    def test_interest_rounded_to_dollars(self):
        cost = calculate_taxable_cost(100.50, 0, 0, 0, 0, 0)
        assert cost == 101

    def test_one_time_included_when_passed(self):
        base = calculate_taxable_cost(20_000, 0, 5_000, 0, 10_000, 30_000)
        first_year = calculate_taxable_cost(20_000, 3_851, 5_000, 0, 10_000, 30_000)
        assert first_year - base == 3_851

    def test_profit_is_negative(self):
        assert calculate_taxable_cost(10_000, 0, 1_000, 0, 0, 50_000) < 0


class TestTaxReturn:
    def test_thirty_percent_of_loss(self):
        assert calculate_tax_return(21_500) == 6_450

    def test_rounded(self):
        assert calculate_tax_return(22_851) == 6_855  # 6,855.30

    def test_no_refund_on_profit(self):
        assert calculate_tax_return(-5_000) == 0.0
        assert calculate_tax_return(0) == 0.0

    def test_nan_propagates(self):
        assert math.isnan(calculate_tax_return(float("nan")))
