"""Tests for the multi-year projection engine."""

import math

import pytest
from propcalc.calculator import calculate_property_data
from propcalc.model import ProjectionParams, calculate_multi_year_projections


def _investor(**overrides) -> dict:
    """$500k NSW investment house, 20% deposit, 6% interest-only loan."""
    data = {
        "property_value": 500_000,
        "deposit": 100_000,
        "state": "NSW",
        "property_type": "house",
        "loan": {"interest": 6, "is_interest_only": True},
        "start_year": 2025,
    }
    data.update(overrides)
    return data


def _params(**overrides) -> ProjectionParams:
    values = dict(
        property_value=500_000,
        deposit=100_000,
        stamp_duty=16_912,
        include_stamp_duty=False,
        loan_amount=400_000,
        interest=6,
        term=30,
        is_interest_only=True,
        monthly_mortgage=2_000,
        weekly_rent=600,
        rental_growth=30,
        strata_annual=6_000,
        one_time_expenses=3_851,
        ongoing_expenses=6_500,
        capital_growth=3,
        is_investment=True,
        start_year=2025,
    )
    values.update(overrides)
    return ProjectionParams(**values)


class TestInvestorProjection:
    def test_first_year(self):
        p = calculate_property_data(_investor()).projections[0]
        assert p.year == 2025
        assert p.weekly_rent == 600
        assert p.rental_income == 30_000  # 50 rented weeks
        assert p.property_value == 515_000
        assert p.annual_interest == pytest.approx(24_000)
        assert p.annual_principal == 0.0
        assert p.loan_balance == 400_000
        # 24,000 interest + 3,851 one-time + 6,500 ongoing + 6,000 strata
        # + 12,500 depreciation - 30,000 rent
        assert p.taxable_amount == pytest.approx(22_851)
        assert p.tax_return == 6_855
        # 100,000 deposit + 3,851 one-time + 16,912 duty, plus a year of
        # 24,000 mortgage + 6,000 strata + 6,500 ongoing
        assert p.spent == pytest.approx(157_263)
        assert p.equity == pytest.approx(115_000)
        assert p.returns == pytest.approx(36_855)
        assert p.roi == pytest.approx(-67.03)
        assert p.net_cash_flow == pytest.approx(-3_496)

    def test_second_year(self):
        p = calculate_property_data(_investor()).projections[1]
        assert p.year == 2026
        assert p.weekly_rent == 630
        assert p.rental_income == 31_500
        assert p.property_value == 530_450
        assert p.taxable_amount == pytest.approx(17_500)
        assert p.tax_return == 5_250
        assert p.spent == pytest.approx(193_763)
        assert p.equity == pytest.approx(130_450)
        assert p.returns == pytest.approx(73_605)
        assert p.roi == pytest.approx(-46.30)
        assert p.net_cash_flow == pytest.approx(250)

    def test_engine_matches_calculator(self):
        direct = calculate_multi_year_projections(_params())
        via_calculator = calculate_property_data(_investor()).projections
        assert tuple(direct) == via_calculator

    def test_five_years_by_default(self):
        projections = calculate_property_data(_investor()).projections
        assert [p.year for p in projections] == [2025, 2026, 2027, 2028, 2029]

    def test_custom_horizon(self):
        projections = calculate_property_data(_investor(projection_years=10)).projections
        assert len(projections) == 10
        assert projections[-1].year == 2034

    def test_principal_and_interest_builds_equity(self):
        data = calculate_property_data(_investor(loan={"interest": 6}))
        balances = [p.loan_balance for p in data.projections]
        assert balances == sorted(balances, reverse=True)
        assert all(p.annual_principal > 0 for p in data.projections)


class TestCapitalGrowth:
    def test_compounds_every_year(self):
        data = calculate_property_data({"property_value": 500_000, "capital_growth": 3})
        assert data.projections[4].property_value == round(500_000 * 1.03**5)

    def test_zero_growth(self):
        data = calculate_property_data({"property_value": 500_000, "capital_growth": 0})
        assert all(p.property_value == 500_000 for p in data.projections)

    def test_negative_growth(self):
        data = calculate_property_data({"property_value": 500_000, "capital_growth": -2})
        assert data.projections[0].property_value == 490_000


class TestOwnerOccupied:
    def test_no_rent_or_tax(self):
        data = calculate_property_data(_investor(is_living_here=True))
        for p in data.projections:
            assert p.rental_income == 0
            assert p.weekly_rent == 0
            assert p.tax_return == 0
            assert p.taxable_amount == 0

    def test_roi_from_capital_growth_only(self):
        data = calculate_property_data(_investor(is_living_here=True))
        p = data.projections[0]
        assert p.returns == 0
        growth = p.property_value - 500_000
        assert p.roi == pytest.approx((growth - p.spent) / p.spent * 100, abs=0.01)


class TestUpfrontCosts:
    def test_rebate_reduces_spend_not_equity(self):
        base = calculate_property_data(_investor()).projections[0]
        rebated = calculate_property_data(_investor(rebate=10_000)).projections[0]
        assert base.spent - rebated.spent == pytest.approx(10_000)
        assert rebated.equity == pytest.approx(base.equity)

    def test_financed_stamp_duty_not_spent_upfront(self):
        params = _params(include_stamp_duty=True)
        financed = calculate_multi_year_projections(params)[0]
        paid = calculate_multi_year_projections(_params())[0]
        assert paid.spent - financed.spent == pytest.approx(16_912)

    def test_one_time_costs_only_in_first_year(self):
        projections = calculate_multi_year_projections(_params(rental_growth=0))
        assert projections[0].net_cash_flow < projections[1].net_cash_flow
        assert projections[1].net_cash_flow == projections[2].net_cash_flow


class TestUninsurableLoan:
    def test_nan_flows_into_projection(self):
        data = calculate_property_data(_investor(deposit=10_000))
        p = data.projections[0]
        assert math.isnan(p.spent)
        assert math.isnan(p.equity)
        assert math.isnan(p.roi)
        assert math.isnan(p.net_cash_flow)
        assert math.isnan(p.loan_balance)
        # property value does not depend on the loan
        assert p.property_value == 515_000


class TestNoSpend:
    def test_roi_zero_when_nothing_spent(self):
        params = _params(
            deposit=0, stamp_duty=0, loan_amount=0, monthly_mortgage=0,
            strata_annual=0, one_time_expenses=0, ongoing_expenses=0,
            is_investment=False,
        )
        assert all(p.roi == 0 for p in calculate_multi_year_projections(params))
