"""Tests for expense normalisation and visibility rules."""

import pytest
from propcalc.expenses import (
    calculate_expenses,
    calculate_ongoing_expenses,
    government_fee,
    is_category_visible,
)
from propcalc.params import Expenses, OngoingExpenses


class TestGovernmentFee:
    def test_nsw(self):
        assert government_fee("NSW") == pytest.approx(351.40)

    def test_qld(self):
        assert government_fee("qld") == pytest.approx(476.28)

    def test_unknown_state_uses_nsw(self):
        assert government_fee("XX") == government_fee("NSW")


class TestVisibility:
    def test_investment_house_counts_everything(self):
        assert calculate_ongoing_expenses(OngoingExpenses(), is_land=False, is_investment=True) == 6_500

    def test_owner_occupier_has_no_property_manager(self):
        assert calculate_ongoing_expenses(OngoingExpenses(), is_land=False, is_investment=False) == 5_000

    def test_land_has_no_water_insurance_or_manager(self):
        # council + land tax + maintenance
        assert calculate_ongoing_expenses(OngoingExpenses(), is_land=True, is_investment=True) == 3_700
        assert calculate_ongoing_expenses(OngoingExpenses(), is_land=True, is_investment=False) == 3_700

    def test_land_tax_always_counts(self):
        assert is_category_visible("land_tax", is_land=False, is_investment=False)
        assert is_category_visible("land_tax", is_land=True, is_investment=True)


class TestCalculateExpenses:
    def test_defaults(self):
        expenses = calculate_expenses(None, is_land=False, is_investment=True, state="NSW")
        assert expenses.one_time == 3_500
        assert expenses.one_time_total == 3_851  # 3,500 + 351.40
        assert expenses.ongoing == OngoingExpenses()
        assert expenses.ongoing_total == 6_500

    def test_one_time_total_rounded(self):
        assert calculate_expenses({}, False, True, "VIC").one_time_total == 3_772  # 3,771.60

    def test_partial_ongoing_merged_over_defaults(self):
        expenses = calculate_expenses({"ongoing": {"council": 2_000}}, False, True, "NSW")
        assert expenses.ongoing.council == 2_000
        assert expenses.ongoing.water == 800
        assert expenses.ongoing_total == 7_300

    def test_invalid_amounts_coerced(self):
        raw = {"one_time": -5, "ongoing": {"council": -1, "water": None, "insurance": "abc"}}
        expenses = calculate_expenses(raw, False, True, "NSW")
        assert expenses.one_time == 0
        assert expenses.ongoing.council == 0
        assert expenses.ongoing.water == 800
        assert expenses.ongoing.insurance == 0

    def test_amounts_kept_to_the_cent(self):
        raw = {"one_time": 8_601.043468, "ongoing": {"council": 1_234.5678}}
        expenses = calculate_expenses(raw, False, True, "NSW")
        assert expenses.one_time == 8_601.04
        assert expenses.ongoing.council == 1_234.57

    def test_sections_not_mappings(self):
        assert calculate_expenses("abc", False, True, "NSW") == calculate_expenses({}, False, True, "NSW")
        assert calculate_expenses({"ongoing": 5}, False, True, "NSW").ongoing == OngoingExpenses()

    def test_recalculating_does_not_add_fee_twice(self):
        first = calculate_expenses({}, False, True, "NSW")
        again = calculate_expenses(first, False, True, "NSW")
        assert again == first

    def test_returns_new_instance(self):
        first = Expenses()
        result = calculate_expenses(first, True, True, "NSW")
        assert result is not first
        assert first.ongoing_total == 0.0
