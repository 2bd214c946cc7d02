"""Tests for user-facing input validation."""

from dataclasses import replace

import pytest
from propcalc.calculator import calculate_property_data
from propcalc.params import LoanDetails, PropertyData
from propcalc.validation import MESSAGES, validate_property_data


def _valid() -> PropertyData:
    return calculate_property_data({
        "property_value": 600_000,
        "deposit": 120_000,
        "property_type": "apartment",
        "loan": {"interest": 6, "term": 30},
    })


class TestValidation:
    def test_valid_scenario(self):
        assert validate_property_data(_valid()) == {}

    def test_missing_value_and_deposit(self):
        errors = validate_property_data(calculate_property_data())
        assert errors["property_value"] == "Enter or select a valid property value."
        assert errors["deposit"] == "Enter or select a valid deposit."
        assert "deposit_too_big" not in errors

    def test_deposit_too_big(self):
        errors = validate_property_data(replace(_valid(), deposit=700_000))
        assert errors == {"deposit_too_big": "Deposit cannot exceed property value."}

    def test_property_type(self):
        errors = validate_property_data(replace(_valid(), property_type=""))
        assert errors == {"property_type": "Select a property type."}

    @pytest.mark.parametrize("term", [0, 51])
    def test_loan_term(self, term):
        data = replace(_valid(), loan=replace(_valid().loan, term=term))
        assert validate_property_data(data) == {"loan_term": MESSAGES["loan_term"]}

    @pytest.mark.parametrize("interest", [0, -1, 20.5])
    def test_loan_interest(self, interest):
        data = replace(_valid(), loan=replace(_valid().loan, interest=interest))
        assert validate_property_data(data) == {
            "loan_interest": "Interest rate must be between 0% and 20%."
        }

    def test_growth_ranges(self):
        errors = validate_property_data(replace(_valid(), capital_growth=25, rental_growth=-10))
        assert set(errors) == {"capital_growth", "rental_growth"}

    def test_uninsurable_lvr(self):
        data = calculate_property_data({"property_value": 600_000, "deposit": 12_000})
        assert "lvr" in validate_property_data(data)

    def test_at_most_nine_fields(self):
        data = PropertyData(
            property_value=float("nan"),
            deposit=-1,
            property_type="castle",
            capital_growth=99,
            rental_growth=999,
            loan=LoanDetails(term=0, interest=0, lmi=float("nan")),
        )
        errors = validate_property_data(data)
        assert len(errors) <= 9
        assert set(errors) <= set(MESSAGES)

    def test_calculation_not_blocked(self):
        data = calculate_property_data({"property_value": 500_000, "deposit": 600_000})
        assert "deposit_too_big" in validate_property_data(data)
        assert len(data.projections) == 5
