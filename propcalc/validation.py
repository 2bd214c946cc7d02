"""User-facing input checks.

Validation never blocks calculation: the calculator always produces a
result and these messages are shown alongside it.
"""

import math

from propcalc.defaults import MAX_LOAN_TERM, MIN_LOAN_TERM, PROPERTY_TYPES
from propcalc.params import PropertyData

MAX_INTEREST_RATE = 20
CAPITAL_GROWTH_RANGE = (-10, 20)
RENTAL_GROWTH_RANGE = (0, 200)

MESSAGES = {
    "property_value": "Enter or select a valid property value.",
    "deposit": "Enter or select a valid deposit.",
    "deposit_too_big": "Deposit cannot exceed property value.",
    "property_type": "Select a property type.",
    "loan_term": f"Loan term must be between {MIN_LOAN_TERM} and {MAX_LOAN_TERM} years.",
    "loan_interest": f"Interest rate must be between 0% and {MAX_INTEREST_RATE}%.",
    "capital_growth": (
        f"Capital growth must be between {CAPITAL_GROWTH_RANGE[0]}% and {CAPITAL_GROWTH_RANGE[1]}%."
    ),
    "rental_growth": (
        f"Rental growth must be between ${RENTAL_GROWTH_RANGE[0]} and "
        f"${RENTAL_GROWTH_RANGE[1]} per week."
    ),
    "lvr": "LVR above 95% cannot be insured; increase the deposit.",
}


def _require(errors: dict[str, str], condition: bool, field: str) -> None:
    if not condition:
        errors[field] = MESSAGES[field]


def _valid_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _in_range(value: object, low: float, high: float) -> bool:
    return _valid_number(value) and low <= value <= high


def validate_property_data(data: PropertyData) -> dict[str, str]:
    """Return a message per invalid field; an empty dict means all clear."""
    errors: dict[str, str] = {}

    value_ok = _valid_number(data.property_value) and data.property_value > 0
    deposit_ok = _valid_number(data.deposit) and data.deposit > 0
    _require(errors, value_ok, "property_value")
    _require(errors, deposit_ok, "deposit")
    if value_ok and deposit_ok:
        _require(errors, data.deposit <= data.property_value, "deposit_too_big")
    _require(errors, data.property_type in PROPERTY_TYPES, "property_type")

    _require(errors, _in_range(data.loan.term, MIN_LOAN_TERM, MAX_LOAN_TERM), "loan_term")
    _require(
        errors,
        _valid_number(data.loan.interest) and 0 < data.loan.interest <= MAX_INTEREST_RATE,
        "loan_interest",
    )
    _require(errors, _in_range(data.capital_growth, *CAPITAL_GROWTH_RANGE), "capital_growth")
    _require(errors, _in_range(data.rental_growth, *RENTAL_GROWTH_RANGE), "rental_growth")
    # calculate_lmi reports an uninsurable LVR as NaN
    _require(errors, _valid_number(data.loan.lmi), "lvr")

    return errors
