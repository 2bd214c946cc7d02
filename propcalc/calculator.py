"""Single entry point: turn partial user input into a calculated scenario."""

import logging
import math
from dataclasses import replace
from typing import Mapping

from propcalc.defaults import (
    DEFAULT_CAPITAL_GROWTH,
    DEFAULT_PROJECTION_YEARS,
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_RENTAL_GROWTH,
    DEFAULT_STATE,
    DEFAULT_STRATA_FEES,
    DEFAULT_WEEKLY_RENT,
    MAX_PROJECTION_YEARS,
    STATES,
)
from propcalc.expenses import calculate_expenses
from propcalc.loan import calculate_loan_details
from propcalc.model import ProjectionParams, calculate_multi_year_projections, current_year
from propcalc.money import to_amount, to_mapping, to_number
from propcalc.params import PropertyData
from propcalc.stamp_duty import calculate_stamp_duty

logger = logging.getLogger(__name__)


def _normalize_state(value: object) -> str:
    if value is None:
        return DEFAULT_STATE
    code = str(value).strip().upper()
    if code not in STATES:
        logger.warning("Unknown state %r, defaulting to %s", value, DEFAULT_STATE)
        return DEFAULT_STATE
    return code


def _normalize_property_type(value: object) -> str:
    # "" is kept so validation can report that nothing was selected
    if value is None:
        return DEFAULT_PROPERTY_TYPE
    return str(value).strip().lower()


def _normalize_year(value: object) -> int:
    year = to_number(value, default=math.nan)
    if math.isnan(year):
        return current_year()
    return math.trunc(year)


def _normalize_horizon(value: object) -> int:
    years = math.trunc(to_amount(value, DEFAULT_PROJECTION_YEARS))
    return min(max(years, 1), MAX_PROJECTION_YEARS)


def calculate_property_data(partial: Mapping | PropertyData | None = None) -> PropertyData:
    """Calculate a complete scenario from whatever the user has entered.

    Missing fields take their defaults and unusable numbers (negative,
    NaN, non-numeric) are coerced, so this never raises. Derived values
    (stamp duty, loan structure, expense totals, projections) are always
    recomputed from the inputs. Feeding ``result.as_partial()`` back in
    returns an identical result.
    """
    if isinstance(partial, PropertyData):
        partial = partial.as_partial()
    data = to_mapping(partial, "scenario")

    property_value = to_amount(data.get("property_value"))
    deposit = to_amount(data.get("deposit"))
    first_home_buyer = bool(data.get("first_home_buyer", False))
    is_living_here = bool(data.get("is_living_here", False))
    property_type = _normalize_property_type(data.get("property_type"))
    state = _normalize_state(data.get("state"))
    is_land = property_type == "land"
    is_investment = not is_living_here

    weekly_rent = to_amount(data.get("weekly_rent"), DEFAULT_WEEKLY_RENT)
    rental_growth = to_number(data.get("rental_growth"), DEFAULT_RENTAL_GROWTH)
    strata_fees = to_amount(data.get("strata_fees"), DEFAULT_STRATA_FEES)
    capital_growth = to_number(data.get("capital_growth"), DEFAULT_CAPITAL_GROWTH)
    rebate = to_amount(data.get("rebate"))
    start_year = _normalize_year(data.get("start_year"))
    projection_years = _normalize_horizon(data.get("projection_years"))

    stamp_duty = calculate_stamp_duty(property_value, first_home_buyer, is_land, state)
    loan = calculate_loan_details(property_value, deposit, stamp_duty, data.get("loan"))
    expenses = calculate_expenses(data.get("expenses"), is_land, is_investment, state)

    result = PropertyData(
        property_value=property_value,
        deposit=deposit,
        first_home_buyer=first_home_buyer,
        is_living_here=is_living_here,
        property_type=property_type,
        is_brand_new=bool(data.get("is_brand_new", False)),
        state=state,
        loan=loan,
        weekly_rent=weekly_rent,
        rental_growth=rental_growth,
        strata_fees=strata_fees,
        capital_growth=capital_growth,
        rebate=rebate,
        start_year=start_year,
        projection_years=projection_years,
        stamp_duty=stamp_duty,
        expenses=expenses,
    )

    projections = calculate_multi_year_projections(
        ProjectionParams(
            property_value=property_value,
            deposit=deposit,
            stamp_duty=stamp_duty,
            include_stamp_duty=loan.include_stamp_duty,
            loan_amount=loan.amount,
            interest=loan.interest,
            term=loan.term,
            is_interest_only=loan.is_interest_only,
            monthly_mortgage=loan.monthly_mortgage,
            weekly_rent=weekly_rent,
            rental_growth=rental_growth,
            strata_annual=result.strata_annual,
            one_time_expenses=expenses.one_time_total,
            ongoing_expenses=expenses.ongoing_total,
            capital_growth=capital_growth,
            is_investment=is_investment,
            rebate=rebate,
            start_year=start_year,
            years=projection_years,
        )
    )
    logger.debug(
        "Calculated %s %s at %.0f: duty %.2f, loan %.2f, %d projected years",
        state,
        property_type,
        property_value,
        stamp_duty,
        loan.amount,
        len(projections),
    )
    return replace(result, projections=tuple(projections))
