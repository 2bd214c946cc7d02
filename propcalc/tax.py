"""Negative gearing: deductible costs and the resulting tax refund.

The investor is assumed to sit in a single marginal bracket, so a net
rental loss is refunded at that rate and a net profit attracts no refund.
"""

import math

from propcalc.defaults import (
    DEFAULT_DEPRECIATION_RATE,
    DEFAULT_TAX_BRACKET,
)
from propcalc.money import round_dollars


def calculate_depreciation(property_value: float) -> float:
    """Annual depreciation claim on the purchase price."""
    return round_dollars(property_value * DEFAULT_DEPRECIATION_RATE)


def calculate_taxable_cost(
    annual_interest: float,
    one_time_expenses: float,
    ongoing_expenses: float,
    strata_annual: float,
    depreciation: float,
    rental_income: float,
) -> float:
    """Deductible costs less rental income for one year.

    Positive means a net loss that can be offset against other income.
    Pass ``one_time_expenses`` only for the purchase year.
    """
    return (
        round_dollars(annual_interest)
        + one_time_expenses
        + ongoing_expenses
        + strata_annual
        + depreciation
        - rental_income
    )


def calculate_tax_return(taxable_cost: float) -> float:
    """Refund on a net rental loss at the flat marginal rate."""
    if math.isnan(taxable_cost):
        return math.nan
    if taxable_cost <= 0:
        return 0.0
    return round_dollars(taxable_cost * DEFAULT_TAX_BRACKET)
