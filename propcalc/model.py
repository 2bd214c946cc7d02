"""Multi-year cash flow, equity and return projections.

Each projected year carries forward:
  - property value, compounding at the capital growth rate
  - weekly rent, rising by a fixed dollar amount each year (investors only)
  - cumulative loan principal repaid
  - cumulative rental income and tax refunds

Cash position:
  - Upfront: deposit less rebate, one-time costs, and stamp duty unless it
    is financed into the loan
  - Recurring: mortgage repayments, strata and ongoing costs
  - Spent = upfront + recurring for every year elapsed

Return on investment compares rent, tax refunds and capital growth with
everything spent so far. Owner-occupiers have no rent or tax refund, so
their ROI reflects capital growth alone.
"""

import datetime
import math
from dataclasses import dataclass

from propcalc.defaults import (
    DEFAULT_PROJECTION_YEARS,
    MAX_PROJECTION_YEARS,
    MONTHS_PER_YEAR,
    WEEKS_PER_YEAR_AFTER_VACANCY,
)
from propcalc.loan import annual_breakdown
from propcalc.money import round_cents, round_dollars
from propcalc.params import Projection
from propcalc.tax import (
    calculate_depreciation,
    calculate_tax_return,
    calculate_taxable_cost,
)


@dataclass(frozen=True)
class ProjectionParams:
    """Static inputs to a projection, all already normalised."""

    property_value: float
    deposit: float
    stamp_duty: float
    include_stamp_duty: bool
    loan_amount: float
    interest: float  # % p.a.
    term: int
    is_interest_only: bool
    monthly_mortgage: float
    weekly_rent: float
    rental_growth: float  # $/week per year
    strata_annual: float
    one_time_expenses: float
    ongoing_expenses: float
    capital_growth: float  # % p.a.
    is_investment: bool
    rebate: float = 0.0
    start_year: int | None = None
    years: int = DEFAULT_PROJECTION_YEARS

    @property
    def annual_mortgage(self) -> float:
        return round_cents(self.monthly_mortgage * MONTHS_PER_YEAR)

    @property
    def upfront_costs(self) -> float:
        upfront = self.deposit - self.rebate + self.one_time_expenses
        if not self.include_stamp_duty:
            upfront += self.stamp_duty
        return upfront

    @property
    def recurring_costs(self) -> float:
        return self.annual_mortgage + self.strata_annual + self.ongoing_expenses


def current_year() -> int:
    return datetime.date.today().year


def calculate_multi_year_projections(params: ProjectionParams) -> list[Projection]:
    """Project the scenario year by year, first year first."""
    start_year = params.start_year if params.start_year is not None else current_year()
    years = min(max(params.years, 1), MAX_PROJECTION_YEARS)

    annual_mortgage = params.annual_mortgage
    upfront = params.upfront_costs
    recurring = params.recurring_costs
    depreciation = calculate_depreciation(params.property_value) if params.is_investment else 0.0

    property_value = params.property_value
    weekly_rent = params.weekly_rent if params.is_investment else 0.0
    cumulative_principal = 0.0
    cumulative_rent = 0.0
    cumulative_tax = 0.0

    projections = []
    for i in range(years):
        one_time = params.one_time_expenses if i == 0 else 0.0

        # --- Rent ---
        if params.is_investment and i > 0:
            weekly_rent += params.rental_growth
        rental_income = round_dollars(weekly_rent * WEEKS_PER_YEAR_AFTER_VACANCY)

        # --- Capital growth ---
        property_value *= 1 + params.capital_growth / 100
        value_this_year = round_dollars(property_value)
        capital_growth_total = value_this_year - params.property_value + params.rebate

        # --- Loan ---
        breakdown = annual_breakdown(
            i + 1,
            params.loan_amount,
            params.interest,
            params.term,
            params.is_interest_only,
        )
        cumulative_principal += breakdown.principal
        if math.isnan(params.loan_amount):
            loan_balance = math.nan
        else:
            loan_balance = round_cents(max(params.loan_amount - cumulative_principal, 0.0))

        # --- Negative gearing ---
        if params.is_investment:
            taxable = calculate_taxable_cost(
                annual_interest=breakdown.interest,
                one_time_expenses=one_time,
                ongoing_expenses=params.ongoing_expenses,
                strata_annual=params.strata_annual,
                depreciation=depreciation,
                rental_income=rental_income,
            )
            tax_return = calculate_tax_return(taxable)
        else:
            taxable = 0.0
            tax_return = 0.0
        cumulative_rent += rental_income
        cumulative_tax += tax_return

        # --- Position ---
        spent = upfront + recurring * (i + 1)
        equity = params.deposit - params.rebate + cumulative_principal + capital_growth_total
        returns = cumulative_rent + cumulative_tax
        roi = (returns + capital_growth_total - spent) / spent * 100 if spent else 0.0
        net_cash_flow = (
            rental_income
            + tax_return
            - annual_mortgage
            - params.strata_annual
            - params.ongoing_expenses
            - one_time
        )

        projections.append(
            Projection(
                year=start_year + i,
                property_value=value_this_year,
                weekly_rent=weekly_rent,
                rental_income=rental_income,
                annual_interest=breakdown.interest,
                annual_principal=breakdown.principal,
                loan_balance=loan_balance,
                taxable_amount=taxable,
                tax_return=tax_return,
                net_cash_flow=round_cents(net_cash_flow),
                spent=round_cents(spent),
                equity=round_cents(equity),
                returns=round_cents(returns),
                roi=round_cents(roi),
            )
        )

    return projections
