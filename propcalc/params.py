"""Data model for a property purchase scenario.

All entities are frozen: calculations return new instances rather than
mutating their inputs.
"""

from dataclasses import asdict, dataclass, field

from propcalc.defaults import (
    DEFAULT_CAPITAL_GROWTH,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM,
    DEFAULT_ONE_TIME_EXPENSES,
    DEFAULT_ONGOING_EXPENSES,
    DEFAULT_PROJECTION_YEARS,
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_RENTAL_GROWTH,
    DEFAULT_STATE,
    DEFAULT_STRATA_FEES,
    DEFAULT_WEEKLY_RENT,
    QUARTERS_PER_YEAR,
)


@dataclass(frozen=True)
class OngoingExpenses:
    """Annual holding costs by category ($/year)."""

    council: float = DEFAULT_ONGOING_EXPENSES["council"]
    water: float = DEFAULT_ONGOING_EXPENSES["water"]
    land_tax: float = DEFAULT_ONGOING_EXPENSES["land_tax"]
    insurance: float = DEFAULT_ONGOING_EXPENSES["insurance"]
    property_manager: float = DEFAULT_ONGOING_EXPENSES["property_manager"]
    maintenance: float = DEFAULT_ONGOING_EXPENSES["maintenance"]


@dataclass(frozen=True)
class Expenses:
    """Purchase and holding costs.

    ``one_time`` is what the buyer enters (solicitor, inspections); the
    state's registration and transfer fees are added on top to give
    ``one_time_total``. ``ongoing_total`` only counts the categories that
    apply to the property (see :mod:`propcalc.expenses`).
    """

    one_time: float = DEFAULT_ONE_TIME_EXPENSES
    government_fees: float = 0.0
    one_time_total: float = DEFAULT_ONE_TIME_EXPENSES
    ongoing: OngoingExpenses = field(default_factory=OngoingExpenses)
    ongoing_total: float = 0.0


@dataclass(frozen=True)
class LoanDetails:
    """Loan inputs plus the structure derived from them."""

    is_interest_only: bool = False
    term: int = DEFAULT_LOAN_TERM  # years
    interest: float = DEFAULT_INTEREST_RATE  # % p.a.
    include_stamp_duty: bool = False  # stamp duty financed into the loan

    # Derived
    lvr: float = 0.0  # % of property value, 2 dp
    lmi: float = 0.0  # NaN when the LVR is above 95%
    amount: float = 0.0  # total loan including capitalised LMI
    monthly_mortgage: float = 0.0


@dataclass(frozen=True)
class Projection:
    """One calendar year of a multi-year projection."""

    year: int
    property_value: float
    weekly_rent: float
    rental_income: float
    annual_interest: float
    annual_principal: float
    loan_balance: float
    taxable_amount: float
    tax_return: float
    net_cash_flow: float
    spent: float  # cumulative cash outlay
    equity: float
    returns: float  # cumulative rent plus tax refunds
    roi: float  # %


@dataclass(frozen=True)
class PropertyData:
    """A fully calculated property scenario."""

    property_value: float = 0.0
    deposit: float = 0.0
    first_home_buyer: bool = False
    is_living_here: bool = False
    property_type: str = DEFAULT_PROPERTY_TYPE
    is_brand_new: bool = False
    state: str = DEFAULT_STATE
    loan: LoanDetails = field(default_factory=LoanDetails)
    weekly_rent: float = DEFAULT_WEEKLY_RENT  # $/week
    rental_growth: float = DEFAULT_RENTAL_GROWTH  # $/week per year
    strata_fees: float = DEFAULT_STRATA_FEES  # $/quarter
    capital_growth: float = DEFAULT_CAPITAL_GROWTH  # % p.a.
    rebate: float = 0.0  # cash back at settlement
    start_year: int | None = None
    projection_years: int = DEFAULT_PROJECTION_YEARS

    # Derived
    stamp_duty: float = 0.0
    expenses: Expenses = field(default_factory=Expenses)
    projections: tuple[Projection, ...] = ()

    @property
    def is_land(self) -> bool:
        return self.property_type == "land"

    @property
    def is_investment(self) -> bool:
        return not self.is_living_here

    @property
    def strata_annual(self) -> float:
        return self.strata_fees * QUARTERS_PER_YEAR

    @property
    def final(self) -> Projection | None:
        """Last projected year, if any."""
        return self.projections[-1] if self.projections else None

    def as_partial(self) -> dict:
        """Return the user inputs as a nested dict.

        Feeding the result back to ``calculate_property_data`` reproduces
        this scenario exactly; derived fields are left out.
        """
        return {
            "property_value": self.property_value,
            "deposit": self.deposit,
            "first_home_buyer": self.first_home_buyer,
            "is_living_here": self.is_living_here,
            "property_type": self.property_type,
            "is_brand_new": self.is_brand_new,
            "state": self.state,
            "loan": {
                "is_interest_only": self.loan.is_interest_only,
                "term": self.loan.term,
                "interest": self.loan.interest,
                "include_stamp_duty": self.loan.include_stamp_duty,
            },
            "weekly_rent": self.weekly_rent,
            "rental_growth": self.rental_growth,
            "strata_fees": self.strata_fees,
            "capital_growth": self.capital_growth,
            "rebate": self.rebate,
            "start_year": self.start_year,
            "projection_years": self.projection_years,
            "expenses": {
                "one_time": self.expenses.one_time,
                "ongoing": asdict(self.expenses.ongoing),
            },
        }
