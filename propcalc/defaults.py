"""Default assumptions and fixed constants for a property scenario."""

# ---------------------------------------------------------------------------
# Loan
# ---------------------------------------------------------------------------

DEFAULT_INTEREST_RATE = 5.5  # % p.a.
INTEREST_RATE_PRESETS = [5.5, 5.8, 6.0, 6.3, 6.5, 7.0]
DEFAULT_LOAN_TERM = 30  # years
MIN_LOAN_TERM = 1
MAX_LOAN_TERM = 50
DEPOSIT_PRESETS = [5, 10, 15, 20]  # % of property value

# ---------------------------------------------------------------------------
# Property and rent
# ---------------------------------------------------------------------------

STATES = ("NSW", "VIC", "QLD", "SA", "WA", "TAS", "NT", "ACT")
DEFAULT_STATE = "NSW"

PROPERTY_TYPES = ("house", "townhouse", "apartment", "land")
DEFAULT_PROPERTY_TYPE = "house"

DEFAULT_WEEKLY_RENT = 600  # $/week
DEFAULT_RENTAL_GROWTH = 30  # $/week added each year
DEFAULT_STRATA_FEES = 1_500  # $/quarter
DEFAULT_CAPITAL_GROWTH = 3  # % p.a.
CAPITAL_GROWTH_PRESETS = [2, 3, 5, 8, 10]
REBATE_PRESETS = [0, 5, 10, 15, 20]  # % of property value

# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------

DEFAULT_ONE_TIME_EXPENSES = 3_500  # solicitor, inspections, adjustments
DEFAULT_ONGOING_EXPENSES = {
    "council": 1_200,
    "water": 800,
    "land_tax": 1_000,
    "insurance": 500,
    "property_manager": 1_500,
    "maintenance": 1_500,
}

# (mortgage registration, transfer) fees charged by each state's land registry
STATE_MORTGAGE_FEES: dict[str, tuple[float, float]] = {
    "NSW": (175.70, 175.70),
    "VIC": (135.80, 135.80),
    "QLD": (238.14, 238.14),
    "SA": (198.00, 198.00),
    "WA": (216.60, 216.60),
    "TAS": (202.46, 202.46),
    "NT": (176.00, 176.00),
    "ACT": (178.00, 178.00),
}

# ---------------------------------------------------------------------------
# Tax and projections
# ---------------------------------------------------------------------------

DEFAULT_TAX_BRACKET = 0.30  # flat marginal rate for negative gearing
DEFAULT_VACANCY_RATE = 0.03
WEEKS_PER_YEAR_AFTER_VACANCY = round(52 * (1 - DEFAULT_VACANCY_RATE))  # 50
DEFAULT_DEPRECIATION_RATE = 0.025

DEFAULT_PROJECTION_YEARS = 5
MAX_PROJECTION_YEARS = 50

QUARTERS_PER_YEAR = 4
MONTHS_PER_YEAR = 12
