"""Loan structuring and amortization."""

import math
from dataclasses import dataclass
from typing import Mapping

from propcalc.defaults import (
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM,
    MAX_LOAN_TERM,
    MONTHS_PER_YEAR,
)
from propcalc.lmi import calculate_lmi
from propcalc.money import round_cents, round_dollars, to_amount, to_mapping, to_number
from propcalc.params import LoanDetails


@dataclass(frozen=True)
class LoanBreakdown:
    """Principal and interest paid during one loan year."""

    principal: float
    interest: float


def _monthly_rate(annual_rate_pct: float) -> float:
    return to_number(annual_rate_pct) / 100 / MONTHS_PER_YEAR


# Cap on the months simulated; the stored term keeps the value entered
_MAX_TERM_YEARS = MAX_LOAN_TERM * 20


def _months(term_years: float) -> int:
    years = math.trunc(to_number(term_years, DEFAULT_LOAN_TERM))
    return min(max(1, years), _MAX_TERM_YEARS) * MONTHS_PER_YEAR


def _principal(principal: float) -> float:
    if isinstance(principal, float) and math.isnan(principal):
        return principal
    return to_number(principal)


def monthly_repayment(
    principal: float,
    annual_rate_pct: float,
    term_years: float = DEFAULT_LOAN_TERM,
    is_interest_only: bool = False,
) -> float:
    """Monthly repayment for a loan, to the cent.

    Principal-and-interest loans use the standard annuity formula
    ``P * r / (1 - (1 + r) ** -n)`` with monthly rate ``r`` over ``n``
    months; interest-only loans pay ``P * r``.

    Returns 0 for a non-positive principal or rate. A NaN principal (an
    uninsurable loan) gives NaN.
    """
    principal = _principal(principal)
    if math.isnan(principal):
        return math.nan
    r = _monthly_rate(annual_rate_pct)
    if principal <= 0 or r <= 0:
        return 0.0
    if is_interest_only:
        return round_cents(principal * r)
    n = _months(term_years)
    return round_cents(principal * r / (1 - (1 + r) ** -n))


def annual_breakdown(
    year: int,
    principal: float,
    annual_rate_pct: float,
    term_years: float = DEFAULT_LOAN_TERM,
    is_interest_only: bool = False,
) -> LoanBreakdown:
    """Split of repayments into principal and interest for loan year ``year``.

    Years are 1-based. The schedule is simulated month by month from the
    start of the loan, so year N reflects the balance after N-1 years of
    repayments. Months past the end of the term contribute nothing.
    """
    principal = _principal(principal)
    if math.isnan(principal):
        return LoanBreakdown(principal=math.nan, interest=math.nan)
    r = _monthly_rate(annual_rate_pct)
    if principal <= 0 or r <= 0:
        return LoanBreakdown(principal=0.0, interest=0.0)
    if is_interest_only:
        return LoanBreakdown(principal=0.0, interest=round_cents(principal * r * MONTHS_PER_YEAR))

    year = max(1, math.trunc(to_number(year, 1)))
    n = _months(term_years)
    payment = principal * r / (1 - (1 + r) ** -n)
    first_month = (year - 1) * MONTHS_PER_YEAR + 1
    last_month = min(year * MONTHS_PER_YEAR, n)

    balance = principal
    principal_paid = 0.0
    interest_paid = 0.0
    for month in range(1, last_month + 1):
        interest = balance * r
        principal_part = min(payment - interest, balance)
        if month >= first_month:
            interest_paid += interest
            principal_paid += principal_part
        balance -= principal_part
        if balance <= 0:
            break

    return LoanBreakdown(principal=round_cents(principal_paid), interest=round_cents(interest_paid))


def calculate_lvr(property_value: float, loan_amount: float) -> float:
    """Loan-to-value ratio in percent (2 dp, capped at 100); 0 if either side is not positive."""
    property_value = to_number(property_value)
    loan_amount = to_number(loan_amount)
    if property_value <= 0 or loan_amount <= 0:
        return 0.0
    return round_cents(min(loan_amount / property_value * 100, 100.0))


def calculate_deposit_from_lvr(
    property_value: float,
    lvr: float,
    include_stamp_duty: bool = False,
    stamp_duty: float = 0.0,
) -> float:
    """Deposit needed to borrow at ``lvr`` percent, to the dollar.

    When stamp duty is paid from savings rather than financed it is added
    to the cash required. Returns 0 unless ``0 < lvr < 100``.
    """
    property_value = to_number(property_value)
    lvr = to_number(lvr)
    if property_value <= 0 or lvr <= 0 or lvr >= 100:
        return 0.0
    deposit = property_value * (1 - lvr / 100)
    if include_stamp_duty:
        deposit += to_amount(stamp_duty)
    return round_dollars(deposit)


def calculate_loan_details(
    property_value: float,
    deposit: float,
    stamp_duty: float,
    loan_input: Mapping | LoanDetails | None = None,
) -> LoanDetails:
    """Structure the loan: LVR, LMI, total amount and monthly repayment.

    ``loan_input`` supplies the user's choices (interest, term, interest
    only, whether stamp duty is financed); anything missing takes the
    defaults. An uninsurable LVR leaves ``lmi``, ``amount`` and
    ``monthly_mortgage`` as NaN.
    """
    if isinstance(loan_input, LoanDetails):
        raw = {
            "is_interest_only": loan_input.is_interest_only,
            "term": loan_input.term,
            "interest": loan_input.interest,
            "include_stamp_duty": loan_input.include_stamp_duty,
        }
    else:
        raw = to_mapping(loan_input, "loan")

    is_interest_only = bool(raw.get("is_interest_only", False))
    include_stamp_duty = bool(raw.get("include_stamp_duty", False))
    interest = to_amount(raw.get("interest"), DEFAULT_INTEREST_RATE)
    term = math.trunc(to_amount(raw.get("term"), DEFAULT_LOAN_TERM))

    base_loan = property_value - deposit
    if include_stamp_duty:
        base_loan += stamp_duty

    raw_lvr = base_loan / property_value * 100 if property_value > 0 and base_loan > 0 else 0.0
    lmi = calculate_lmi(raw_lvr, base_loan)
    amount = round_cents(base_loan + lmi) if base_loan > 0 else 0.0

    return LoanDetails(
        is_interest_only=is_interest_only,
        term=term,
        interest=interest,
        include_stamp_duty=include_stamp_duty,
        lvr=calculate_lvr(property_value, base_loan),
        lmi=lmi,
        amount=amount,
        monthly_mortgage=monthly_repayment(amount, interest, term, is_interest_only),
    )
