"""Lenders Mortgage Insurance (LMI) premiums.

Single-tier schedule: the premium is a flat percentage of the loan,
selected by LVR band. Lenders will not insure above 95% LVR, which is
reported as NaN rather than an error.
"""

import math

from propcalc.money import round_cents, round_dollars, to_number

# LVR band (upper bound, %) -> premium as a fraction of the loan amount.
_RATE_TABLE: list[tuple[float, float]] = [
    (82, 0.0037),
    (84, 0.0070),
    (86, 0.0125),
    (88, 0.0175),
    (90, 0.0230),
    (91, 0.0280),
    (92, 0.0330),
    (93, 0.0420),
    (94, 0.0520),
    (95, 0.0600),
]

LMI_FREE_LVR = 80
MAX_INSURABLE_LVR = 95


def lmi_rate(lvr: float) -> float:
    """Premium rate for an LVR in percent; 0 up to 80%, NaN above 95%."""
    lvr = round_cents(min(max(to_number(lvr), 0.0), 100.0))
    if lvr <= LMI_FREE_LVR:
        return 0.0
    for upper_bound, rate in _RATE_TABLE:
        if lvr <= upper_bound:
            return rate
    return math.nan


def calculate_lmi(lvr: float, loan_amount: float) -> float:
    """Estimate the LMI premium in dollars.

    Parameters
    ----------
    lvr : float
        Loan-to-value ratio in percent (e.g. 90 for 90%). Clamped to 0-100.
    loan_amount : float
        Loan amount before LMI, in dollars.

    Returns
    -------
    float
        Premium rounded to the nearest dollar. 0 when the LVR is 80% or
        less, or the inputs are not usable numbers; NaN when the LVR is
        above 95% (no insurer will quote).
    """
    loan_amount = to_number(loan_amount)
    if loan_amount <= 0:
        return 0.0
    rate = lmi_rate(lvr)
    if math.isnan(rate):
        return math.nan
    return round_dollars(loan_amount * rate)
