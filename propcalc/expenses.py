"""Purchase and holding cost normalisation."""

from dataclasses import fields
from typing import Mapping

from propcalc.defaults import (
    DEFAULT_ONE_TIME_EXPENSES,
    DEFAULT_STATE,
    STATE_MORTGAGE_FEES,
)
from propcalc.money import round_cents, round_dollars, to_amount, to_mapping
from propcalc.params import Expenses, OngoingExpenses

ONGOING_CATEGORIES = tuple(f.name for f in fields(OngoingExpenses))


def government_fee(state: str) -> float:
    """Mortgage registration plus transfer fee for ``state`` (NSW if unknown)."""
    code = str(state or "").strip().upper()
    registration, transfer = STATE_MORTGAGE_FEES.get(code, STATE_MORTGAGE_FEES[DEFAULT_STATE])
    return float(registration + transfer)


def is_category_visible(category: str, is_land: bool, is_investment: bool) -> bool:
    """Whether an ongoing cost applies to this kind of property.

    Vacant land has no water connection or building to insure, and a
    property manager is only engaged for a tenanted dwelling.
    """
    if category in ("water", "insurance"):
        return not is_land
    if category == "property_manager":
        return is_investment and not is_land
    return True


def calculate_one_time_expenses(one_time: float, state: str) -> float:
    return round_dollars(one_time + government_fee(state))


def calculate_ongoing_expenses(ongoing: OngoingExpenses, is_land: bool, is_investment: bool) -> float:
    total = sum(
        getattr(ongoing, name)
        for name in ONGOING_CATEGORIES
        if is_category_visible(name, is_land, is_investment)
    )
    return round_dollars(total)


def normalize_ongoing(raw: Mapping | OngoingExpenses | None) -> OngoingExpenses:
    """Merge a partial set of categories over the defaults.

    Negative or unparseable amounts become 0; missing ones take the default.
    Amounts are kept to the cent.
    """
    if isinstance(raw, OngoingExpenses):
        return raw
    raw = to_mapping(raw, "ongoing expenses")
    defaults = OngoingExpenses()
    values = {}
    for name in ONGOING_CATEGORIES:
        if name in raw and raw[name] is not None:
            values[name] = round_cents(to_amount(raw[name]))
        else:
            values[name] = float(getattr(defaults, name))
    return OngoingExpenses(**values)


def calculate_expenses(
    raw: Mapping | Expenses | None,
    is_land: bool,
    is_investment: bool,
    state: str = DEFAULT_STATE,
) -> Expenses:
    """Build the full expense picture for a scenario.

    ``raw`` may give ``one_time`` and any subset of ``ongoing`` categories.
    Totals are always recomputed, so a previously calculated ``Expenses``
    can be passed back in.
    """
    if isinstance(raw, Expenses):
        one_time, ongoing_raw = raw.one_time, raw.ongoing
    else:
        raw = to_mapping(raw, "expenses")
        one_time = raw.get("one_time")
        ongoing_raw = raw.get("ongoing")
        one_time = float(DEFAULT_ONE_TIME_EXPENSES) if one_time is None else round_cents(to_amount(one_time))

    ongoing = normalize_ongoing(ongoing_raw)
    return Expenses(
        one_time=one_time,
        government_fees=government_fee(state),
        one_time_total=calculate_one_time_expenses(one_time, state),
        ongoing=ongoing,
        ongoing_total=calculate_ongoing_expenses(ongoing, is_land, is_investment),
    )
