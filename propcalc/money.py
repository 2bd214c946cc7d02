"""Rounding and input coercion helpers.

Published duty and premium tables round half up, so Python's built-in
``round`` (round half to even) is never used for money in this package.
"""

import logging
import math
from typing import Mapping

logger = logging.getLogger(__name__)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, halves rounding towards +inf.

    NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_dollars(value: float) -> float:
    return round_half_up(value, 0)


def round_cents(value: float) -> float:
    return round_half_up(value, 2)


def to_number(value: object, default: float = 0.0) -> float:
    """Coerce user input to a finite float, or ``default``.

    Accepts ints, floats and numeric strings ("1,200" included). Booleans,
    None, NaN, infinities and anything unparseable give ``default``.
    """
    default = float(default)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.replace(",", "").replace("$", "").strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def to_amount(value: object, default: float = 0.0) -> float:
    """Like :func:`to_number` but negative amounts also give ``default``."""
    number = to_number(value, default)
    return number if number >= 0 else default


def to_mapping(value: object, section: str) -> Mapping:
    """Return ``value`` if it is a mapping, otherwise an empty dict.

    Sections of user input (``loan``, ``expenses``) that are not mappings
    are ignored so the calculation falls back to defaults.
    """
    if isinstance(value, Mapping):
        return value
    if value is not None:
        logger.debug("Ignoring %s: expected a mapping, got %s", section, type(value).__name__)
    return {}
