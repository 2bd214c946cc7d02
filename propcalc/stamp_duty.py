"""Stamp duty (transfer duty) by state, with first home buyer concessions.

Every state is described by data: a list of duty brackets plus optional
concession rules. One bracket walker and one concession routine evaluate
all eight schedules.
"""

import logging
from dataclasses import dataclass

from propcalc.defaults import DEFAULT_STATE
from propcalc.money import round_cents, round_dollars, to_number

logger = logging.getLogger(__name__)

INF = float("inf")


@dataclass(frozen=True)
class DutyBracket:
    """One band of a duty schedule.

    A marginal band charges ``base_amount + (value - previous_threshold) * rate``
    for values up to ``threshold``. A flat band (``flat=True``) charges
    ``value * rate`` on the whole value instead.
    """

    threshold: float
    base_amount: float
    rate: float
    previous_threshold: float = 0.0
    flat: bool = False


@dataclass(frozen=True)
class ConcessionRule:
    """First home buyer concession for one kind of purchase.

    Values up to ``exemption_threshold`` pay no duty. Without a
    ``full_duty_threshold`` that is the whole concession; with one, duty
    is phased back in across the window between the two thresholds:

    - ``"proportional"``: full duty scaled by position in the window
    - ``"offset"``: the duty on the exemption threshold is credited, and
      the credit shrinks linearly to nothing at the full-duty threshold
    """

    exemption_threshold: float
    full_duty_threshold: float | None = None
    phase_out: str = "proportional"


@dataclass(frozen=True)
class FHBConcession:
    homes: ConcessionRule
    land: ConcessionRule | None = None


@dataclass(frozen=True)
class StampDutyConfig:
    brackets: tuple[DutyBracket, ...]
    fhb_concession: FHBConcession | None = None
    minimum_duty: float = 0.0


# ---------------------------------------------------------------------------
# State schedules
# ---------------------------------------------------------------------------

STAMP_DUTY_CONFIGS: dict[str, StampDutyConfig] = {
    "NSW": StampDutyConfig(
        brackets=(
            DutyBracket(17_000, 0, 0.0125),
            DutyBracket(37_000, 212, 0.015, 17_000),
            DutyBracket(99_000, 512, 0.0175, 37_000),
            DutyBracket(372_000, 1_597, 0.035, 99_000),
            DutyBracket(1_240_000, 11_152, 0.045, 372_000),
            DutyBracket(INF, 50_212, 0.055, 1_240_000),
        ),
        fhb_concession=FHBConcession(
            homes=ConcessionRule(800_000, 1_000_000, "offset"),
            land=ConcessionRule(350_000, 450_000, "offset"),
        ),
        minimum_duty=20,
    ),
    "VIC": StampDutyConfig(
        brackets=(
            DutyBracket(25_000, 0, 0.014),
            DutyBracket(130_000, 350, 0.024, 25_000),
            DutyBracket(960_000, 2_870, 0.06, 130_000),
            # 5.5% of the whole value between $960k and $2M
            DutyBracket(2_000_000, 0, 0.055, flat=True),
            DutyBracket(INF, 110_000, 0.065, 2_000_000),
        ),
        fhb_concession=FHBConcession(
            homes=ConcessionRule(600_000, 750_000, "offset"),
            land=ConcessionRule(500_000),
        ),
    ),
    "QLD": StampDutyConfig(
        brackets=(
            DutyBracket(5_000, 0, 0.0),
            DutyBracket(75_000, 0, 0.015, 5_000),
            DutyBracket(540_000, 1_050, 0.035, 75_000),
            DutyBracket(1_000_000, 17_325, 0.045, 540_000),
            DutyBracket(INF, 38_025, 0.0575, 1_000_000),
        ),
        fhb_concession=FHBConcession(
            homes=ConcessionRule(500_000, 550_000, "proportional"),
            land=ConcessionRule(250_000, 400_000, "offset"),
        ),
    ),
    "SA": StampDutyConfig(
        brackets=(
            DutyBracket(12_000, 0, 0.01),
            DutyBracket(30_000, 120, 0.02, 12_000),
            DutyBracket(50_000, 480, 0.03, 30_000),
            DutyBracket(100_000, 1_080, 0.035, 50_000),
            DutyBracket(200_000, 2_830, 0.04, 100_000),
            DutyBracket(250_000, 6_830, 0.0425, 200_000),
            DutyBracket(300_000, 8_955, 0.045, 250_000),
            DutyBracket(500_000, 11_205, 0.05, 300_000),
            DutyBracket(INF, 21_205, 0.055, 500_000),
        ),
        fhb_concession=FHBConcession(homes=ConcessionRule(600_000)),
    ),
    "WA": StampDutyConfig(
        brackets=(
            DutyBracket(120_000, 0, 0.019),
            DutyBracket(150_000, 2_280, 0.0285, 120_000),
            DutyBracket(360_000, 3_135, 0.038, 150_000),
            DutyBracket(725_000, 11_115, 0.049, 360_000),
            DutyBracket(INF, 29_000, 0.051, 725_000),
        ),
        fhb_concession=FHBConcession(homes=ConcessionRule(430_000)),
    ),
    "TAS": StampDutyConfig(
        brackets=(
            DutyBracket(3_000, 0, 0.0175),
            DutyBracket(25_000, 50, 0.0225, 3_000),
            DutyBracket(75_000, 545, 0.0355, 25_000),
            DutyBracket(200_000, 2_320, 0.04, 75_000),
            DutyBracket(375_000, 7_320, 0.0425, 200_000),
            DutyBracket(725_000, 14_758, 0.045, 375_000),
            DutyBracket(INF, 30_508, 0.0455, 725_000),
        ),
        fhb_concession=FHBConcession(homes=ConcessionRule(600_000)),
    ),
    "NT": StampDutyConfig(
        brackets=(
            DutyBracket(525_000, 0, 0.00443),
            # above $525k the rate applies to the whole value
            DutyBracket(INF, 0, 0.0485),
        ),
        fhb_concession=FHBConcession(homes=ConcessionRule(650_000)),
        minimum_duty=20,
    ),
    "ACT": StampDutyConfig(
        brackets=(
            DutyBracket(200_000, 0, 0.011),
            DutyBracket(300_000, 2_200, 0.024, 200_000),
            DutyBracket(500_000, 4_600, 0.038, 300_000),
            DutyBracket(750_000, 12_200, 0.043, 500_000),
            DutyBracket(1_000_000, 22_950, 0.045, 750_000),
            DutyBracket(INF, 34_200, 0.046, 1_000_000),
        ),
        fhb_concession=FHBConcession(
            homes=ConcessionRule(600_000, 1_000_000, "proportional"),
        ),
    ),
}


def state_config(state: str) -> StampDutyConfig:
    """Schedule for ``state``; unknown codes fall back to NSW."""
    code = str(state or "").strip().upper()
    config = STAMP_DUTY_CONFIGS.get(code)
    if config is None:
        logger.warning("Unknown state %r, using %s stamp duty rates", state, DEFAULT_STATE)
        config = STAMP_DUTY_CONFIGS[DEFAULT_STATE]
    return config


# ---------------------------------------------------------------------------
# Calculation
# ---------------------------------------------------------------------------


def base_duty(value: float, config: StampDutyConfig) -> float:
    """Full (non-concessional) duty on ``value``, to the cent."""
    brackets = config.brackets
    for i, bracket in enumerate(brackets):
        if value > bracket.threshold:
            continue
        if bracket.flat:
            return round_cents(value * bracket.rate)

        duty = bracket.base_amount + (value - bracket.previous_threshold) * bracket.rate
        # a band never charges more than the next band starts from
        following = brackets[i + 1] if i + 1 < len(brackets) else None
        if (
            following is not None
            and not following.flat
            and following.previous_threshold == bracket.threshold
        ):
            duty = min(duty, following.base_amount)
        return max(config.minimum_duty, round_cents(duty))
    return 0.0


def _apply_concession(value: float, duty: float, rule: ConcessionRule, config: StampDutyConfig) -> float:
    if value <= rule.exemption_threshold:
        return 0.0
    full = rule.full_duty_threshold
    if full is None or value >= full:
        return duty

    window = full - rule.exemption_threshold
    if rule.phase_out == "offset":
        credit = base_duty(rule.exemption_threshold, config)
        concessional = duty - (full - value) / window * credit
    else:
        concessional = duty * (value - rule.exemption_threshold) / window
    return min(duty, round_dollars(max(0.0, concessional)))


def calculate_stamp_duty(
    value: float,
    first_home_buyer: bool = False,
    is_land: bool = False,
    state: str = DEFAULT_STATE,
) -> float:
    """Stamp duty payable on a purchase.

    Parameters
    ----------
    value : float
        Dutiable value (purchase price) in dollars.
    first_home_buyer : bool
        Apply the state's first home buyer concession, if any.
    is_land : bool
        Vacant land purchase; uses the land concession rule.
    state : str
        State or territory code. Unknown codes use NSW rates.

    Returns
    -------
    float
        Duty in dollars. Full duty is to the cent; concessional duty is
        rounded to the dollar. Zero for non-positive or invalid values.
    """
    value = to_number(value)
    if value <= 0:
        return 0.0

    config = state_config(state)
    duty = base_duty(value, config)
    if not first_home_buyer or config.fhb_concession is None:
        return duty

    rule = config.fhb_concession.land if is_land else config.fhb_concession.homes
    if rule is None:
        return duty
    return _apply_concession(value, duty, rule, config)
