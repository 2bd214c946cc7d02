"""Tests for state stamp duty schedules and first home buyer concessions."""

import pytest
from propcalc.defaults import STATES
from propcalc.stamp_duty import (
    STAMP_DUTY_CONFIGS,
    base_duty,
    calculate_stamp_duty,
)


def _sample_values() -> list[float]:
    """A grid of values plus every threshold in every schedule, +/- $1."""
    values = set(range(0, 2_600_001, 2_500))
    for config in STAMP_DUTY_CONFIGS.values():
        thresholds = [b.threshold for b in config.brackets if b.threshold != float("inf")]
        if config.fhb_concession:
            for rule in (config.fhb_concession.homes, config.fhb_concession.land):
                if rule:
                    thresholds.append(rule.exemption_threshold)
                    if rule.full_duty_threshold:
                        thresholds.append(rule.full_duty_threshold)
        for t in thresholds:
            values.update((t - 1, t, t + 1))
    return sorted(values)


class TestNSWStampDuty:
    def test_600k_non_fhb(self):
        # $11,152 plus 4.5% of the excess over $372,000
        assert calculate_stamp_duty(600_000, state="NSW") == pytest.approx(11_152 + 228_000 * 0.045)
        assert calculate_stamp_duty(600_000, state="NSW") == 21_412

    def test_1m(self):
        # 11,152 + 628,000 * 4.5%
        assert calculate_stamp_duty(1_000_000) == pytest.approx(39_412)

    def test_minimum_duty(self):
        assert calculate_stamp_duty(1_000, state="NSW") == 20

    def test_low_price(self):
        assert calculate_stamp_duty(10_000) == pytest.approx(125)

    def test_first_band_does_not_exceed_second_band_base(self):
        assert calculate_stamp_duty(17_000) == 212

    def test_fhb_exempt(self):
        assert calculate_stamp_duty(750_000, first_home_buyer=True) == 0
        assert calculate_stamp_duty(800_000, first_home_buyer=True) == 0

    def test_fhb_concessional(self):
        # $900k: duty 34,912 less half the duty on $800k (30,412)
        assert calculate_stamp_duty(900_000, first_home_buyer=True) == 19_706

    def test_fhb_above_concession(self):
        full = calculate_stamp_duty(1_100_000)
        assert calculate_stamp_duty(1_100_000, first_home_buyer=True) == full

    def test_fhb_land(self):
        assert calculate_stamp_duty(340_000, first_home_buyer=True, is_land=True) == 0
        land = calculate_stamp_duty(400_000, first_home_buyer=True, is_land=True)
        assert 0 < land < calculate_stamp_duty(400_000)


class TestVICStampDuty:
    def test_marginal_band(self):
        # 2,870 + 370,000 * 6%
        assert calculate_stamp_duty(500_000, state="VIC") == pytest.approx(25_070)

    def test_flat_band_above_960k(self):
        assert calculate_stamp_duty(1_000_000, state="VIC") == pytest.approx(55_000)

    def test_flat_band_joins_top_band(self):
        assert calculate_stamp_duty(2_000_000, state="VIC") == pytest.approx(110_000)
        assert calculate_stamp_duty(2_500_000, state="VIC") == pytest.approx(142_500)

    def test_fhb_concessional(self):
        # 37,070 less a third of the 31,070 duty on $600k
        assert calculate_stamp_duty(700_000, True, False, "VIC") == 26_713

    def test_fhb_land_exemption_only(self):
        assert calculate_stamp_duty(500_000, True, True, "VIC") == 0
        assert calculate_stamp_duty(510_000, True, True, "VIC") == calculate_stamp_duty(510_000, state="VIC")


class TestOtherStates:
    def test_qld(self):
        # 17,325 + 60,000 * 4.5%
        assert calculate_stamp_duty(600_000, state="QLD") == pytest.approx(20_025)

    def test_qld_fhb_proportional(self):
        # 16,800 full duty, halfway through the $500k-$550k window
        assert calculate_stamp_duty(525_000, True, False, "QLD") == 8_400

    def test_sa_fhb_flat_exemption(self):
        assert calculate_stamp_duty(600_000, True, False, "SA") == 0
        # 21,205 + 120,000 * 5.5%, no phase-out
        assert calculate_stamp_duty(620_000, True, False, "SA") == pytest.approx(27_805)

    def test_wa(self):
        assert calculate_stamp_duty(400_000, True, False, "WA") == 0
        assert calculate_stamp_duty(500_000, True, False, "WA") == pytest.approx(17_975)

    def test_tas(self):
        assert calculate_stamp_duty(500_000, state="TAS") == pytest.approx(20_383)

    def test_nt_whole_value_rate(self):
        assert calculate_stamp_duty(500_000, state="NT") == pytest.approx(2_215)
        assert calculate_stamp_duty(600_000, state="NT") == pytest.approx(29_100)

    def test_act_land_has_no_concession(self):
        assert calculate_stamp_duty(400_000, True, True, "ACT") == pytest.approx(8_400)

    def test_state_code_case_insensitive(self):
        assert calculate_stamp_duty(600_000, state="qld") == calculate_stamp_duty(600_000, state="QLD")


class TestEdgeCases:
    @pytest.mark.parametrize("value", [0, -100_000, float("nan"), float("inf"), None, "abc"])
    def test_invalid_value_is_zero(self, value):
        assert calculate_stamp_duty(value) == 0

    def test_unknown_state_uses_nsw(self, caplog):
        with caplog.at_level("WARNING"):
            duty = calculate_stamp_duty(600_000, state="XX")
        assert duty == calculate_stamp_duty(600_000, state="NSW")
        assert "Unknown state" in caplog.text

    def test_base_duty_matches_non_fhb(self):
        config = STAMP_DUTY_CONFIGS["ACT"]
        assert base_duty(650_000, config) == calculate_stamp_duty(650_000, state="ACT")


class TestProperties:
    @pytest.mark.parametrize("state", STATES)
    @pytest.mark.parametrize("fhb,land", [(False, False), (True, False), (True, True)])
    def test_non_decreasing_in_value(self, state, fhb, land):
        previous = 0.0
        for value in _sample_values():
            duty = calculate_stamp_duty(value, fhb, land, state)
            assert duty >= previous, f"{state} duty fell at {value}"
            previous = duty

    @pytest.mark.parametrize("state", STATES)
    @pytest.mark.parametrize("land", [False, True])
    def test_fhb_never_pays_more(self, state, land):
        for value in _sample_values():
            fhb = calculate_stamp_duty(value, True, land, state)
            assert fhb <= calculate_stamp_duty(value, False, land, state)
