"""Tests for LMI premiums."""

import math

import pytest
from propcalc.lmi import calculate_lmi, lmi_rate


class TestLMI:
    def test_no_lmi_at_80(self):
        assert calculate_lmi(80, 400_000) == 0.0
        assert calculate_lmi(75, 400_000) == 0.0

    def test_lvr_rounded_before_lookup(self):
        # 80.004% rounds to 80.00%
        assert calculate_lmi(80.004, 400_000) == 0.0

    def test_just_above_80(self):
        assert calculate_lmi(80.01, 400_000) == 1_480  # 0.37%

    def test_90(self):
        assert calculate_lmi(90, 450_000) == 10_350  # 2.30%

    def test_95_is_highest_quotable(self):
        assert calculate_lmi(95, 500_000) == 30_000  # 6.00%

    def test_above_95_is_nan(self):
        assert math.isnan(calculate_lmi(96, 500_000))
        assert math.isnan(calculate_lmi(150, 500_000))  # clamped to 100

    def test_higher_lvr_higher_premium(self):
        premiums = [calculate_lmi(lvr, 500_000) for lvr in (81, 83, 85, 87, 89, 90.5, 91.5, 92.5, 93.5, 94.5)]
        assert premiums == sorted(premiums)

    @pytest.mark.parametrize("loan", [0, -1, float("nan"), float("inf")])
    def test_unusable_loan_is_zero(self, loan):
        assert calculate_lmi(90, loan) == 0.0

    def test_unusable_lvr_is_zero(self):
        assert calculate_lmi(float("nan"), 400_000) == 0.0

    def test_negative_lvr_clamped(self):
        assert lmi_rate(-5) == 0.0

    def test_missing_inputs_are_zero(self):
        assert calculate_lmi(None, 400_000) == 0.0
        assert calculate_lmi(90, None) == 0.0
        assert lmi_rate(None) == 0.0

    def test_numeric_strings(self):
        assert calculate_lmi("90", "400,000") == 9_200  # 2.30%
