"""
Tests for estimate clamping and standardized statistics.
"""

import math

import pytest

from pywdm.core.exceptions import IncompatibleTestError, UnsupportedMethodError
from pywdm.dependence._common import MeasureKind
from pywdm.dependence._statistic import clamp_estimate, fisher_z_scale, standardize


class TestClampEstimate:

    def test_plus_one(self):
        assert clamp_estimate(1.0) == 1 - 1e-12

    def test_minus_one_becomes_small_positive(self):
        # wdm maps -1 to +1e-12, not to -1 + 1e-12
        assert clamp_estimate(-1.0) == 1e-12

    @pytest.mark.parametrize("value", [0.0, 0.3, -0.999, 0.999999])
    def test_interior_unchanged(self, value):
        assert clamp_estimate(value) == value


class TestStandardize:

    def test_kendall(self):
        assert standardize(0.5, MeasureKind.KENDALL, 16.0) == pytest.approx(3.0)

    def test_blomqvist(self):
        assert standardize(0.5, MeasureKind.BLOMQVIST, 16.0) == pytest.approx(2.0)

    def test_pearson_fisher_z(self):
        expected = math.atanh(0.5) * math.sqrt(97.0)
        assert standardize(0.5, MeasureKind.PEARSON, 100.0) == pytest.approx(expected)

    def test_spearman_variance_factor(self):
        expected = math.atanh(0.5) * math.sqrt(97.0 / 1.06)
        assert standardize(0.5, MeasureKind.SPEARMAN, 100.0) == pytest.approx(expected)

    def test_hoeffding(self):
        expected = 0.3 / 30.0 + 1.0 / 360.0
        assert standardize(0.3, MeasureKind.HOEFFDING, 10.0) == pytest.approx(expected)

    def test_hoeffding_requires_n_eff(self):
        with pytest.raises(IncompatibleTestError, match="n_eff > 0"):
            standardize(0.3, MeasureKind.HOEFFDING, 0.0)

    def test_perfect_kendall_is_finite(self):
        stat = standardize(1.0, MeasureKind.KENDALL, 20.0)
        assert stat == pytest.approx(math.sqrt(45.0))

    def test_perfect_pearson_is_finite(self):
        stat = standardize(1.0, MeasureKind.PEARSON, 20.0)
        assert math.isfinite(stat)
        assert stat > 0

    def test_fisher_z_scale(self):
        assert fisher_z_scale(3.0) == 0.0
        assert fisher_z_scale(19.0) == pytest.approx(4.0)

    @pytest.mark.parametrize("n_eff", [0.0, 1.0, 2.999])
    def test_fisher_z_scale_undefined_below_three(self, n_eff):
        assert math.isnan(fisher_z_scale(n_eff))

    @pytest.mark.parametrize("kind", [MeasureKind.PEARSON, MeasureKind.SPEARMAN])
    def test_small_n_eff_gives_nan(self, kind):
        assert math.isnan(standardize(0.5, kind, 2.0))

    def test_n_eff_three_gives_zero(self):
        assert standardize(0.5, MeasureKind.PEARSON, 3.0) == 0.0

    def test_unknown_kind(self):
        with pytest.raises(UnsupportedMethodError):
            standardize(0.5, "pearson", 10.0)
