"""
Tests for missing data handling and effective sample size.
"""

import numpy as np
import pytest

from pywdm.dependence._common import MeasureKind
from pywdm.dependence._missing import (
    REASON_INSUFFICIENT,
    REASON_MISSING,
    PreparedInputs,
    ShortCircuit,
    complete_rows,
    effective_sample_size,
    preprocess,
    remove_incomplete,
)

EMPTY = np.empty(0)


class TestCompleteRows:

    def test_mask(self):
        x = np.array([1.0, np.nan, 3.0])
        y = np.array([1.0, 2.0, np.nan])
        np.testing.assert_array_equal(complete_rows(x, y, EMPTY), [True, False, False])

    def test_nan_weight_marks_row(self):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([1.0, 2.0, 3.0])
        w = np.array([1.0, np.nan, 1.0])
        np.testing.assert_array_equal(complete_rows(x, y, w), [True, False, True])

    def test_remove_incomplete(self):
        x = np.array([1.0, np.nan, 3.0, 4.0])
        y = np.array([1.0, 2.0, 3.0, np.nan])
        w = np.array([1.0, 2.0, 3.0, 4.0])
        xc, yc, wc = remove_incomplete(x, y, w)
        np.testing.assert_array_equal(xc, [1.0, 3.0])
        np.testing.assert_array_equal(yc, [1.0, 3.0])
        np.testing.assert_array_equal(wc, [1.0, 3.0])

    def test_remove_incomplete_keeps_empty_weights(self):
        x = np.array([1.0, np.nan])
        _, _, wc = remove_incomplete(x, x, EMPTY)
        assert len(wc) == 0


class TestEffectiveSampleSize:

    def test_unweighted_is_n(self):
        assert effective_sample_size(7, EMPTY) == 7.0

    def test_constant_weights_give_n(self):
        assert effective_sample_size(5, np.full(5, 2.5)) == pytest.approx(5.0)

    def test_kish_formula(self):
        w = np.array([1.0, 1.0, 2.0])
        assert effective_sample_size(3, w) == pytest.approx(16.0 / 6.0)

    def test_zero_weights(self):
        assert effective_sample_size(3, np.zeros(3)) == 0.0

    def test_nan_weight_propagates(self):
        assert np.isnan(effective_sample_size(2, np.array([1.0, np.nan])))


class TestPreprocess:

    def test_remove_missing_insufficient(self):
        x = np.array([1.0, np.nan, 3.0])
        y = np.array([1.0, 2.0, np.nan])
        out = preprocess(x, y, EMPTY, MeasureKind.PEARSON, remove_missing=True)
        assert isinstance(out, ShortCircuit)
        assert out.reason == REASON_INSUFFICIENT
        assert out.n == 1
        assert out.n_eff == 1.0

    def test_keep_missing_short_circuits(self):
        x = np.array([1.0, np.nan, 3.0])
        y = np.array([1.0, 2.0, np.nan])
        out = preprocess(x, y, EMPTY, MeasureKind.PEARSON, remove_missing=False)
        assert isinstance(out, ShortCircuit)
        assert out.reason == REASON_MISSING
        assert out.n_eff == 3.0

    def test_complete_data_prepared(self):
        x = np.arange(5.0)
        out = preprocess(x, x, EMPTY, MeasureKind.HOEFFDING, remove_missing=False)
        assert isinstance(out, PreparedInputs)
        assert out.n == 5
        assert out.n_eff == 5.0

    def test_hoeffding_needs_five_rows(self):
        x = np.arange(4.0)
        out = preprocess(x, x, EMPTY, MeasureKind.HOEFFDING, remove_missing=True)
        assert isinstance(out, ShortCircuit)
        assert out.reason == REASON_INSUFFICIENT

    def test_nan_weight_kept_gives_nan_n_eff(self):
        x = np.array([1.0, 2.0, 3.0])
        w = np.array([1.0, np.nan, 1.0])
        out = preprocess(x, x, w, MeasureKind.PEARSON, remove_missing=False)
        assert isinstance(out, ShortCircuit)
        assert out.reason == REASON_MISSING
        assert np.isnan(out.n_eff)

    def test_nan_weight_removed_before_n_eff(self):
        x = np.array([1.0, 2.0, 3.0])
        w = np.array([1.0, np.nan, 1.0])
        out = preprocess(x, x, w, MeasureKind.PEARSON, remove_missing=True)
        assert isinstance(out, PreparedInputs)
        assert out.n_eff == pytest.approx(2.0)

    def test_weighted_n_eff_after_removal(self):
        x = np.array([1.0, 2.0, np.nan, 4.0])
        y = np.array([1.0, 3.0, 2.0, 4.0])
        w = np.array([1.0, 1.0, 5.0, 2.0])
        out = preprocess(x, y, w, MeasureKind.KENDALL, remove_missing=True)
        assert isinstance(out, PreparedInputs)
        np.testing.assert_array_equal(out.weights, [1.0, 1.0, 2.0])
        assert out.n_eff == pytest.approx(16.0 / 6.0)
