"""
Tests for DependenceDesign and DependenceMatrixDesign.
"""

import numpy as np
import pytest

from pywdm.core.exceptions import (
    DimensionError,
    IncompatibleTestError,
    UnsupportedAlternativeError,
    UnsupportedMethodError,
    ValidationError,
)
from pywdm.dependence._common import Alternative, MeasureKind
from pywdm.dependence.design import DependenceDesign, DependenceMatrixDesign


class TestDependenceDesign:

    def test_for_measure(self):
        d = DependenceDesign.for_measure([1, 2, 3], [3, 1, 2], "tau")
        assert d.kind is MeasureKind.KENDALL
        assert d.alternative is None
        assert d.n == 3
        assert not d.is_weighted
        assert d.x.dtype == np.float64

    def test_for_indep_test(self):
        d = DependenceDesign.for_indep_test(
            [1, 2, 3], [3, 1, 2], "srho", alternative="less",
        )
        assert d.kind is MeasureKind.SPEARMAN
        assert d.alternative is Alternative.LESS

    def test_arrays_read_only(self):
        d = DependenceDesign.for_measure([1.0, 2.0], [2.0, 1.0], "pearson")
        with pytest.raises(ValueError):
            d.x[0] = 5.0

    def test_input_not_aliased(self):
        x = np.array([1.0, 2.0, 3.0])
        d = DependenceDesign.for_measure(x, x, "pearson")
        x[0] = 100.0
        assert d.x[0] == 1.0

    def test_empty_weights_mean_unweighted(self):
        d = DependenceDesign.for_measure([1, 2], [1, 2], "pearson", weights=[])
        assert not d.is_weighted

    def test_size_mismatch(self):
        with pytest.raises(DimensionError, match="Size mismatch: x=3, y=2"):
            DependenceDesign.for_measure([1, 2, 3], [1, 2], "pearson")

    def test_weights_mismatch(self):
        with pytest.raises(DimensionError, match="weights=2"):
            DependenceDesign.for_measure([1, 2, 3], [1, 2, 3], "pearson", weights=[1, 1])

    def test_negative_weights(self):
        with pytest.raises(ValidationError, match="non-negative"):
            DependenceDesign.for_measure([1, 2], [1, 2], "pearson", weights=[1, -1])

    def test_infinite_values(self):
        with pytest.raises(ValidationError, match="infinite"):
            DependenceDesign.for_measure([1, np.inf], [1, 2], "pearson")

    def test_2d_input_rejected(self):
        with pytest.raises(DimensionError):
            DependenceDesign.for_measure([[1, 2]], [[1, 2]], "pearson")

    def test_unknown_method(self):
        with pytest.raises(UnsupportedMethodError):
            DependenceDesign.for_measure([1, 2], [1, 2], "foo")

    def test_unknown_alternative(self):
        with pytest.raises(UnsupportedAlternativeError):
            DependenceDesign.for_indep_test([1, 2], [1, 2], "pearson", alternative="up")

    def test_hoeffding_one_sided(self):
        with pytest.raises(IncompatibleTestError) as exc_info:
            DependenceDesign.for_indep_test(
                np.arange(10.0), np.arange(10.0), "hoeffd", alternative="greater",
            )
        assert exc_info.value.method == "hoeffding"
        assert exc_info.value.alternative == "greater"

    def test_repr(self):
        d = DependenceDesign.for_indep_test([1, 2], [1, 2], "beta", weights=[1, 2])
        assert "blomqvist" in repr(d)
        assert "weighted" in repr(d)


class TestDependenceMatrixDesign:

    def test_from_array(self, rng):
        d = DependenceMatrixDesign.from_array(rng.standard_normal((10, 3)), "cor")
        assert d.n == 10
        assert d.p == 3
        assert d.columns is None
        assert not d.has_missing

    def test_too_few_columns(self):
        with pytest.raises(DimensionError, match="at least 2 columns"):
            DependenceMatrixDesign.from_array(np.zeros((5, 1)), "pearson")

    def test_not_2d(self):
        with pytest.raises(DimensionError):
            DependenceMatrixDesign.from_array(np.zeros(5), "pearson")

    def test_has_missing(self):
        data = np.array([[1.0, 2.0], [np.nan, 3.0], [2.0, 1.0]])
        assert DependenceMatrixDesign.from_array(data, "pearson").has_missing

    def test_weights_per_row(self):
        with pytest.raises(DimensionError):
            DependenceMatrixDesign.from_array(np.zeros((5, 2)), "pearson", weights=[1, 2])
