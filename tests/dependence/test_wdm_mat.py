"""
Tests for wdm_mat().
"""

import numpy as np
import pytest

from pywdm import wdm, wdm_mat
from pywdm.core.exceptions import DimensionError, ValidationError
from pywdm.dependence import DependenceMatrixDesign


@pytest.fixture
def data(rng):
    base = rng.standard_normal((80, 1))
    return base + rng.standard_normal((80, 4))


class TestWdmMat:

    @pytest.mark.parametrize("method", ["pearson", "spearman", "kendall", "blomqvist", "hoeffding"])
    def test_symmetric_unit_diagonal(self, method, data):
        mat = wdm_mat(data, method, backend='cpu').matrix
        assert mat.shape == (4, 4)
        np.testing.assert_array_equal(mat, mat.T)
        np.testing.assert_array_equal(np.diag(mat), np.ones(4))

    @pytest.mark.parametrize("method", ["pearson", "kendall", "blomqvist"])
    def test_entries_match_wdm(self, method, data, rng):
        w = rng.uniform(0.5, 1.5, size=80)
        mat = wdm_mat(data, method, weights=w, backend='cpu').matrix
        for i in range(4):
            for j in range(i + 1, 4):
                assert mat[i, j] == wdm(data[:, i], data[:, j], method, weights=w)

    def test_pearson_matches_corrcoef(self, data):
        mat = wdm_mat(data, "cor", backend='cpu').matrix
        np.testing.assert_allclose(mat, np.corrcoef(data, rowvar=False), atol=1e-12)

    def test_metadata(self, data):
        sol = wdm_mat(data, "tau", backend='cpu')
        assert sol.method == "kendall"
        assert sol.backend_name == "cpu_dependence"
        assert sol.info['p'] == 4
        assert sol.columns is None
        assert "DependenceMatrixSolution(method='kendall', p=4)" == repr(sol)

    def test_pairwise_missing_removed(self, data):
        data = data.copy()
        data[0, 0] = np.nan
        mat = wdm_mat(data, "pearson", backend='cpu').matrix
        assert np.isfinite(mat).all()
        expected = wdm(data[1:, 0], data[1:, 1], "pearson")
        assert mat[0, 1] == pytest.approx(expected)
        assert mat[2, 3] == pytest.approx(wdm(data[:, 2], data[:, 3], "pearson"))

    def test_pairwise_missing_kept(self, data):
        data = data.copy()
        data[0, 0] = np.nan
        sol = wdm_mat(data, "pearson", remove_missing=False, backend='cpu')
        assert np.isnan(sol.matrix[0, 1:]).all()
        assert np.isnan(sol.matrix[1:, 0]).all()
        assert np.isfinite(sol.matrix[1:, 1:]).all()
        assert sol.matrix[0, 0] == 1.0
        assert any("3 of 6 column pairs" in w for w in sol.warnings)

    def test_from_design(self, data):
        design = DependenceMatrixDesign.from_array(data, "srho")
        assert wdm_mat(design, backend='cpu').method == "spearman"


class TestWdmMatErrors:

    def test_single_column(self):
        with pytest.raises(DimensionError, match="at least 2 columns"):
            wdm_mat(np.zeros((10, 1)), "pearson")

    def test_weights_length(self, data):
        with pytest.raises(DimensionError):
            wdm_mat(data, "pearson", weights=np.ones(5))

    def test_unknown_backend(self, data):
        with pytest.raises(ValidationError, match="Unknown backend"):
            wdm_mat(data, "pearson", backend='tpu')


class TestDataFrame:

    def test_column_names(self, data):
        pd = pytest.importorskip("pandas")
        df = pd.DataFrame(data, columns=["a", "b", "c", "d"])
        sol = wdm_mat(df, "spearman", backend='cpu')
        assert sol.columns == ("a", "b", "c", "d")
        np.testing.assert_allclose(
            sol.matrix, df.corr(method="spearman").values, atol=1e-12,
        )
