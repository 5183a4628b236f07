"""
Solver dispatch for dependence measures.

Provides the wdm-named functions: wdm(), indep_test(), wdm_mat().
"""

from __future__ import annotations

from typing import Literal
import warnings

from numpy.typing import ArrayLike

from pywdm.core.compute.device import select_device
from pywdm.core.exceptions import ValidationError
from pywdm.dependence._common import Alternative, MeasureKind
from pywdm.dependence.design import DependenceDesign, DependenceMatrixDesign
from pywdm.dependence.solution import DependenceMatrixSolution, IndepTestSolution
from pywdm.dependence.backends.cpu import CPUDependenceBackend


BackendChoice = Literal['auto', 'cpu', 'gpu']
MethodName = Literal[
    'pearson', 'prho', 'cor',
    'spearman', 'srho', 'rho',
    'kendall', 'ktau', 'tau',
    'blomqvist', 'bbeta', 'beta',
    'hoeffding', 'hoeffd', 'd',
]


def _get_matrix_backend(backend: BackendChoice):
    """
    Select backend for wdm_mat().

    Single-pair measures and tests always run on the CPU; only the
    pairwise matrix has a GPU path.
    """
    if backend == 'cpu':
        return CPUDependenceBackend()

    device = select_device(backend)
    if device.is_gpu:
        from pywdm.dependence.backends.gpu import GPUDependenceBackend
        return GPUDependenceBackend(device=device)
    return CPUDependenceBackend()


def _emit(result_warnings: tuple[str, ...]) -> None:
    for message in result_warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=3)


def wdm(
    x: ArrayLike | DependenceDesign,
    y: ArrayLike | None = None,
    method: MethodName | MeasureKind = 'pearson',
    *,
    weights: ArrayLike | None = None,
    remove_missing: bool = True,
) -> float:
    """
    Weighted dependence measure between x and y.

    Parameters
    ----------
    x, y : array-like
        Paired samples of equal length. NaN marks a missing value.
        x may also be a pre-built DependenceDesign.
    method : str
        'pearson'/'prho'/'cor', 'spearman'/'srho'/'rho',
        'kendall'/'ktau'/'tau', 'blomqvist'/'bbeta'/'beta', or
        'hoeffding'/'hoeffd'/'d'.
    weights : array-like, optional
        Non-negative weight per observation. None means unit weights.
    remove_missing : bool
        If True (default), rows containing a NaN are removed. If False,
        any NaN makes the result NaN.

    Returns
    -------
    float
        The estimate; NaN if the data are insufficient or missing values
        are present with remove_missing=False.
    """
    if isinstance(x, DependenceDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y is required unless x is a DependenceDesign")
        design = DependenceDesign.for_measure(
            x, y, method,
            weights=weights,
            remove_missing=remove_missing,
        )

    return CPUDependenceBackend().measure(design)


def indep_test(
    x: ArrayLike | DependenceDesign,
    y: ArrayLike | None = None,
    method: MethodName | MeasureKind = 'pearson',
    *,
    weights: ArrayLike | None = None,
    remove_missing: bool = True,
    alternative: Literal['two-sided', 'less', 'greater'] | Alternative = 'two-sided',
) -> IndepTestSolution:
    """
    Asymptotic test of independence based on a weighted dependence measure.

    Parameters
    ----------
    x, y : array-like
        Paired samples of equal length, or a DependenceDesign as x.
    method : str
        Dependence measure; see wdm() for the accepted names.
    weights : array-like, optional
        Non-negative weight per observation.
    remove_missing : bool
        If True (default), rows containing a NaN are removed. If False,
        NaN values make the test undefined (all numbers NaN) rather than
        raising.
    alternative : str
        'two-sided' (default), 'greater' (positive association) or
        'less' (negative association). Hoeffding's D only allows
        'two-sided'.

    Returns
    -------
    IndepTestSolution
        method, alternative, n_eff, estimate, statistic, p_value.

    Raises
    ------
    DimensionError
        x, y, weights of different lengths.
    UnsupportedMethodError, UnsupportedAlternativeError
        Unknown method or alternative.
    IncompatibleTestError
        One-sided test with Hoeffding's D.
    """
    if isinstance(x, DependenceDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y is required unless x is a DependenceDesign")
        design = DependenceDesign.for_indep_test(
            x, y, method,
            weights=weights,
            remove_missing=remove_missing,
            alternative=alternative,
        )

    result = CPUDependenceBackend().solve(design)
    _emit(result.warnings)
    return IndepTestSolution(_result=result, _design=design)


def wdm_mat(
    data: ArrayLike | DependenceMatrixDesign,
    method: MethodName | MeasureKind = 'pearson',
    *,
    weights: ArrayLike | None = None,
    remove_missing: bool = True,
    backend: BackendChoice = 'auto',
) -> DependenceMatrixSolution:
    """
    Matrix of weighted dependence measures between all pairs of columns.

    Parameters
    ----------
    data : array-like or DependenceMatrixDesign
        2D data (observations x variables) with at least 2 columns.
        pandas DataFrames keep their column names.
    method : str
        Dependence measure; see wdm() for the accepted names.
    weights : array-like, optional
        Non-negative weight per row.
    remove_missing : bool
        Missing-data policy, applied separately to each column pair.
    backend : str
        'auto', 'cpu', 'gpu'. The GPU path covers Pearson and Spearman
        on complete data.

    Returns
    -------
    DependenceMatrixSolution
        Symmetric matrix with unit diagonal.
    """
    if isinstance(data, DependenceMatrixDesign):
        design = data
    else:
        design = DependenceMatrixDesign.from_array(
            data, method,
            weights=weights,
            remove_missing=remove_missing,
        )

    be = _get_matrix_backend(backend)
    result = be.solve_matrix(design)
    return DependenceMatrixSolution(_result=result, _design=design)


# Alternative names for the two main entry points.
compute_measure = wdm
build_test = indep_test
