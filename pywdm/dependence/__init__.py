"""
Weighted dependence measures and independence tests.

Provides the five measures of the wdm library with observation weights,
a missing-data policy, and asymptotic tests of independence.

Public API:
    wdm(x, y, method)          - Weighted dependence measure
    indep_test(x, y, method)   - Asymptotic independence test
    wdm_mat(data, method)      - Matrix of pairwise measures
    complete_rows(x, y, w)     - Mask of rows without missing values
    remove_incomplete(x, y, w) - Drop rows with missing values
    phoeffb(statistic, n_eff)  - p-value of Hoeffding's B statistic
"""

from pywdm.dependence._common import (
    Alternative,
    MeasureKind,
    METHOD_ALIASES,
    resolve_alternative,
    resolve_method,
)
from pywdm.dependence._hoeffding_b import phoeffb
from pywdm.dependence._missing import (
    complete_rows,
    effective_sample_size,
    remove_incomplete,
)
from pywdm.dependence.design import DependenceDesign, DependenceMatrixDesign
from pywdm.dependence.solution import (
    DefinedOutcome,
    DependenceMatrixParams,
    DependenceMatrixSolution,
    IndepTestParams,
    IndepTestSolution,
    UndefinedOutcome,
)
from pywdm.dependence.solvers import (
    build_test,
    compute_measure,
    indep_test,
    wdm,
    wdm_mat,
)

__all__ = [
    "wdm",
    "indep_test",
    "wdm_mat",
    "compute_measure",
    "build_test",
    "complete_rows",
    "remove_incomplete",
    "effective_sample_size",
    "phoeffb",
    "MeasureKind",
    "Alternative",
    "METHOD_ALIASES",
    "resolve_method",
    "resolve_alternative",
    "DependenceDesign",
    "DependenceMatrixDesign",
    "DefinedOutcome",
    "UndefinedOutcome",
    "IndepTestParams",
    "IndepTestSolution",
    "DependenceMatrixParams",
    "DependenceMatrixSolution",
]
