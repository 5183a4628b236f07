"""
pywdm: weighted dependence measures and independence tests for Python.

Pearson's rho, Spearman's rho, Kendall's tau, Blomqvist's beta and
Hoeffding's D, all with observation weights, together with asymptotic
tests of independence and pairwise dependence matrices.

Submodules:
    core: Result envelope, exceptions, validation, device and timing
    dependence: Measures, independence tests, dependence matrices
"""

__version__ = "0.1.0"

from pywdm import dependence
from pywdm.dependence import (
    build_test,
    compute_measure,
    indep_test,
    wdm,
    wdm_mat,
)

__all__ = [
    "__version__",
    "dependence",
    "wdm",
    "indep_test",
    "wdm_mat",
    "compute_measure",
    "build_test",
]
