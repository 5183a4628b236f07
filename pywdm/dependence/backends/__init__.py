"""
Backends and estimators for dependence measures.

Estimators (all take x, y and optional weights, complete data only):
    prho    - Pearson's rho
    srho    - Spearman's rho
    ktau    - Kendall's tau-b
    bbeta   - Blomqvist's beta
    hoeffd  - Hoeffding's D
"""

from pywdm.dependence.backends._prho import prho
from pywdm.dependence.backends._srho import srho
from pywdm.dependence.backends._ktau import ktau
from pywdm.dependence.backends._bbeta import bbeta
from pywdm.dependence.backends._hoeffd import hoeffd
from pywdm.dependence.backends.cpu import CPUDependenceBackend, estimate

__all__ = [
    "prho",
    "srho",
    "ktau",
    "bbeta",
    "hoeffd",
    "estimate",
    "CPUDependenceBackend",
]
