"""
Standardized test statistics for independence tests.

Each measure is turned into a statistic whose null distribution is
known asymptotically: standard normal for Pearson (Fisher z), Spearman
(Fisher z with the 1.06 variance factor), Kendall and Blomqvist, and
the Blum-Kiefer-Rosenblatt B for Hoeffding.
"""

from __future__ import annotations

import math

from pywdm.core.exceptions import IncompatibleTestError, UnsupportedMethodError
from pywdm.dependence._common import MeasureKind


def clamp_estimate(estimate: float) -> float:
    """
    Move estimates of exactly +/-1 off the atanh singularity.

    1.0 becomes 1 - 1e-12. -1.0 becomes +1e-12, which is what wdm does;
    the asymmetry is kept so statistics agree with wdm.
    """
    if estimate == 1.0:
        return 1 - 1e-12
    if estimate == -1.0:
        return 1e-12
    return estimate


FISHER_Z_MIN_N_EFF = 3.0


def fisher_z_scale(n_eff: float) -> float:
    """sqrt(n_eff - 3); NaN below 3, where the Fisher z variance is undefined."""
    if not n_eff >= FISHER_Z_MIN_N_EFF:
        return math.nan
    return math.sqrt(n_eff - FISHER_Z_MIN_N_EFF)


def standardize(estimate: float, kind: MeasureKind, n_eff: float) -> float:
    """
    Convert an estimate into its standardized test statistic.

    Parameters
    ----------
    estimate : float
        Point estimate returned by the estimator for `kind`.
    kind : MeasureKind
        The dependence measure.
    n_eff : float
        Effective sample size.

    Raises
    ------
    UnsupportedMethodError
        If kind is not a MeasureKind.
    IncompatibleTestError
        For Hoeffding's D without n_eff > 0.
    """
    estimate = clamp_estimate(estimate)

    if kind is MeasureKind.HOEFFDING:
        if not n_eff > 0:
            raise IncompatibleTestError(
                f"must provide n_eff > 0 for Hoeffding's D, got {n_eff}",
                method=kind.value,
            )
        return estimate / 30.0 + 1.0 / (36.0 * n_eff)
    if kind is MeasureKind.KENDALL:
        return estimate * math.sqrt(9.0 * n_eff / 4.0)
    if kind is MeasureKind.PEARSON:
        return math.atanh(estimate) * fisher_z_scale(n_eff)
    if kind is MeasureKind.SPEARMAN:
        return math.atanh(estimate) * fisher_z_scale(n_eff) / math.sqrt(1.06)
    if kind is MeasureKind.BLOMQVIST:
        return estimate * math.sqrt(n_eff)
    raise UnsupportedMethodError(f"method {kind!r} not implemented.", method=kind)
