"""
Asymptotic p-values for independence tests.
"""

from __future__ import annotations

from scipy.stats import norm

from pywdm.core.exceptions import (
    IncompatibleTestError,
    UnsupportedAlternativeError,
)
from pywdm.dependence._common import Alternative, MeasureKind
from pywdm.dependence._hoeffding_b import phoeffb


def compute_p_value(
    statistic: float,
    kind: MeasureKind,
    alternative: Alternative,
    n_eff: float = 0.0,
) -> float:
    """
    p-value of an independence test.

    Hoeffding's statistic uses the B-distribution approximation and only
    supports two-sided tests; all other measures use the standard normal.
    'greater' corresponds to positive association, 'less' to negative.

    Raises
    ------
    IncompatibleTestError
        For a one-sided Hoeffding test, or Hoeffding without n_eff > 0.
    UnsupportedAlternativeError
        If alternative is not an Alternative.
    """
    if kind is MeasureKind.HOEFFDING:
        if alternative is not Alternative.TWO_SIDED:
            raise IncompatibleTestError(
                "only two-sided test available for Hoeffding's D, "
                f"got alternative={getattr(alternative, 'value', alternative)!r}",
                method=kind.value,
                alternative=getattr(alternative, 'value', alternative),
            )
        if not n_eff > 0:
            raise IncompatibleTestError(
                f"must provide n_eff > 0 for Hoeffding's D, got {n_eff}",
                method=kind.value,
            )
        return phoeffb(statistic, n_eff)

    if alternative is Alternative.TWO_SIDED:
        return float(2.0 * norm.cdf(-abs(statistic)))
    if alternative is Alternative.LESS:
        return float(norm.cdf(statistic))
    if alternative is Alternative.GREATER:
        return float(1.0 - norm.cdf(statistic))
    raise UnsupportedAlternativeError(
        f"alternative {alternative!r} not implemented.",
        alternative=alternative,
    )
