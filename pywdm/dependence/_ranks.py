"""
Weighted ranks and medians shared by the rank-based estimators.

With unit weights these reduce to the usual definitions: ranks match
scipy.stats.rankdata(method='average') and the median matches np.median.
Integer weights behave exactly like replicating rows.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.stats import rankdata


def resolve_weights(n: int, weights: NDArray | None) -> NDArray[np.floating[Any]]:
    """Unit weights when weights is None or empty, else weights as float64."""
    if weights is None or len(weights) == 0:
        return np.ones(n, dtype=np.float64)
    return np.asarray(weights, dtype=np.float64)


def weighted_rank(
    x: NDArray,
    weights: NDArray | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Weighted mid-ranks.

    The rank of x_i is the total weight of observations strictly below
    x_i, plus half the weight of its tie group, plus half a unit so that
    unit weights give the 1-based average ranks.
    """
    if weights is None or len(weights) == 0:
        return rankdata(x, method='average')

    _, inverse = np.unique(x, return_inverse=True)
    inverse = inverse.ravel()
    group_weight = np.bincount(inverse, weights=weights)
    below = np.cumsum(group_weight) - group_weight
    return (below + 0.5 * group_weight)[inverse] + 0.5


def weighted_median(
    x: NDArray,
    weights: NDArray | None = None,
) -> float:
    """
    Weighted median.

    The smallest value whose cumulative weight exceeds half the total;
    when the cumulative weight hits exactly one half, the midpoint of
    that value and the next one.
    """
    if weights is None or len(weights) == 0:
        return float(np.median(x))

    order = np.argsort(x, kind='stable')
    xs = x[order]
    cum = np.cumsum(weights[order])
    half = 0.5 * cum[-1]

    k = int(np.searchsorted(cum, half, side='left'))
    if cum[k] == half:
        # next value carrying positive weight
        j = int(np.searchsorted(cum, half, side='right'))
        if j < len(xs):
            return 0.5 * float(xs[k] + xs[j])
    return float(xs[k])
