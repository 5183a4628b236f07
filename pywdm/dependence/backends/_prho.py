"""
Weighted Pearson correlation.

Integer weights give the same value as replicating rows; unit weights
match np.corrcoef.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pywdm.dependence._ranks import resolve_weights


def _is_constant(v: NDArray, w: NDArray) -> bool:
    """Whether v takes a single value on the rows with positive weight."""
    support = v[w > 0]
    return bool(np.all(support == support[0])) if len(support) > 0 else True


def prho(
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """
    Weighted Pearson product-moment correlation.

    Returns NaN when either variable has zero (weighted) variance or the
    weights sum to zero.
    """
    w = resolve_weights(len(x), weights)
    total = w.sum()
    if total == 0 or _is_constant(x, w) or _is_constant(y, w):
        return float('nan')
    w = w / total

    xc = x - np.dot(w, x)
    yc = y - np.dot(w, y)
    num = np.dot(w, xc * yc)
    denom = np.sqrt(np.dot(w, xc ** 2) * np.dot(w, yc ** 2))
    if denom == 0:
        return float('nan')
    return float(np.clip(num / denom, -1.0, 1.0))
