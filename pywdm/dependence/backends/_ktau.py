"""
Weighted Kendall's tau (tau-b).

Each pair (i, j) contributes with weight w_i * w_j. Pairs tied in x are
dropped from the x-normalizer, pairs tied in y from the y-normalizer,
which is the tau-b tie correction. Unit weights match
scipy.stats.kendalltau, which is also used for that case (O(n log n)).
The weighted path is O(n^2) time and O(n) memory.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.stats import kendalltau


def ktau(
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """Weighted Kendall's tau-b. NaN if either variable is constant."""
    if weights is None or len(weights) == 0:
        return float(kendalltau(x, y)[0])
    return _ktau_weighted(x, y, np.asarray(weights, dtype=np.float64))


def _ktau_weighted(x: NDArray, y: NDArray, w: NDArray) -> float:
    n = len(x)
    concordance = 0.0
    untied_x = 0.0
    untied_y = 0.0

    for i in range(n - 1):
        sx = np.sign(x[i + 1:] - x[i])
        sy = np.sign(y[i + 1:] - y[i])
        wij = w[i] * w[i + 1:]
        concordance += np.dot(wij, sx * sy)
        untied_x += np.dot(wij, np.abs(sx))
        untied_y += np.dot(wij, np.abs(sy))

    denom = untied_x * untied_y
    if denom == 0:
        return float('nan')
    return float(np.clip(concordance / np.sqrt(denom), -1.0, 1.0))
