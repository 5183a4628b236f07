"""
Weighted Hoeffding's D.

Uses the rank formula of Hollander & Wolfe (as in Hmisc::hoeffd):

    D = 30 * [(n-2)(n-3) D1 + D2 - 2(n-2) D3]
        / [n (n-1) (n-2) (n-3) (n-4)]

    D1 = sum (Q_i - 1)(Q_i - 2)
    D2 = sum (R_i - 1)(R_i - 2)(S_i - 1)(S_i - 2)
    D3 = sum (R_i - 2)(S_i - 2)(Q_i - 1)

where R_i, S_i are the marginal mid-ranks and Q_i is the bivariate rank
1 + sum_{j != i} phi(x_j, x_i) phi(y_j, y_i), phi(a, b) = 1 if a < b,
1/2 if a == b. Weights are rescaled to sum to n and enter every count
and sum, so unit weights give the classical statistic. D is 1 for a
perfectly monotone sample without ties and near 0 under independence.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pywdm.dependence._ranks import resolve_weights


def _below(v: NDArray, vi: float) -> NDArray:
    """phi(v_j, v_i) for all j."""
    return (v < vi) + 0.5 * (v == vi)


def hoeffd(
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """Weighted Hoeffding's D. Requires at least 5 observations."""
    n = len(x)
    if n < 5:
        return float('nan')

    w = resolve_weights(n, weights)
    total = w.sum()
    if total == 0:
        return float('nan')
    w = w * (n / total)

    r = np.empty(n)
    s = np.empty(n)
    q = np.empty(n)
    for i in range(n):
        px = _below(x, x[i])
        py = _below(y, y[i])
        # the j == i terms contribute 1/2, 1/2 and 1/4
        r[i] = 1.0 + np.dot(w, px) - 0.5 * w[i]
        s[i] = 1.0 + np.dot(w, py) - 0.5 * w[i]
        q[i] = 1.0 + np.dot(w, px * py) - 0.25 * w[i]

    d1 = np.dot(w, (q - 1) * (q - 2))
    d2 = np.dot(w, (r - 1) * (r - 2) * (s - 1) * (s - 2))
    d3 = np.dot(w, (r - 2) * (s - 2) * (q - 1))

    numer = (n - 2) * (n - 3) * d1 + d2 - 2 * (n - 2) * d3
    denom = n * (n - 1) * (n - 2) * (n - 3) * (n - 4)
    return float(30.0 * numer / denom)
