"""
Weighted Blomqvist's beta (medial correlation).

beta = 2 * P(both coordinates on the same side of their medians) - 1,
with a point on a median line counted on the lower side.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pywdm.dependence._ranks import resolve_weights, weighted_median


def bbeta(
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """Weighted Blomqvist's beta, in [-1, 1]. NaN if the weights sum to zero."""
    w = resolve_weights(len(x), weights)
    total = w.sum()
    if total == 0:
        return float('nan')

    med_x = weighted_median(x, weights)
    med_y = weighted_median(y, weights)

    same_side = ((x <= med_x) & (y <= med_y)) | ((x > med_x) & (y > med_y))
    return float(2.0 * np.dot(w, same_side) / total - 1.0)
