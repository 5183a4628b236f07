"""
Weighted Spearman's rho: weighted Pearson correlation of weighted ranks.
"""

from __future__ import annotations

from numpy.typing import NDArray

from pywdm.dependence._ranks import weighted_rank
from pywdm.dependence.backends._prho import prho


def srho(
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """Weighted Spearman's rho. Ties receive mid-ranks."""
    return prho(weighted_rank(x, weights), weighted_rank(y, weights), weights)
