"""
Missing data handling and effective sample size.

Implements the wdm missing-data policy:
- remove_missing=True: drop every row with a NaN in x, y or the weight
- remove_missing=False: any NaN makes the measure undefined (NaN result)

A policy outcome is either PreparedInputs (ready for estimation) or a
ShortCircuit carrying the reason the result is undefined. Both carry
n_eff, which is reported even for undefined results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pywdm.dependence._common import MeasureKind, MIN_OBSERVATIONS


REASON_MISSING = "missing_values"
REASON_INSUFFICIENT = "insufficient_data"


@dataclass(frozen=True)
class PreparedInputs:
    """Complete rows ready for estimation."""
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    weights: NDArray[np.floating[Any]]
    n_eff: float

    @property
    def n(self) -> int:
        return len(self.x)


@dataclass(frozen=True)
class ShortCircuit:
    """The policy decided the result is undefined for this input."""
    reason: str
    n: int
    n_eff: float


def complete_rows(
    x: NDArray,
    y: NDArray,
    weights: NDArray,
) -> NDArray[np.bool_]:
    """
    Boolean mask of rows where x, y and (if given) the weight are non-NaN.

    Parameters
    ----------
    x, y : NDArray
        1D arrays of the same length.
    weights : NDArray
        Empty, or 1D array of the same length as x.
    """
    mask = ~(np.isnan(x) | np.isnan(y))
    if len(weights) > 0:
        mask &= ~np.isnan(weights)
    return mask


def remove_incomplete(
    x: NDArray,
    y: NDArray,
    weights: NDArray,
) -> tuple[NDArray, NDArray, NDArray]:
    """Return copies of x, y, weights restricted to complete rows."""
    mask = complete_rows(x, y, weights)
    w = weights[mask] if len(weights) > 0 else weights
    return x[mask], y[mask], w


def has_missing(x: NDArray, y: NDArray, weights: NDArray) -> bool:
    """Whether any of x, y, weights contains a NaN."""
    return bool(
        np.isnan(x).any() or np.isnan(y).any() or np.isnan(weights).any()
    )


def effective_sample_size(n: int, weights: NDArray) -> float:
    """
    Kish effective sample size.

    With empty weights this is n. Otherwise (sum w)^2 / sum(w^2), which
    equals n for any constant positive weight vector. All-zero weights
    give 0. A NaN weight makes n_eff NaN; with remove_missing=True such
    rows are dropped before this is called.
    """
    if len(weights) == 0:
        return float(n)
    sum_sq = float(np.sum(weights ** 2))
    if sum_sq == 0.0:
        return 0.0
    return float(np.sum(weights)) ** 2 / sum_sq


def preprocess(
    x: NDArray,
    y: NDArray,
    weights: NDArray,
    kind: MeasureKind,
    remove_missing: bool,
) -> PreparedInputs | ShortCircuit:
    """
    Apply the missing-data policy and compute the effective sample size.

    Parameters
    ----------
    x, y : NDArray
        Validated 1D float arrays of equal length, may contain NaN.
    weights : NDArray
        Empty, or validated non-negative weights of the same length.
    kind : MeasureKind
        Decides the minimum number of complete rows.
    remove_missing : bool
        Drop incomplete rows (True) or short-circuit on any NaN (False).

    Returns
    -------
    PreparedInputs or ShortCircuit
    """
    if remove_missing:
        x, y, weights = remove_incomplete(x, y, weights)
    elif has_missing(x, y, weights):
        return ShortCircuit(
            reason=REASON_MISSING,
            n=len(x),
            n_eff=effective_sample_size(len(x), weights),
        )

    n_eff = effective_sample_size(len(x), weights)

    if len(x) < MIN_OBSERVATIONS[kind]:
        return ShortCircuit(reason=REASON_INSUFFICIENT, n=len(x), n_eff=n_eff)

    return PreparedInputs(x=x, y=y, weights=weights, n_eff=n_eff)
