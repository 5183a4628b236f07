"""
Designs for dependence measures and independence tests.

A design holds validated, read-only inputs plus the resolved measure kind
(and alternative, for tests). Method and alternative strings are parsed
here exactly once; backends only ever see the enums.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pywdm.core.exceptions import DimensionError, IncompatibleTestError
from pywdm.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_no_infinite,
    check_nonnegative,
)
from pywdm.dependence._common import (
    Alternative,
    MeasureKind,
    resolve_alternative,
    resolve_method,
)


def _frozen_vector(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Validated read-only 1D float64 copy."""
    arr = check_array(values, name).copy()
    check_1d(arr, name)
    check_no_infinite(arr, name)
    arr.flags.writeable = False
    return arr


def _frozen_weights(weights: ArrayLike | None) -> NDArray[np.floating[Any]]:
    """Empty array for no weights, else validated non-negative weights."""
    if weights is None:
        arr = np.empty(0, dtype=np.float64)
    else:
        arr = check_array(weights, "weights").copy()
        if arr.size == 0:
            arr = arr.reshape(0)
        else:
            check_1d(arr, "weights")
            check_no_infinite(arr, "weights")
            check_nonnegative(arr, "weights")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class DependenceDesign:
    """
    Design for a dependence measure or an independence test on (x, y).

    Do not construct directly; use for_measure() or for_indep_test().
    x and y may contain NaN (missing values); the missing-data policy is
    applied by the backend so that n_eff can be reported either way.
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _weights: NDArray[np.floating[Any]]
    _kind: MeasureKind
    _remove_missing: bool
    _alternative: Alternative | None = None

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._y

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """Observation weights; empty means unit weights."""
        return self._weights

    @property
    def kind(self) -> MeasureKind:
        return self._kind

    @property
    def remove_missing(self) -> bool:
        return self._remove_missing

    @property
    def alternative(self) -> Alternative | None:
        """Alternative hypothesis, None for a plain measure design."""
        return self._alternative

    @property
    def n(self) -> int:
        return len(self._x)

    @property
    def is_weighted(self) -> bool:
        return len(self._weights) > 0

    @classmethod
    def for_measure(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        method: str | MeasureKind,
        *,
        weights: ArrayLike | None = None,
        remove_missing: bool = True,
    ) -> DependenceDesign:
        """Build design for wdm()."""
        kind = resolve_method(method)
        x_arr, y_arr, w_arr = cls._validate_data(x, y, weights)
        return cls(
            _x=x_arr,
            _y=y_arr,
            _weights=w_arr,
            _kind=kind,
            _remove_missing=bool(remove_missing),
        )

    @classmethod
    def for_indep_test(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        method: str | MeasureKind,
        *,
        weights: ArrayLike | None = None,
        remove_missing: bool = True,
        alternative: str | Alternative = "two-sided",
    ) -> DependenceDesign:
        """
        Build design for indep_test().

        Raises
        ------
        UnsupportedMethodError
            Unknown method name.
        UnsupportedAlternativeError
            alternative not 'two-sided', 'less' or 'greater'.
        IncompatibleTestError
            One-sided alternative with Hoeffding's D.
        DimensionError
            x, y, weights of different lengths.
        """
        kind = resolve_method(method)
        alt = resolve_alternative(alternative)
        if kind is MeasureKind.HOEFFDING and alt is not Alternative.TWO_SIDED:
            raise IncompatibleTestError(
                f"only two-sided test available for Hoeffding's D, "
                f"got alternative={alt.value!r}",
                method=kind.value,
                alternative=alt.value,
            )

        x_arr, y_arr, w_arr = cls._validate_data(x, y, weights)
        return cls(
            _x=x_arr,
            _y=y_arr,
            _weights=w_arr,
            _kind=kind,
            _remove_missing=bool(remove_missing),
            _alternative=alt,
        )

    @staticmethod
    def _validate_data(
        x: ArrayLike,
        y: ArrayLike,
        weights: ArrayLike | None,
    ) -> tuple[NDArray, NDArray, NDArray]:
        x_arr = _frozen_vector(x, "x")
        y_arr = _frozen_vector(y, "y")
        w_arr = _frozen_weights(weights)

        if len(w_arr) > 0:
            check_consistent_length(x_arr, y_arr, w_arr, names=("x", "y", "weights"))
        else:
            check_consistent_length(x_arr, y_arr, names=("x", "y"))
        return x_arr, y_arr, w_arr

    def __repr__(self) -> str:
        weighted = ", weighted" if self.is_weighted else ""
        alt = f", alternative={self._alternative.value!r}" if self._alternative else ""
        return (
            f"DependenceDesign(method={self._kind.value!r}, n={self.n}"
            f"{weighted}{alt})"
        )


@dataclass(frozen=True)
class DependenceMatrixDesign:
    """
    Design for a matrix of pairwise dependence measures.

    Wraps a data matrix (n observations x p variables, p >= 2) that may
    contain NaN. Construct via from_array().
    """
    _data: NDArray[np.floating[Any]]
    _weights: NDArray[np.floating[Any]]
    _kind: MeasureKind
    _remove_missing: bool
    _columns: tuple[str, ...] | None

    @classmethod
    def from_array(
        cls,
        data,
        method: str | MeasureKind,
        *,
        weights: ArrayLike | None = None,
        remove_missing: bool = True,
    ) -> DependenceMatrixDesign:
        """
        Build design from array-like data.

        Parameters
        ----------
        data : array-like
            2D data matrix (columns are variables). Can be a numpy array,
            a pandas DataFrame, or anything with a .values attribute.
        method : str or MeasureKind
            Dependence measure.
        weights : array-like, optional
            One weight per row.
        remove_missing : bool
            Per pair of columns, drop incomplete rows (True) or return
            NaN for pairs containing missing values (False).

        Raises
        ------
        DimensionError
            If data is not 2D, has fewer than 2 columns, or weights do
            not have one entry per row.
        """
        kind = resolve_method(method)

        columns = None
        if hasattr(data, 'values'):
            if hasattr(data, 'columns'):
                columns = tuple(str(c) for c in data.columns)
            data = data.values

        arr = check_array(data, "data").copy()
        check_2d(arr, "data")
        check_no_infinite(arr, "data")
        if arr.shape[1] < 2:
            raise DimensionError(
                f"data must have at least 2 columns, got {arr.shape[1]}"
            )
        arr.flags.writeable = False

        w_arr = _frozen_weights(weights)
        if len(w_arr) > 0:
            check_consistent_length(arr, w_arr, names=("data", "weights"))

        return cls(
            _data=arr,
            _weights=w_arr,
            _kind=kind,
            _remove_missing=bool(remove_missing),
            _columns=columns,
        )

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data matrix (n x p), may contain NaN."""
        return self._data

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        return self._weights

    @property
    def kind(self) -> MeasureKind:
        return self._kind

    @property
    def remove_missing(self) -> bool:
        return self._remove_missing

    @property
    def columns(self) -> tuple[str, ...] | None:
        """Column names, or None if not available."""
        return self._columns

    @property
    def n(self) -> int:
        return self._data.shape[0]

    @property
    def p(self) -> int:
        return self._data.shape[1]

    @property
    def has_missing(self) -> bool:
        return bool(np.isnan(self._data).any() or np.isnan(self._weights).any())

    def __repr__(self) -> str:
        return (
            f"DependenceMatrixDesign(method={self._kind.value!r}, "
            f"n={self.n}, p={self.p})"
        )
