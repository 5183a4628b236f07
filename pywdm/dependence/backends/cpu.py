"""
CPU reference backend for dependence measures and independence tests.

estimate() is the seam between the inference code and the estimators:
it dispatches on MeasureKind and passes the value through untouched.
"""

from __future__ import annotations

from typing import Any, Callable
import math
import numpy as np
from numpy.typing import NDArray

from pywdm.core.exceptions import UnsupportedMethodError, ValidationError
from pywdm.core.result import Result
from pywdm.core.compute.timing import Timer
from pywdm.dependence._common import MeasureKind
from pywdm.dependence._missing import (
    REASON_INSUFFICIENT,
    PreparedInputs,
    ShortCircuit,
    preprocess,
)
from pywdm.dependence._p_value import compute_p_value
from pywdm.dependence._statistic import FISHER_Z_MIN_N_EFF, standardize
from pywdm.dependence.backends._bbeta import bbeta
from pywdm.dependence.backends._hoeffd import hoeffd
from pywdm.dependence.backends._ktau import ktau
from pywdm.dependence.backends._prho import prho
from pywdm.dependence.backends._srho import srho
from pywdm.dependence.design import DependenceDesign, DependenceMatrixDesign
from pywdm.dependence.solution import (
    REASON_DEGENERATE,
    DefinedOutcome,
    DependenceMatrixParams,
    IndepTestParams,
    UndefinedOutcome,
)


ESTIMATORS: dict[MeasureKind, Callable[[NDArray, NDArray, NDArray | None], float]] = {
    MeasureKind.PEARSON: prho,
    MeasureKind.SPEARMAN: srho,
    MeasureKind.KENDALL: ktau,
    MeasureKind.BLOMQVIST: bbeta,
    MeasureKind.HOEFFDING: hoeffd,
}

FISHER_Z_KINDS = (MeasureKind.PEARSON, MeasureKind.SPEARMAN)


def estimate(
    kind: MeasureKind,
    x: NDArray,
    y: NDArray,
    weights: NDArray | None = None,
) -> float:
    """
    Run the estimator for `kind` on complete data.

    Raises
    ------
    UnsupportedMethodError
        If kind is not one of the five measures.
    """
    try:
        estimator = ESTIMATORS[kind]
    except (KeyError, TypeError):
        raise UnsupportedMethodError(
            f"method {kind!r} not implemented.", method=kind,
        ) from None
    return estimator(x, y, weights)


def measure_pair(
    kind: MeasureKind,
    x: NDArray,
    y: NDArray,
    weights: NDArray,
    remove_missing: bool,
) -> tuple[float, PreparedInputs | ShortCircuit]:
    """Apply the missing-data policy, then estimate (NaN if short-circuited)."""
    prepared = preprocess(x, y, weights, kind, remove_missing)
    if isinstance(prepared, ShortCircuit):
        return math.nan, prepared
    return estimate(kind, prepared.x, prepared.y, prepared.weights), prepared


class CPUDependenceBackend:
    """CPU reference backend for dependence measures."""

    @property
    def name(self) -> str:
        return 'cpu_dependence'

    def measure(self, design: DependenceDesign) -> float:
        """Estimate only; NaN when the missing-data policy short-circuits."""
        value, _ = measure_pair(
            design.kind, design.x, design.y, design.weights, design.remove_missing,
        )
        return value

    def solve(self, design: DependenceDesign) -> Result[IndepTestParams]:
        """Run the independence test described by `design`."""
        if design.alternative is None:
            raise ValidationError(
                "design has no alternative; build it with for_indep_test()"
            )

        timer = Timer()
        timer.start()

        kind = design.kind

        with timer.section('preprocess'):
            prepared = preprocess(
                design.x, design.y, design.weights, kind, design.remove_missing,
            )

        # n_eff is fixed here and shared by the statistic and p-value
        n_eff = prepared.n_eff

        if isinstance(prepared, ShortCircuit):
            outcome = UndefinedOutcome(reason=prepared.reason)
        else:
            with timer.section('estimate'):
                value = estimate(kind, prepared.x, prepared.y, prepared.weights)

            if not np.isfinite(value):
                outcome = UndefinedOutcome(reason=REASON_DEGENERATE)
            elif kind in FISHER_Z_KINDS and n_eff < FISHER_Z_MIN_N_EFF:
                # Fisher z needs n_eff >= 3
                outcome = UndefinedOutcome(reason=REASON_INSUFFICIENT)
            else:
                with timer.section('inference'):
                    statistic = standardize(value, kind, n_eff)
                    p_value = compute_p_value(statistic, kind, design.alternative, n_eff)
                outcome = DefinedOutcome(
                    estimate=value, statistic=statistic, p_value=p_value,
                )

        timer.stop()

        params = IndepTestParams(
            kind=kind,
            alternative=design.alternative,
            n_eff=n_eff,
            outcome=outcome,
        )

        info: dict[str, Any] = {
            'method': kind.value,
            'n': design.n,
            'n_used': prepared.n,
            'weighted': design.is_weighted,
            'remove_missing': design.remove_missing,
        }
        if not outcome.is_defined:
            info['reason'] = outcome.reason

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
        )

    def solve_matrix(self, design: DependenceMatrixDesign) -> Result[DependenceMatrixParams]:
        """
        Pairwise measures over all column pairs.

        Only the upper triangle is computed; it is mirrored and the
        diagonal is fixed to 1. Missing values are handled per pair.
        """
        timer = Timer()
        timer.start()

        data = design.data
        p = design.p
        kind = design.kind
        matrix = np.eye(p, dtype=np.float64)
        n_undefined = 0

        with timer.section('pairwise'):
            for i in range(p):
                for j in range(i + 1, p):
                    value, _ = measure_pair(
                        kind, data[:, i], data[:, j], design.weights,
                        design.remove_missing,
                    )
                    if not np.isfinite(value):
                        n_undefined += 1
                    matrix[i, j] = matrix[j, i] = value

        timer.stop()

        warnings_list: list[str] = []
        if n_undefined:
            warnings_list.append(
                f"{n_undefined} of {p * (p - 1) // 2} column pairs have an "
                f"undefined {kind.value} measure (NaN)"
            )

        return Result(
            params=DependenceMatrixParams(kind=kind, matrix=matrix),
            info={'method': kind.value, 'n': design.n, 'p': p},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
