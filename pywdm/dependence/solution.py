"""
Dependence measure and independence test solution types.

An independence test has exactly one of two outcomes: DefinedOutcome
(estimate, statistic and p-value all computed) or UndefinedOutcome (the
missing-data policy or the sample itself rules the test out). The
undefined outcome reports NaN for all three numbers, so a result can
never mix defined and undefined fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import math
import numpy as np
from numpy.typing import NDArray

from pywdm.core.result import Result
from pywdm.dependence._common import Alternative, MeasureKind

if TYPE_CHECKING:
    from pywdm.dependence.design import DependenceDesign, DependenceMatrixDesign


REASON_DEGENERATE = "degenerate_sample"

_MEASURE_LABELS = {
    MeasureKind.PEARSON: "Pearson's rho",
    MeasureKind.SPEARMAN: "Spearman's rho",
    MeasureKind.KENDALL: "Kendall's tau",
    MeasureKind.BLOMQVIST: "Blomqvist's beta",
    MeasureKind.HOEFFDING: "Hoeffding's D",
}


@dataclass(frozen=True)
class DefinedOutcome:
    """All numeric fields of the test were computed."""
    estimate: float
    statistic: float
    p_value: float

    @property
    def is_defined(self) -> bool:
        return True


@dataclass(frozen=True)
class UndefinedOutcome:
    """
    The test is undefined for this input.

    reason is one of 'missing_values' (NaN present, remove_missing=False),
    'insufficient_data' (too few complete rows) or 'degenerate_sample'
    (the estimator could not produce a finite value, e.g. a constant
    variable).
    """
    reason: str

    @property
    def is_defined(self) -> bool:
        return False

    @property
    def estimate(self) -> float:
        return math.nan

    @property
    def statistic(self) -> float:
        return math.nan

    @property
    def p_value(self) -> float:
        return math.nan


@dataclass(frozen=True)
class IndepTestParams:
    """
    Parameter payload for an independence test.

    Attributes
    ----------
    kind : MeasureKind
        Resolved dependence measure.
    alternative : Alternative
        Alternative hypothesis.
    n_eff : float
        Effective sample size, reported for both outcomes.
    outcome : DefinedOutcome or UndefinedOutcome
    """
    kind: MeasureKind
    alternative: Alternative
    n_eff: float
    outcome: DefinedOutcome | UndefinedOutcome


@dataclass(frozen=True)
class DependenceMatrixParams:
    """
    Parameter payload for a matrix of pairwise dependence measures.

    matrix is symmetric with unit diagonal; entries for column pairs with
    an undefined measure are NaN.
    """
    kind: MeasureKind
    matrix: NDArray[np.floating[Any]]


@dataclass
class IndepTestSolution:
    """
    User-facing independence test results.

    Wraps Result[IndepTestParams]. All fields are read-only properties.
    """
    _result: Result[IndepTestParams]
    _design: 'DependenceDesign | None'

    # --- Test fields ---

    @property
    def method(self) -> str:
        """Canonical name of the measure, e.g. 'kendall'."""
        return self._result.params.kind.value

    @property
    def kind(self) -> MeasureKind:
        return self._result.params.kind

    @property
    def alternative(self) -> str:
        """'two-sided', 'less' or 'greater'."""
        return self._result.params.alternative.value

    @property
    def n_eff(self) -> float:
        """Effective sample size."""
        return self._result.params.n_eff

    @property
    def estimate(self) -> float:
        """Estimated dependence measure (NaN if undefined)."""
        return self._result.params.outcome.estimate

    @property
    def statistic(self) -> float:
        """Standardized test statistic (NaN if undefined)."""
        return self._result.params.outcome.statistic

    @property
    def p_value(self) -> float:
        """Asymptotic p-value (NaN if undefined)."""
        return self._result.params.outcome.p_value

    @property
    def outcome(self) -> DefinedOutcome | UndefinedOutcome:
        return self._result.params.outcome

    @property
    def is_defined(self) -> bool:
        return self._result.params.outcome.is_defined

    @property
    def reason(self) -> str | None:
        """Why the test is undefined, None if it is defined."""
        outcome = self._result.params.outcome
        return None if outcome.is_defined else outcome.reason

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Formatting ---

    def summary(self) -> str:
        """
        Test report in the layout of R's print.htest.

        Produces output like:
            Independence test based on Kendall's tau

        data:  x and y
        statistic = 3.1623, n_eff = 20, p-value = 0.001565
        alternative hypothesis: true association is not equal to 0
        sample estimates:
        Kendall's tau
              0.4736842
        """
        p = self._result.params
        label = _MEASURE_LABELS[p.kind]
        lines = [f"\tIndependence test based on {label}", "", "data:  x and y"]

        if p.outcome.is_defined:
            lines.append(
                f"statistic = {p.outcome.statistic:.5g}, n_eff = {p.n_eff:.5g}, "
                f"p-value = {_format_pvalue(p.outcome.p_value)}"
            )
        else:
            lines.append(
                f"test undefined ({p.outcome.reason}), n_eff = {p.n_eff:.5g}"
            )

        if p.kind is MeasureKind.HOEFFDING:
            lines.append("alternative hypothesis: x and y are dependent")
        elif p.alternative is Alternative.TWO_SIDED:
            lines.append("alternative hypothesis: true association is not equal to 0")
        elif p.alternative is Alternative.LESS:
            lines.append("alternative hypothesis: true association is less than 0")
        else:
            lines.append("alternative hypothesis: true association is greater than 0")

        lines.append("sample estimates:")
        lines.append(f"{label:>14s}")
        lines.append(f"{p.outcome.estimate:14.7g}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"IndepTestSolution(method={p.kind.value!r}, n_eff={p.n_eff:.4g}, "
            f"estimate={p.outcome.estimate:.4g}, p_value={p.outcome.p_value:.4g})"
        )


@dataclass
class DependenceMatrixSolution:
    """User-facing matrix of pairwise dependence measures."""
    _result: Result[DependenceMatrixParams]
    _design: 'DependenceMatrixDesign'

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """Symmetric (p, p) matrix with unit diagonal."""
        return self._result.params.matrix

    @property
    def method(self) -> str:
        return self._result.params.kind.value

    @property
    def kind(self) -> MeasureKind:
        return self._result.params.kind

    @property
    def columns(self) -> tuple[str, ...] | None:
        """Column names from the design."""
        return self._design.columns

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        p = self.matrix.shape[0]
        return f"DependenceMatrixSolution(method={self.method!r}, p={p})"


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
