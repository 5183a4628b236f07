"""
Common types for dependence measures and independence tests.

Defines the closed set of measures (MeasureKind), the alternative
hypotheses, and the alias tables that map user-facing names onto them.
Names are resolved exactly once, when the design is built; every later
stage works with the enum.
"""

from __future__ import annotations

from enum import Enum

from pywdm.core.exceptions import (
    UnsupportedMethodError,
    UnsupportedAlternativeError,
)


class MeasureKind(Enum):
    """The five supported dependence measures."""
    PEARSON = "pearson"
    SPEARMAN = "spearman"
    KENDALL = "kendall"
    BLOMQVIST = "blomqvist"
    HOEFFDING = "hoeffding"


class Alternative(Enum):
    """Alternative hypothesis of an independence test."""
    TWO_SIDED = "two-sided"
    LESS = "less"
    GREATER = "greater"


# Case-exact aliases, as accepted by the R and C++ wdm interfaces.
METHOD_ALIASES: dict[str, MeasureKind] = {
    "pearson": MeasureKind.PEARSON,
    "prho": MeasureKind.PEARSON,
    "cor": MeasureKind.PEARSON,
    "spearman": MeasureKind.SPEARMAN,
    "srho": MeasureKind.SPEARMAN,
    "rho": MeasureKind.SPEARMAN,
    "kendall": MeasureKind.KENDALL,
    "ktau": MeasureKind.KENDALL,
    "tau": MeasureKind.KENDALL,
    "blomqvist": MeasureKind.BLOMQVIST,
    "bbeta": MeasureKind.BLOMQVIST,
    "beta": MeasureKind.BLOMQVIST,
    "hoeffding": MeasureKind.HOEFFDING,
    "hoeffd": MeasureKind.HOEFFDING,
    "d": MeasureKind.HOEFFDING,
}

VALID_ALTERNATIVES = tuple(a.value for a in Alternative)

# Fewest complete rows for which a measure is computed at all;
# Hoeffding's D is a degree-5 U-statistic.
MIN_OBSERVATIONS: dict[MeasureKind, int] = {
    MeasureKind.PEARSON: 2,
    MeasureKind.SPEARMAN: 2,
    MeasureKind.KENDALL: 2,
    MeasureKind.BLOMQVIST: 2,
    MeasureKind.HOEFFDING: 5,
}


def resolve_method(method: str | MeasureKind) -> MeasureKind:
    """
    Map a method name (or an already resolved kind) to its MeasureKind.

    Raises
    ------
    UnsupportedMethodError
        If the name is not one of the documented aliases.
    """
    if isinstance(method, MeasureKind):
        return method
    try:
        return METHOD_ALIASES[method]
    except (KeyError, TypeError):
        raise UnsupportedMethodError(
            f"method {method!r} not implemented; must be one of "
            f"{sorted(METHOD_ALIASES)}",
            method=method,
        ) from None


def resolve_alternative(alternative: str | Alternative) -> Alternative:
    """
    Validate an alternative hypothesis.

    Raises
    ------
    UnsupportedAlternativeError
        If alternative is not 'two-sided', 'less' or 'greater'.
    """
    if isinstance(alternative, Alternative):
        return alternative
    try:
        return Alternative(alternative)
    except ValueError:
        raise UnsupportedAlternativeError(
            f"alternative {alternative!r} not implemented; must be one of "
            f"{VALID_ALTERNATIVES}",
            alternative=alternative,
        ) from None
