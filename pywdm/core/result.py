"""
Generic result container for all pywdm computations.

The Result class provides a standardized envelope that all domain-specific
results use. Diagnostics (warnings, timing, provenance) travel with the
result instead of through a logger, so a result is a complete record of
how it was produced.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, n_eff, outcome reason)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np
import scipy

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version metadata recorded on every result."""
    from pywdm import __version__

    return {
        'pywdm_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for dependence computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (estimate, statistic, matrix, ...)
        info: Structured metadata (method, n_eff, outcome reason)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions that produced the result

    Examples:
        >>> Result(
        ...     params=IndepTestParams(...),
        ...     info={'method': 'kendall', 'n_eff': 50.0},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_dependence'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
