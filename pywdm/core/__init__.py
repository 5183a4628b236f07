"""
Core infrastructure for pywdm.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device detection and timing
"""

from pywdm.core.result import Result
from pywdm.core.exceptions import (
    PyWDMError,
    ValidationError,
    DimensionError,
    UnsupportedMethodError,
    UnsupportedAlternativeError,
    IncompatibleTestError,
)

__all__ = [
    "Result",
    "PyWDMError",
    "ValidationError",
    "DimensionError",
    "UnsupportedMethodError",
    "UnsupportedAlternativeError",
    "IncompatibleTestError",
]
