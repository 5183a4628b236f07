"""
Exception hierarchy for pywdm.

All exceptions inherit from PyWDMError to allow catching any
library-specific error. Everything here is raised before a result is
built; a test whose data cannot support an estimate is NOT an error and
is reported through an undefined outcome instead.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyWDMError(Exception):
    """Base exception for all pywdm errors."""
    pass


class ValidationError(PyWDMError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when x, y and weights do not have matching lengths, or when
    a data matrix has too few columns for pairwise measures.
    """
    pass


class UnsupportedMethodError(ValidationError):
    """
    Dependence measure is not known.

    Attributes:
        method: The offending method name or kind
    """

    def __init__(self, message: str, method: object | None = None):
        super().__init__(message)
        self.method = method


class UnsupportedAlternativeError(ValidationError):
    """
    Alternative hypothesis is not one of 'two-sided', 'less', 'greater'.

    Attributes:
        alternative: The offending alternative
    """

    def __init__(self, message: str, alternative: object | None = None):
        super().__init__(message)
        self.alternative = alternative


class IncompatibleTestError(ValidationError):
    """
    Requested test is not available for the chosen measure.

    Raised for one-sided tests based on Hoeffding's D, or when the
    Hoeffding p-value is requested without a positive effective sample
    size.

    Attributes:
        method: Canonical name of the measure
        alternative: Requested alternative, if relevant
    """

    def __init__(
        self,
        message: str,
        method: str | None = None,
        alternative: str | None = None,
    ):
        super().__init__(message)
        self.method = method
        self.alternative = alternative
