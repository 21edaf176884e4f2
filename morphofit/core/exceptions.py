"""
Exceptions raised by the fitting pipeline.

Only precondition violations are raised. Solver non-convergence is not an
error: it is reported on the corresponding ``FitResult``.
"""


class MorphofitError(Exception):
    """Base class for all morphofit errors."""


class PreconditionError(MorphofitError, ValueError):
    """Raised when the input data cannot be fitted at all."""


class MissingLandmarkError(PreconditionError):
    """Raised when a requested model needs a landmark that was not given."""


class DegenerateDataError(PreconditionError):
    """Raised when the log-linear initial guess has no positive data to work with."""
