"""
Initial parameter guesses for the gradient models.

The exponential guess comes from a linear regression on log-transformed
data. The two-domain models are seeded from the best-fit exponential.
"""

import numpy as np

from ..exceptions import DegenerateDataError
from ..models import ModelKind
from .defaults import GRADUAL_SINK_SLOPE_GUESS


def init_log_linear(x, y, offset):
    """
    Initial guess for the decaying exponential by log-linear regression.

    Assuming y = A*exp(-x/λ) + b, subtracting an estimate of b and taking
    the logarithm gives log(y - b) = log(A) - x/λ, a straight line.

    Parameters
    ----------
    x : array_like
        Positions
    y : array_like
        Measured concentrations
    offset : OffsetPolicy
        Offset policy. Its value (fixed value or free seed) is the offset
        estimate; min(y) is used otherwise.

    Returns
    -------
    ndarray
        [amplitude, decay_length] followed by the offset seed if the
        offset is free

    Raises
    ------
    DegenerateDataError
        If no value is positive after subtracting the offset estimate, or
        the log-transformed profile gives no finite decay length
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    offset_estimate = offset.seed_for(y)
    y_shifted = y - offset_estimate

    positive = y_shifted > 0
    if not np.any(positive):
        raise DegenerateDataError(
            f"No data point lies above the offset estimate {offset_estimate:g}; "
            "cannot log-transform the profile")

    # Non-positive values take the smallest positive value
    y_shifted = np.where(positive, y_shifted, np.min(y_shifted[positive]))

    log_y = np.log(y_shifted)
    if np.ptp(log_y) == 0:
        raise DegenerateDataError(
            "Profile is flat after subtracting the offset estimate "
            f"{offset_estimate:g}; cannot estimate a decay length")

    slope, intercept = np.polyfit(x, log_y, 1)
    if slope == 0:
        raise DegenerateDataError("Log-linear regression has zero slope; cannot estimate a decay length")

    guess = [np.exp(intercept), -1.0 / slope]
    if not np.all(np.isfinite(guess)):
        raise DegenerateDataError(f"Log-linear regression gave a non-finite guess {guess}")

    if offset.is_free:
        guess.append(offset_estimate)

    return np.array(guess, dtype=float)


def seed_from_exponential(kind, exponential_params, offset):
    """
    Initial guess for a two-domain model from the best-fit exponential.

    Parameters
    ----------
    kind : ModelKind or str
        'twoDomain' or 'twoDomainGradualSink'
    exponential_params : array_like
        Best-fit exponential vector [amplitude, decay_length, (offset)]
    offset : OffsetPolicy
        Offset policy shared by both fits

    Returns
    -------
    ndarray
        twoDomain: [A, λ, λ, (offset)];
        twoDomainGradualSink: [A, λ, GRADUAL_SINK_SLOPE_GUESS, (offset)]
    """
    kind = ModelKind(kind)
    amplitude, decay_length = exponential_params[0], exponential_params[1]

    if kind is ModelKind.TWO_DOMAIN:
        guess = [amplitude, decay_length, decay_length]
    elif kind is ModelKind.TWO_DOMAIN_GRADUAL_SINK:
        guess = [amplitude, decay_length, GRADUAL_SINK_SLOPE_GUESS]
    else:
        raise ValueError(f"No exponential-based seed for model '{kind.value}'")

    if offset.is_free:
        guess.append(exponential_params[-1])

    return np.array(guess, dtype=float)


def project_to_bounds(seed, lower):
    """
    Move a seed into the feasible region of a bounded fit.

    Entries below ``lower`` are reflected to their absolute value, and
    entries still below ``lower`` (or exactly zero where zero makes the
    model singular) are reset.

    Parameters
    ----------
    seed : array_like
        Initial guess
    lower : float
        Common lower bound

    Returns
    -------
    ndarray
        Feasible copy of the seed

    Notes
    -----
    Only the decay length (index 1) and the sink slope (index 2) appear
    in denominators; a zero seed for those is replaced by 1.0.
    """
    seed = np.array(seed, dtype=float)
    seed = np.where(seed < lower, np.abs(seed), seed)
    seed = np.maximum(seed, lower)
    for index in (1, 2):
        if index < seed.size and seed[index] == 0:
            seed[index] = 1.0
    return seed
