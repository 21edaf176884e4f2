"""
Decaying exponential profile (uniform consumption model).
"""

import numpy as np


def decaying_exponential(x, amplitude, decay_length, offset=0.0):
    """
    Steady state of the uniform consumption model.

    Parameters
    ----------
    x : array_like
        Position along the tissue
    amplitude : float
        Concentration at x = 0 above the offset
    decay_length : float
        Characteristic decay length (must be non-zero)
    offset : float, optional
        Background level, default 0

    Returns
    -------
    ndarray
        Profile values at x positions

    Notes
    -----
    Mathematical form: f(x) = A * exp(-x / λ) + offset

    Does not depend on any landmark.
    """
    x = np.asarray(x, dtype=float)
    return amplitude * np.exp(-x / np.float64(decay_length)) + offset
