"""
Input checks and coordinate zeroing applied before fitting.
"""

import numpy as np

from .exceptions import MissingLandmarkError, PreconditionError


def validate_profile(x, y, n_params):
    """
    Check that a measured profile can be fitted.

    Parameters
    ----------
    x : array_like
        Positions
    y : array_like
        Measured concentrations
    n_params : int
        Largest number of fitted parameters among the requested models

    Returns
    -------
    x : ndarray
        Positions as a 1-D float array
    y : ndarray
        Concentrations as a 1-D float array

    Raises
    ------
    PreconditionError
        If the arrays are not 1-D, differ in length, contain non-finite
        values, or hold fewer than n_params + 1 points
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.ndim != 1 or y.ndim != 1:
        raise PreconditionError(f"x and y must be 1-D, got shapes {x.shape} and {y.shape}")
    if x.size != y.size:
        raise PreconditionError(f"x and y must have the same length, got {x.size} and {y.size}")
    if x.size < n_params + 1:
        raise PreconditionError(
            f"At least {n_params + 1} points are needed to fit {n_params} parameters, got {x.size}")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise PreconditionError("x and y must only contain finite values")

    return x, y


def require_boundary(landmarks, model_name):
    """
    Raise MissingLandmarkError if ``landmarks`` has no interface boundary.
    """
    if landmarks is None or not landmarks.has_boundary:
        raise MissingLandmarkError(
            f"Fitting the {model_name} model requires landmarks.interface_boundary_location")


def zero_coordinates(x, landmarks):
    """
    Shift positions and landmarks so that ``landmarks.zero_location`` is the origin.

    Parameters
    ----------
    x : array_like
        Positions
    landmarks : Landmarks
        Landmarks in the same frame as ``x``

    Returns
    -------
    x_zeroed : ndarray
        Shifted copy of the positions
    landmarks_zeroed : Landmarks
        Landmarks with zero_location = 0

    Notes
    -----
    Idempotent: zeroed inputs are returned unchanged.
    """
    x_zeroed = np.asarray(x, dtype=float) - landmarks.zero_location
    return x_zeroed, landmarks.zeroed()
