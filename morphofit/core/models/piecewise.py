"""
Unit-step domain selection shared by the two-domain models.
"""

import numpy as np


def unit_step(z):
    """
    Heaviside unit step with the convention step(0) = 1.

    Parameters
    ----------
    z : array_like
        Argument

    Returns
    -------
    ndarray
        0.0 where z < 0, 1.0 where z >= 0
    """
    return np.heaviside(z, 1.0)


def split_domains(x, boundary):
    """
    Select the samples of each domain.

    Parameters
    ----------
    x : array_like
        Positions
    boundary : float
        Interface boundary location

    Returns
    -------
    left : ndarray (bool)
        Samples selected by step(boundary - x)
    right : ndarray (bool)
        Samples selected by step(x - boundary)

    Notes
    -----
    Both masks are True at ``x == boundary``.
    """
    x = np.asarray(x, dtype=float)
    left = unit_step(boundary - x).astype(bool)
    right = unit_step(x - boundary).astype(bool)
    return left, right


def combine_branches(x, boundary, left_branch, right_branch):
    """
    Evaluate a piecewise profile as step(xB - x)*left + step(x - xB)*right.

    Each branch is only evaluated on the samples its step selects, so a
    branch that overflows outside its own domain cannot turn the zero
    weight into NaN. At the boundary the two branches are summed.

    Parameters
    ----------
    x : array_like
        Positions
    boundary : float
        Interface boundary location
    left_branch, right_branch : callable
        Functions of the selected positions returning branch values

    Returns
    -------
    ndarray
        Profile values with the shape of ``x``
    """
    x = np.asarray(x, dtype=float)
    x_flat = np.atleast_1d(x)
    left, right = split_domains(x_flat, boundary)

    y = np.zeros_like(x_flat)
    if np.any(left):
        y[left] = y[left] + left_branch(x_flat[left])
    if np.any(right):
        y[right] = y[right] + right_branch(x_flat[right])

    return y.reshape(x.shape)
