"""
Two-domain profile.
"""

import numpy as np

from ..exceptions import MissingLandmarkError
from .piecewise import combine_branches


def two_domain(x, amplitude, proximal_decay_length, distal_decay_length,
               offset=0.0, interface_boundary=None):
    """
    Steady state of the two-domain model.

    The proximal domain (x < xB) has intrinsic decay length λp, the distal
    domain (x > xB) has intrinsic decay length λd.

    Parameters
    ----------
    x : array_like
        Position along the tissue
    amplitude : float
        Concentration at x = 0 above the offset
    proximal_decay_length : float
        Intrinsic decay length of the proximal domain, λp
    distal_decay_length : float
        Intrinsic decay length of the distal domain, λd
    offset : float, optional
        Background level, default 0
    interface_boundary : float
        Location of the interface boundary, xB

    Returns
    -------
    ndarray
        Profile values at x positions

    Notes
    -----
    With D = λd*cosh(xB/λp) + λp*sinh(xB/λp):

    - x >= xB: A * λd * exp((xB - x)/λd) / D
    - x <= xB: A * (λd*cosh((x - xB)/λp) - λp*sinh((x - xB)/λp)) / D

    Both branches are added at x == xB (unit step convention step(0) = 1).
    """
    if interface_boundary is None:
        raise MissingLandmarkError("The two-domain model needs an interface boundary location")

    lam_p = np.float64(proximal_decay_length)
    lam_d = np.float64(distal_decay_length)
    x_b = np.float64(interface_boundary)

    denominator = lam_d * np.cosh(x_b / lam_p) + lam_p * np.sinh(x_b / lam_p)

    def proximal(x_left):
        u = (x_left - x_b) / lam_p
        return lam_d * np.cosh(u) - lam_p * np.sinh(u)

    def distal(x_right):
        return lam_d * np.exp((x_b - x_right) / lam_d)

    profile = combine_branches(x, x_b, proximal, distal)
    return amplitude * profile / denominator + offset
