"""
Two-domain-gradual-sink profile.

In the distal domain the consumption rate grows linearly with distance
from the interface boundary, which turns the steady-state equation into
the Airy equation.
"""

import numpy as np
from scipy.special import airy

from ..exceptions import MissingLandmarkError
from .piecewise import combine_branches


def two_domain_gradual_sink(x, amplitude, proximal_decay_length, distal_sink_slope,
                            offset=0.0, interface_boundary=None):
    """
    Steady state of the two-domain-gradual-sink model.

    Parameters
    ----------
    x : array_like
        Position along the tissue
    amplitude : float
        Concentration at x = 0 above the offset
    proximal_decay_length : float
        Intrinsic decay length of the proximal domain, λp (non-zero)
    distal_sink_slope : float
        Slope of the distal consumption rate, q (positive)
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
    With k = λp^-2 * q^(-2/3), A = Ai(k) and A' = Ai'(k):

    - x <= xB: A0 * csch(xB/λp) * (-sinh((x - xB)/λp)
      + sinh(x/λp) / (cosh(xB/λp) - λp*q^(1/3)*(A'/A)*sinh(xB/λp)))
    - x >= xB: A0 * Ai(q^(-2/3) * (λp^-2 + q*(x - xB)))
      / (A*cosh(xB/λp) - λp*q^(1/3)*A'*sinh(xB/λp))

    Both branches are added at x == xB. The denominators can vanish as
    λp -> 0 or q -> 0; keeping q >= 0 is left to the caller (the
    orchestrator fits this model with lower bounds of zero).
    """
    if interface_boundary is None:
        raise MissingLandmarkError(
            "The two-domain-gradual-sink model needs an interface boundary location")

    lam = np.float64(proximal_decay_length)
    q = np.float64(distal_sink_slope)
    x_b = np.float64(interface_boundary)

    q_cbrt = np.power(q, 1.0 / 3.0)
    q_scale = np.power(q, -2.0 / 3.0)
    k = lam ** -2 * q_scale
    ai_k, aip_k, _, _ = airy(k)

    sinh_b = np.sinh(x_b / lam)
    cosh_b = np.cosh(x_b / lam)

    def proximal(x_left):
        flux_term = cosh_b - lam * q_cbrt * (aip_k / ai_k) * sinh_b
        return (-np.sinh((x_left - x_b) / lam) + np.sinh(x_left / lam) / flux_term) / sinh_b

    def distal(x_right):
        ai_x = airy(q_scale * (lam ** -2 + q * (x_right - x_b)))[0]
        return ai_x / (ai_k * cosh_b - lam * q_cbrt * aip_k * sinh_b)

    profile = combine_branches(x, x_b, proximal, distal)
    return amplitude * profile + offset
