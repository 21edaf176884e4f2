"""
Model builder for gradient fitting using lmfit.
"""

import numpy as np
from lmfit import Model

from ..models import get_model


def build_model(kind):
    """
    Build the lmfit model of a gradient model kind.

    Parameters
    ----------
    kind : ModelKind or str
        Model kind

    Returns
    -------
    model : lmfit.Model
        Model whose independent variables are ``x`` and, for the
        two-domain models, ``interface_boundary``
    """
    spec = get_model(kind)
    independent_vars = ['x']
    if spec.requires_boundary:
        independent_vars.append('interface_boundary')

    # NaN model values go to the solver, which treats them as a failed step
    return Model(spec.func, independent_vars=independent_vars,
                 name=spec.kind.value, nan_policy='propagate')


def build_params(model, kind, seed, offset, lower=None, upper=None):
    """
    Create lmfit parameters from an initial guess vector.

    Parameters
    ----------
    model : lmfit.Model
        Model returned by build_model
    kind : ModelKind or str
        Model kind
    seed : array_like
        Initial guess in vector order (offset last if free)
    offset : OffsetPolicy
        Offset policy. A fixed offset becomes a non-varying parameter.
    lower, upper : float, optional
        Common bounds applied to every varying parameter

    Returns
    -------
    params : lmfit.Parameters
        Initial parameters
    """
    spec = get_model(kind)
    names = spec.param_names(offset)
    seed = np.asarray(seed, dtype=float)
    if seed.size != len(names):
        raise ValueError(f"Initial guess for '{spec.kind.value}' needs {len(names)} values "
                         f"{names}, got {seed.size}")

    params = model.make_params()
    for name, value in zip(names, seed):
        params[name].set(value=float(value), vary=True)

    if not offset.is_free:
        params['offset'].set(value=offset.value, vary=False)

    if lower is not None or upper is not None:
        set_parameter_bounds(params, {name: (lower, upper) for name in names})

    return params


def set_parameter_bounds(params, bounds_dict):
    """
    Set parameter bounds for fitting.

    Parameters
    ----------
    params : lmfit.Parameters
        Parameters object
    bounds_dict : dict
        Dictionary mapping parameter names to (min, max) tuples; None
        leaves that side unbounded

    Examples
    --------
    >>> bounds = {
    ...     'proximal_decay_length': (0, None),
    ...     'distal_sink_slope': (0, None),
    ... }
    >>> set_parameter_bounds(params, bounds)
    """
    for param_name, (min_val, max_val) in bounds_dict.items():
        if param_name in params:
            params[param_name].set(min=-np.inf if min_val is None else min_val,
                                   max=np.inf if max_val is None else max_val)
