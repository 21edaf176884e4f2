"""
Nonlinear least-squares solver used by the gradient fitter.

Wraps ``lmfit.Model.fit`` and reports the outcome of each solve as a
``SolverStatus`` together with the warnings raised while solving.
"""

import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

from .defaults import BOUNDED_METHOD, DEFAULT_MAX_ITER, UNBOUNDED_METHOD
from .statistics import mean_squared_error


class SolverStatus(str, Enum):
    """Outcome of a nonlinear least-squares solve."""
    CONVERGED = 'converged'
    MAX_ITER_REACHED = 'maxIterReached'
    ILL_CONDITIONED = 'illConditioned'
    NUMERICAL_WARNING = 'numericalWarning'


@dataclass
class SolverResult:
    """
    Result of one solve.

    Attributes
    ----------
    names : tuple of str
        Names of the varying parameters, in vector order
    params : ndarray
        Best-fit (or last) values of the varying parameters
    residual : ndarray
        Residuals (model - data) at ``params``
    mse : float
        Residual mean square, SS_res / (n - len(params))
    status : SolverStatus
        Convergence status
    messages : tuple of str
        Solver message followed by any warnings raised during the solve
    nfev : int
        Number of model evaluations
    covar : ndarray or None
        Scaled covariance matrix (unconstrained solves)
    jacobian : ndarray or None
        Jacobian of the residuals at ``params`` (bounded solves)
    lmfit_result : lmfit.model.ModelResult
        The underlying lmfit result
    """
    names: Tuple[str, ...]
    params: np.ndarray
    residual: np.ndarray
    mse: float
    status: SolverStatus
    messages: Tuple[str, ...] = ()
    nfev: int = 0
    covar: Optional[np.ndarray] = None
    jacobian: Optional[np.ndarray] = None
    lmfit_result: Any = field(default=None, repr=False)

    @property
    def converged(self):
        return self.status is SolverStatus.CONVERGED


def max_nfev_for(max_iter, n_varying):
    """Function-evaluation cap matching an iteration cap with finite-difference Jacobians."""
    return int(max_iter) * (n_varying + 1)


def _varying_names(params):
    return tuple(name for name, par in params.items() if par.vary)


def _reorder(matrix, source_names, names, axes):
    """Reorder rows/columns of a matrix labelled by ``source_names`` to ``names``."""
    index = [list(source_names).index(name) for name in names]
    if axes == 2:
        return matrix[np.ix_(index, index)]
    return matrix[:, index]


def _run_fit(model, params, x, y, method, max_iter, independent):
    """Run lmfit with warnings recorded instead of printed."""
    n_varying = len(_varying_names(params))
    max_nfev = max_nfev_for(max_iter, n_varying)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always')
        result = model.fit(y, params, x=x, method=method, max_nfev=max_nfev, **independent)

    warning_messages = tuple(f"{w.category.__name__}: {w.message}" for w in caught)
    return result, max_nfev, warning_messages


def _classify(result, max_nfev, well_conditioned, warning_messages):
    if getattr(result, 'aborted', False) or result.nfev >= max_nfev:
        return SolverStatus.MAX_ITER_REACHED
    if not result.success or not well_conditioned:
        return SolverStatus.ILL_CONDITIONED
    if warning_messages:
        return SolverStatus.NUMERICAL_WARNING
    return SolverStatus.CONVERGED


def _extract(result, names):
    values = np.array([result.params[name].value for name in names], dtype=float)
    residual = np.asarray(result.residual, dtype=float)
    return values, residual


def forward_difference_jacobian(model, params, names, x, independent):
    """
    Jacobian of the model with respect to the named parameters.

    Parameters
    ----------
    model : lmfit.Model
        Model to differentiate
    params : lmfit.Parameters
        Point of evaluation
    names : sequence of str
        Parameters to differentiate against, in column order
    x : ndarray
        Positions
    independent : dict
        Extra independent variables of the model

    Returns
    -------
    ndarray
        (len(x), len(names)) Jacobian
    """
    base = model.eval(params, x=x, **independent)
    jacobian = np.empty((np.size(base), len(names)))
    step_scale = np.sqrt(np.finfo(float).eps)

    for column, name in enumerate(names):
        shifted = params.copy()
        value = shifted[name].value
        step = step_scale * max(abs(value), 1.0)
        # Step away from an active upper bound
        if value + step > shifted[name].max:
            step = -step
        shifted[name].set(value=value + step)
        jacobian[:, column] = (model.eval(shifted, x=x, **independent) - base) / step

    return jacobian


def solve_unconstrained(model, params, x, y, max_iter=DEFAULT_MAX_ITER, **independent):
    """
    Unbounded Levenberg-Marquardt fit.

    Parameters
    ----------
    model : lmfit.Model
        Model to fit
    params : lmfit.Parameters
        Initial parameters; non-varying parameters are held fixed
    x : ndarray
        Positions
    y : ndarray
        Data
    max_iter : int, optional
        Iteration cap, default 1000
    **independent
        Extra independent variables passed to the model

    Returns
    -------
    SolverResult
        Result with the scaled covariance matrix
    """
    result, max_nfev, warning_messages = _run_fit(
        model, params, x, y, UNBOUNDED_METHOD, max_iter, independent)

    names = _varying_names(params)
    values, residual = _extract(result, names)

    covar = getattr(result, 'covar', None)
    if covar is not None:
        covar = _reorder(np.asarray(covar, dtype=float), result.var_names, names, axes=2)
    well_conditioned = (covar is not None and np.all(np.isfinite(covar))
                        and np.all(np.diag(covar) >= 0))

    status = _classify(result, max_nfev, well_conditioned, warning_messages)

    return SolverResult(
        names=names,
        params=values,
        residual=residual,
        mse=mean_squared_error(residual, len(names)),
        status=status,
        messages=(str(result.message),) + warning_messages,
        nfev=int(result.nfev),
        covar=covar,
        lmfit_result=result,
    )


def solve_bounded(model, params, x, y, max_iter=DEFAULT_MAX_ITER, **independent):
    """
    Bounded trust-region-reflective fit.

    Bounds are taken from the ``min``/``max`` of each parameter.

    Parameters
    ----------
    model : lmfit.Model
        Model to fit
    params : lmfit.Parameters
        Initial parameters with bounds; values must be feasible
    x : ndarray
        Positions
    y : ndarray
        Data
    max_iter : int, optional
        Iteration cap, default 1000
    **independent
        Extra independent variables passed to the model

    Returns
    -------
    SolverResult
        Result with the Jacobian of the residuals at the solution
    """
    result, max_nfev, warning_messages = _run_fit(
        model, params, x, y, BOUNDED_METHOD, max_iter, independent)

    names = _varying_names(params)
    values, residual = _extract(result, names)

    jacobian = getattr(result, 'jac', None)
    if jacobian is not None:
        jacobian = np.asarray(jacobian, dtype=float)
    if jacobian is not None and jacobian.shape == (residual.size, len(names)):
        jacobian = _reorder(jacobian, result.var_names, names, axes=1)
    else:
        jacobian = forward_difference_jacobian(model, result.params, names, x, independent)

    well_conditioned = (np.all(np.isfinite(jacobian))
                        and np.linalg.matrix_rank(jacobian) == len(names))

    status = _classify(result, max_nfev, well_conditioned, warning_messages)

    return SolverResult(
        names=names,
        params=values,
        residual=residual,
        mse=mean_squared_error(residual, len(names)),
        status=status,
        messages=(str(result.message),) + warning_messages,
        nfev=int(result.nfev),
        jacobian=jacobian,
        lmfit_result=result,
    )
