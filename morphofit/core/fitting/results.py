"""
Per-model fit results.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from ..models import ModelKind
from .optimizer import SolverStatus


def _frozen_array(values, ndmin=1):
    array = np.array(values, dtype=float, ndmin=ndmin)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class FitResult:
    """
    Best fit of one model.

    Attributes
    ----------
    kind : ModelKind
        Fitted model
    param_names : tuple of str
        Parameter names in vector order (offset last when fitted)
    params : ndarray
        Best-fit parameter vector (read-only)
    ci : ndarray
        (len(params), 2) confidence intervals, one [low, high] row per
        parameter (read-only)
    mse : float
        Residual mean square
    r_squared : float
        Coefficient of determination
    warning_returned : bool
        True if the solver did not cleanly converge
    status : SolverStatus
        Solver status behind ``warning_returned``
    messages : tuple of str
        Solver diagnostics
    nfev : int
        Number of model evaluations
    y_fit : ndarray
        Model at the best fit over the zero-shifted positions (read-only)
    confidence : float
        Confidence level of ``ci``
    """
    kind: ModelKind
    param_names: Tuple[str, ...]
    params: np.ndarray
    ci: np.ndarray
    mse: float
    r_squared: float
    warning_returned: bool
    status: SolverStatus = SolverStatus.CONVERGED
    messages: Tuple[str, ...] = ()
    nfev: int = 0
    y_fit: np.ndarray = field(default=None, repr=False)
    confidence: float = 0.95

    def __post_init__(self):
        object.__setattr__(self, 'kind', ModelKind(self.kind))
        object.__setattr__(self, 'param_names', tuple(self.param_names))
        object.__setattr__(self, 'params', _frozen_array(self.params))
        object.__setattr__(self, 'ci', _frozen_array(self.ci, ndmin=2))
        object.__setattr__(self, 'messages', tuple(self.messages))
        if self.y_fit is not None:
            object.__setattr__(self, 'y_fit', _frozen_array(self.y_fit))

        if len(self.param_names) != self.params.size:
            raise ValueError(f"{len(self.param_names)} names for {self.params.size} parameters")
        if self.ci.shape != (self.params.size, 2):
            raise ValueError(f"ci must have shape ({self.params.size}, 2), got {self.ci.shape}")

    def __getitem__(self, name):
        """Best-fit value of a named parameter."""
        return self.named()[name]

    def named(self):
        """Best-fit parameters as an ordered name -> value dict."""
        return {name: float(value) for name, value in zip(self.param_names, self.params)}

    def named_ci(self):
        """Confidence intervals as an ordered name -> (low, high) dict."""
        return {name: (float(low), float(high))
                for name, (low, high) in zip(self.param_names, self.ci)}

    def to_dict(self):
        """Plain-Python summary of the result."""
        return {
            'model': self.kind.value,
            'params': self.named(),
            'ci': self.named_ci(),
            'confidence': self.confidence,
            'mse': float(self.mse),
            'r_squared': float(self.r_squared),
            'warning_returned': bool(self.warning_returned),
            'status': self.status.value,
            'messages': list(self.messages),
            'nfev': int(self.nfev),
        }
