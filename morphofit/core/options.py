"""
Value objects describing how a profile is fitted.

``OffsetPolicy`` decides whether the background offset is a fitted
parameter, ``Landmarks`` carries the tissue coordinates the models depend
on and ``FitFlags`` selects which models are fitted besides the
exponential.
"""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np


FREE = 'free'
FIXED = 'fixed'


@dataclass(frozen=True)
class OffsetPolicy:
    """
    How the additive background offset enters a model.

    Attributes
    ----------
    mode : str
        'free' if the offset is the last entry of the parameter vector,
        'fixed' if it is a known constant.
    value : float or None
        The constant when fixed. When free, an optional seed for the
        initial guess; ``min(y)`` is used if omitted.
    """
    mode: str = FREE
    value: Optional[float] = None

    def __post_init__(self):
        if self.mode not in (FREE, FIXED):
            raise ValueError(f"Unknown offset mode: {self.mode!r}. Use '{FREE}' or '{FIXED}'.")
        if self.mode == FIXED and self.value is None:
            raise ValueError("A fixed offset needs a value")

    @classmethod
    def free(cls, seed=None):
        """Offset fitted as a parameter, optionally seeded with ``seed``."""
        return cls(FREE, None if seed is None else float(seed))

    @classmethod
    def fixed(cls, value):
        """Offset held at ``value`` and excluded from the parameter vector."""
        return cls(FIXED, float(value))

    @property
    def is_free(self):
        return self.mode == FREE

    @property
    def n_params(self):
        """Number of parameter-vector entries the offset occupies."""
        return 1 if self.is_free else 0

    def resolve(self, p):
        """Return the offset value for parameter vector ``p``."""
        if self.is_free:
            return p[-1]
        return self.value

    def seed_for(self, y):
        """Offset estimate used to build initial guesses from data ``y``."""
        if self.value is not None:
            return self.value
        return float(np.min(y))


@dataclass(frozen=True)
class Landmarks:
    """
    Tissue landmarks along the x axis.

    Attributes
    ----------
    interface_boundary_location : float or None
        Position of the interface between the proximal and distal
        domains. Required by the two-domain models only.
    zero_location : float
        Position taken as the origin; subtracted once from ``x`` and from
        the boundary before fitting.
    """
    interface_boundary_location: Optional[float] = None
    zero_location: float = 0.0

    @property
    def has_boundary(self):
        return self.interface_boundary_location is not None

    def zeroed(self):
        """Return landmarks expressed relative to ``zero_location``."""
        if self.zero_location == 0:
            return self
        boundary = self.interface_boundary_location
        if boundary is not None:
            boundary = boundary - self.zero_location
        return replace(self, interface_boundary_location=boundary, zero_location=0.0)


@dataclass(frozen=True)
class FitFlags:
    """Which models to fit in addition to the always-fitted exponential."""
    fit_two_domain: bool = False
    fit_two_domain_gradual_sink: bool = False
