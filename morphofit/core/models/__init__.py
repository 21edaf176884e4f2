"""
Morphogen gradient model functions.

This module provides the steady-state profiles of the uniform consumption
(decaying exponential), two-domain and two-domain-gradual-sink models, and
a registry that maps each model kind to its function and parameter names.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

import numpy as np

from ..exceptions import MissingLandmarkError
from ..options import Landmarks, OffsetPolicy
from .exponential import decaying_exponential
from .two_domain import two_domain
from .gradual_sink import two_domain_gradual_sink
from .piecewise import unit_step, split_domains, combine_branches


class ModelKind(str, Enum):
    """Model families, valued by the names used as result keys."""
    EXPONENTIAL = 'exponential'
    TWO_DOMAIN = 'twoDomain'
    TWO_DOMAIN_GRADUAL_SINK = 'twoDomainGradualSink'


@dataclass(frozen=True)
class ModelSpec:
    """
    Registry entry for one model kind.

    Attributes
    ----------
    kind : ModelKind
        Model kind
    func : callable
        Model function with signature ``func(x, *base_params, offset=0.0, ...)``
    base_param_names : tuple of str
        Parameter names in vector order, offset excluded
    requires_boundary : bool
        Whether the function takes an ``interface_boundary`` argument
    """
    kind: ModelKind
    func: Callable
    base_param_names: Tuple[str, ...]
    requires_boundary: bool = True

    def param_names(self, offset):
        """Parameter names in vector order for the given offset policy."""
        if offset.is_free:
            return self.base_param_names + ('offset',)
        return self.base_param_names

    def n_params(self, offset):
        return len(self.base_param_names) + offset.n_params


# Model registry - maps model kinds to their specification
MODEL_REGISTRY = {
    ModelKind.EXPONENTIAL: ModelSpec(
        ModelKind.EXPONENTIAL,
        decaying_exponential,
        ('amplitude', 'decay_length'),
        requires_boundary=False,
    ),
    ModelKind.TWO_DOMAIN: ModelSpec(
        ModelKind.TWO_DOMAIN,
        two_domain,
        ('amplitude', 'proximal_decay_length', 'distal_decay_length'),
    ),
    ModelKind.TWO_DOMAIN_GRADUAL_SINK: ModelSpec(
        ModelKind.TWO_DOMAIN_GRADUAL_SINK,
        two_domain_gradual_sink,
        ('amplitude', 'proximal_decay_length', 'distal_sink_slope'),
    ),
}


def get_model(kind):
    """
    Get model specification by kind.

    Parameters
    ----------
    kind : ModelKind or str
        Model kind or its name (e.g., 'exponential', 'twoDomain')

    Returns
    -------
    ModelSpec
        Registry entry

    Raises
    ------
    KeyError
        If the kind is not in the registry
    """
    try:
        kind = ModelKind(kind)
    except ValueError:
        raise KeyError(f"Model '{kind}' not found. Available: {list_models()}") from None
    return MODEL_REGISTRY[kind]


def list_models():
    """
    List all available model names.

    Returns
    -------
    list
        List of model names
    """
    return [kind.value for kind in MODEL_REGISTRY]


def evaluate_model(kind, p, x, landmarks=None, offset=None):
    """
    Evaluate a model from its parameter vector.

    Parameters
    ----------
    kind : ModelKind or str
        Model kind
    p : array_like
        Parameter vector in the registry order, with the offset last if
        the offset policy is free
    x : array_like
        Positions, in the same frame as ``landmarks``
    landmarks : Landmarks, optional
        Required by the two-domain models. A non-zero ``zero_location`` is
        subtracted from both ``x`` and the boundary.
    offset : OffsetPolicy, optional
        Offset policy, default free

    Returns
    -------
    ndarray
        Model values, same shape as ``x``

    Examples
    --------
    >>> x = np.arange(0, 2.01, 0.01)
    >>> y = evaluate_model('twoDomain', [1, 0.5, 0.1], x,
    ...                    Landmarks(interface_boundary_location=1),
    ...                    OffsetPolicy.fixed(0.1))
    """
    spec = get_model(kind)
    offset = offset if offset is not None else OffsetPolicy.free()
    landmarks = landmarks if landmarks is not None else Landmarks()

    p = np.asarray(p, dtype=float).ravel()
    expected = spec.n_params(offset)
    if p.size != expected:
        raise ValueError(f"Model '{spec.kind.value}' with {offset.mode} offset takes "
                         f"{expected} parameters {spec.param_names(offset)}, got {p.size}")

    x = np.asarray(x, dtype=float) - landmarks.zero_location
    landmarks = landmarks.zeroed()

    kwargs = dict(zip(spec.base_param_names, p))
    kwargs['offset'] = offset.resolve(p)
    if spec.requires_boundary:
        if not landmarks.has_boundary:
            raise MissingLandmarkError(
                f"Model '{spec.kind.value}' needs landmarks.interface_boundary_location")
        kwargs['interface_boundary'] = landmarks.interface_boundary_location

    return spec.func(x, **kwargs)


__all__ = [
    'decaying_exponential',
    'two_domain',
    'two_domain_gradual_sink',
    'unit_step',
    'split_domains',
    'combine_branches',
    'ModelKind',
    'ModelSpec',
    'MODEL_REGISTRY',
    'get_model',
    'list_models',
    'evaluate_model',
]
