"""
morphofit: fitting steady-state morphogen gradient models to measured
concentration profiles.
"""

from .core.exceptions import MorphofitError, PreconditionError, MissingLandmarkError, DegenerateDataError
from .core.options import OffsetPolicy, Landmarks, FitFlags
from .core.models import (
    ModelKind,
    decaying_exponential,
    evaluate_model,
    get_model,
    list_models,
    two_domain,
    two_domain_gradual_sink,
)
from .core.fitting import GradientFitter, FitResult, SolverStatus, fit_morphogen_gradient
from .utils.logger import setup_logger

__version__ = '0.1.0'

__all__ = [
    'fit_morphogen_gradient',
    'evaluate_model',
    'decaying_exponential',
    'two_domain',
    'two_domain_gradual_sink',
    'GradientFitter',
    'FitResult',
    'SolverStatus',
    'ModelKind',
    'get_model',
    'list_models',
    'OffsetPolicy',
    'Landmarks',
    'FitFlags',
    'MorphofitError',
    'PreconditionError',
    'MissingLandmarkError',
    'DegenerateDataError',
    'setup_logger',
]
