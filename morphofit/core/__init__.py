"""Core package initialization."""

from . import models
from . import fitting
from . import data_preprocessing
from .exceptions import MorphofitError, PreconditionError, MissingLandmarkError, DegenerateDataError
from .options import OffsetPolicy, Landmarks, FitFlags

__all__ = [
    'models',
    'fitting',
    'data_preprocessing',
    'MorphofitError',
    'PreconditionError',
    'MissingLandmarkError',
    'DegenerateDataError',
    'OffsetPolicy',
    'Landmarks',
    'FitFlags',
]
