"""Fitting engine for morphogen gradient profiles."""

from .fitter import GradientFitter, fit_morphogen_gradient
from .model_builder import build_model, build_params
from .optimizer import SolverStatus, SolverResult, solve_unconstrained, solve_bounded
from .results import FitResult
from .statistics import calculate_statistics, format_statistics

__all__ = [
    'GradientFitter',
    'fit_morphogen_gradient',
    'build_model',
    'build_params',
    'SolverStatus',
    'SolverResult',
    'solve_unconstrained',
    'solve_bounded',
    'FitResult',
    'calculate_statistics',
    'format_statistics',
]
