"""
Main gradient fitter class using lmfit.
"""

import numpy as np

from ...utils.logger import log_debug, log_error, log_info, log_warning
from ..data_preprocessing import require_boundary, validate_profile, zero_coordinates
from ..exceptions import PreconditionError
from ..models import ModelKind, evaluate_model, get_model
from ..options import FitFlags, Landmarks, OffsetPolicy
from .defaults import BOUNDED_LOWER, DEFAULT_CONFIDENCE, DEFAULT_MAX_ITER
from .initializers import init_log_linear, project_to_bounds, seed_from_exponential
from .model_builder import build_model, build_params
from .optimizer import solve_bounded, solve_unconstrained
from .results import FitResult
from .statistics import (
    calculate_statistics,
    confidence_intervals_from_covariance,
    confidence_intervals_from_jacobian,
    format_statistics,
    r_squared,
)


class GradientFitter:
    """
    Fits morphogen gradient models to one measured profile.

    The decaying exponential is always fitted first; its best fit seeds
    the two-domain and two-domain-gradual-sink fits, which are
    independent of each other.

    Attributes
    ----------
    x_raw : ndarray
        Positions as given
    x : ndarray
        Positions relative to ``landmarks.zero_location``
    y : ndarray
        Measured concentrations
    offset : OffsetPolicy
        Offset policy shared by all fits
    landmarks : Landmarks
        Landmarks relative to the zero location
    max_iter : int
        Iteration cap of each fit
    confidence : float
        Confidence level of the parameter intervals
    results : dict
        FitResult per model name
    """

    def __init__(self, x_data, y_data, offset=None, landmarks=None,
                 max_iter=DEFAULT_MAX_ITER, confidence=DEFAULT_CONFIDENCE):
        """
        Initialize GradientFitter.

        Parameters
        ----------
        x_data : array_like
            Positions
        y_data : array_like
            Measured concentrations
        offset : OffsetPolicy, optional
            Offset policy, default free with min(y) as seed
        landmarks : Landmarks, optional
            Landmarks; the interface boundary is needed by the two-domain models
        max_iter : int, optional
            Iteration cap of each fit, default 1000
        confidence : float, optional
            Confidence level of the intervals, default 0.95
        """
        self.x_raw = np.asarray(x_data, dtype=float)
        self.y = np.asarray(y_data, dtype=float)
        self.offset = offset if offset is not None else OffsetPolicy.free()
        self._landmarks_raw = landmarks if landmarks is not None else Landmarks()
        self.max_iter = max_iter
        self.confidence = confidence

        self.x = self.x_raw
        self.landmarks = self._landmarks_raw
        self.results = {}
        self._solver_results = {}

    @staticmethod
    def requested_kinds(flags):
        """Model kinds fitted for the given flags, in fitting order."""
        kinds = [ModelKind.EXPONENTIAL]
        if flags.fit_two_domain:
            kinds.append(ModelKind.TWO_DOMAIN)
        if flags.fit_two_domain_gradual_sink:
            kinds.append(ModelKind.TWO_DOMAIN_GRADUAL_SINK)
        return kinds

    def validate(self, kinds):
        """
        Check the data and landmarks for fitting ``kinds``.

        Raises
        ------
        PreconditionError
            If the profile is unusable or a required landmark is missing
        """
        specs = [get_model(kind) for kind in kinds]
        n_params = max(spec.n_params(self.offset) for spec in specs)
        self.x_raw, self.y = validate_profile(self.x_raw, self.y, n_params)
        for spec in specs:
            if spec.requires_boundary:
                require_boundary(self._landmarks_raw, spec.kind.value)

    def zero_landmarks(self):
        """
        Express positions and landmarks relative to the zero location.

        Returns
        -------
        x : ndarray
            Shifted positions
        landmarks : Landmarks
            Shifted landmarks
        """
        self.x, self.landmarks = zero_coordinates(self.x_raw, self._landmarks_raw)
        return self.x, self.landmarks

    def fit(self, flags=None):
        """
        Execute the fitting procedure.

        Parameters
        ----------
        flags : FitFlags, optional
            Models to fit besides the exponential; default exponential only

        Returns
        -------
        dict
            FitResult per model name ('exponential', and 'twoDomain',
            'twoDomainGradualSink' when requested)

        Raises
        ------
        PreconditionError
            On unusable input; no partial results are returned
        """
        flags = flags if flags is not None else FitFlags()
        kinds = self.requested_kinds(flags)
        self.results = {}
        self._solver_results = {}

        try:
            self.validate(kinds)
            self.zero_landmarks()
            self.fit_exponential()
            if flags.fit_two_domain:
                self.fit_two_domain()
            if flags.fit_two_domain_gradual_sink:
                self.fit_two_domain_gradual_sink()
        except PreconditionError as exc:
            log_error("Gradient fit aborted", exc)
            self.results = {}
            raise

        return dict(self.results)

    def fit_exponential(self):
        """
        Fit the decaying exponential, seeded by log-linear regression.

        Returns
        -------
        FitResult
        """
        self._prepare(ModelKind.EXPONENTIAL)
        seed = init_log_linear(self.x, self.y, self.offset)
        return self._fit(ModelKind.EXPONENTIAL, seed, bounded=False)

    def fit_two_domain(self):
        """
        Fit the two-domain model, seeded by the exponential fit.

        Returns
        -------
        FitResult
        """
        self._prepare(ModelKind.TWO_DOMAIN)
        seed = seed_from_exponential(ModelKind.TWO_DOMAIN, self._exponential_params(), self.offset)
        return self._fit(ModelKind.TWO_DOMAIN, seed, bounded=False)

    def fit_two_domain_gradual_sink(self):
        """
        Fit the two-domain-gradual-sink model with all parameters >= 0.

        Returns
        -------
        FitResult
        """
        self._prepare(ModelKind.TWO_DOMAIN_GRADUAL_SINK)
        seed = seed_from_exponential(ModelKind.TWO_DOMAIN_GRADUAL_SINK,
                                     self._exponential_params(), self.offset)
        return self._fit(ModelKind.TWO_DOMAIN_GRADUAL_SINK, seed, bounded=True)

    def _prepare(self, kind):
        self.validate([kind])
        self.zero_landmarks()

    def _exponential_params(self):
        if ModelKind.EXPONENTIAL.value not in self.results:
            self.fit_exponential()
        return self.results[ModelKind.EXPONENTIAL.value].params

    def _fit(self, kind, seed, bounded):
        """Run one fit and assemble its FitResult."""
        spec = get_model(kind)
        model = build_model(kind)

        independent = {}
        if spec.requires_boundary:
            independent['interface_boundary'] = self.landmarks.interface_boundary_location

        log_info(f"Fitting {spec.kind.value} model ({'bounded' if bounded else 'unconstrained'})")

        if bounded:
            seed = project_to_bounds(seed, BOUNDED_LOWER)
            log_debug(f"{spec.kind.value} initial guess: {seed}")
            params = build_params(model, kind, seed, self.offset, lower=BOUNDED_LOWER)
            solved = solve_bounded(model, params, self.x, self.y, self.max_iter, **independent)
            ci = confidence_intervals_from_jacobian(
                solved.params, solved.residual, solved.jacobian, self.confidence)
        else:
            log_debug(f"{spec.kind.value} initial guess: {seed}")
            params = build_params(model, kind, seed, self.offset)
            solved = solve_unconstrained(model, params, self.x, self.y, self.max_iter, **independent)
            ci = confidence_intervals_from_covariance(
                solved.params, solved.covar, self.y.size - solved.params.size, self.confidence)

        y_fit = evaluate_model(kind, solved.params, self.x, self.landmarks, self.offset)

        result = FitResult(
            kind=spec.kind,
            param_names=spec.param_names(self.offset),
            params=solved.params,
            ci=ci,
            mse=solved.mse,
            r_squared=r_squared(self.y, y_fit),
            warning_returned=not solved.converged,
            status=solved.status,
            messages=solved.messages,
            nfev=solved.nfev,
            y_fit=y_fit,
            confidence=self.confidence,
        )

        if result.warning_returned:
            log_warning(f"{spec.kind.value} fit returned a warning ({solved.status.value}): "
                        f"{'; '.join(solved.messages)}")
        log_info(f"{spec.kind.value} fit done: {result.named()}, R² = {result.r_squared:.6f}")

        self.results[spec.kind.value] = result
        self._solver_results[spec.kind.value] = solved
        return result

    def _get_result(self, kind):
        kind = get_model(kind).kind
        if kind.value not in self.results:
            raise ValueError(f"No {kind.value} fit result available. Run fit() first.")
        return self.results[kind.value]

    def get_statistics(self, kind=ModelKind.EXPONENTIAL):
        """
        Calculate fit statistics of one model.

        Parameters
        ----------
        kind : ModelKind or str, optional
            Model, default exponential

        Returns
        -------
        stats : dict
            Dictionary containing fit quality metrics
        """
        result = self._get_result(kind)
        stats = calculate_statistics(self.y, result.y_fit, result.params.size)
        stats['model'] = result.kind.value
        stats['warning_returned'] = result.warning_returned
        stats['status'] = result.status.value
        return stats

    def get_fit_report(self, kind=ModelKind.EXPONENTIAL):
        """
        Get detailed fit report of one model.

        Returns
        -------
        str
            Fit report string
        """
        result = self._get_result(kind)
        solved = self._solver_results[result.kind.value]

        report = f"[[ MODEL: {result.kind.value} ]]\n"
        report += f"Offset: {self.offset.mode}"
        if not self.offset.is_free:
            report += f" ({self.offset.value:g})"
        report += "\n"
        if self.landmarks.has_boundary:
            report += f"Interface boundary: {self.landmarks.interface_boundary_location:g}\n"
        report += f"Status: {result.status.value}\n\n"

        report += f"[[ {result.confidence * 100:g}% CONFIDENCE INTERVALS ]]\n"
        for name, value in result.named().items():
            low, high = result.named_ci()[name]
            report += f"  {name:<24s} {value:.6g}  [{low:.6g}, {high:.6g}]\n"
        report += "\n"

        report += format_statistics(self.get_statistics(kind)) + "\n\n"
        report += solved.lmfit_result.fit_report()
        return report


def fit_morphogen_gradient(x, y, offset=None, landmarks=None, flags=None,
                           max_iter=DEFAULT_MAX_ITER, confidence=DEFAULT_CONFIDENCE):
    """
    Fit gradient models to a measured profile.

    Parameters
    ----------
    x : array_like
        Positions
    y : array_like
        Measured concentrations
    offset : OffsetPolicy, optional
        Offset policy, default free with min(y) as seed
    landmarks : Landmarks, optional
        Landmarks; ``zero_location`` shifts the origin, the interface
        boundary is needed by the two-domain models
    flags : FitFlags, optional
        Which two-domain models to fit; the exponential is always fitted
    max_iter : int, optional
        Iteration cap of each fit, default 1000
    confidence : float, optional
        Confidence level of the parameter intervals, default 0.95

    Returns
    -------
    dict
        FitResult per model name

    Examples
    --------
    >>> x = np.arange(0, 3.01, 0.02)
    >>> y = np.exp(-x / 0.5)
    >>> results = fit_morphogen_gradient(x, y, OffsetPolicy.fixed(0))
    >>> results['exponential']['decay_length']
    0.5...
    """
    fitter = GradientFitter(x, y, offset=offset, landmarks=landmarks,
                            max_iter=max_iter, confidence=confidence)
    return fitter.fit(flags)
