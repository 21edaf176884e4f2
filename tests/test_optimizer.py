"""Tests for the lmfit-based solvers."""

import numpy as np
import pytest

from morphofit.core.fitting.model_builder import build_model, build_params
from morphofit.core.fitting.optimizer import (
    SolverStatus,
    max_nfev_for,
    solve_bounded,
    solve_unconstrained,
)
from morphofit.core.fitting.statistics import (
    confidence_intervals_from_covariance,
    confidence_intervals_from_jacobian,
)
from morphofit.core.options import OffsetPolicy


@pytest.fixture
def exponential_setup(noisy_exponential_profile):
    x, y, _ = noisy_exponential_profile
    model = build_model('exponential')
    return model, x, y


def test_max_nfev_for():
    assert max_nfev_for(1000, 3) == 4000


class TestBuildParams:
    def test_fixed_offset_does_not_vary(self):
        model = build_model('exponential')
        params = build_params(model, 'exponential', [1.0, 0.5], OffsetPolicy.fixed(0.2))
        assert not params['offset'].vary
        assert params['offset'].value == 0.2

    def test_bounds_apply_to_varying_parameters(self):
        model = build_model('twoDomainGradualSink')
        params = build_params(model, 'twoDomainGradualSink', [1.0, 0.5, 100.0, 0.1],
                              OffsetPolicy.free(), lower=0.0)
        assert all(params[name].min == 0.0 for name in params)

    def test_wrong_seed_length(self):
        model = build_model('exponential')
        with pytest.raises(ValueError, match="needs 3 values"):
            build_params(model, 'exponential', [1.0, 0.5], OffsetPolicy.free())


class TestSolvers:
    """Unconstrained and bounded solves of the same problem."""

    def test_unconstrained_recovers_parameters(self, exponential_setup):
        model, x, y = exponential_setup
        params = build_params(model, 'exponential', [0.8, 0.4, 0.15], OffsetPolicy.free())
        solved = solve_unconstrained(model, params, x, y)

        assert solved.names == ('amplitude', 'decay_length', 'offset')
        np.testing.assert_allclose(solved.params, [1.0, 0.5, 0.2], rtol=0.05)
        assert solved.covar.shape == (3, 3)
        assert solved.residual.shape == x.shape
        assert solved.status in set(SolverStatus)

    def test_inactive_bounds_give_same_intervals(self, exponential_setup):
        model, x, y = exponential_setup
        free = OffsetPolicy.free()

        unconstrained = solve_unconstrained(
            model, build_params(model, 'exponential', [0.8, 0.4, 0.15], free), x, y)
        bounded = solve_bounded(
            model, build_params(model, 'exponential', [0.8, 0.4, 0.15], free, lower=0.0), x, y)

        np.testing.assert_allclose(bounded.params, unconstrained.params, rtol=1e-3)

        ci_cov = confidence_intervals_from_covariance(
            unconstrained.params, unconstrained.covar, x.size - 3)
        ci_jac = confidence_intervals_from_jacobian(
            bounded.params, bounded.residual, bounded.jacobian)
        np.testing.assert_allclose(np.diff(ci_jac, axis=1), np.diff(ci_cov, axis=1), rtol=0.05)

    def test_iteration_cap_is_reported(self, exponential_setup):
        model, x, y = exponential_setup
        params = build_params(model, 'exponential', [5.0, 3.0, -1.0], OffsetPolicy.free())
        solved = solve_unconstrained(model, params, x, y, max_iter=1)
        assert solved.status is SolverStatus.MAX_ITER_REACHED
        assert not solved.converged
